"""
Auto-Link Session — owns the state of one editing session.

State held here (and nowhere else):
    - the cached name universe (fetched once, dropped by reload_names())
    - the single undo snapshot of the buffer before the last run
    - the in-flight flag that refuses overlapping runs

Flow of auto_link():
    1. Refuse if no surface or a run is already in flight
    2. Snapshot the buffer
    3. Load names (session cache → name cache → provider)
    4. Annotate and write the result back to the surface
"""
import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Literal, Optional

from autolink.config.constants import MAX_INVENTORY_PAGES, NOTIFY_LEVELS
from autolink.inventory.name_cache import NullNameCache
from autolink.inventory.provider import NameInventoryProvider, fetch_all_names
from autolink.linking.engine import AnnotationEngine, annotation_engine
from autolink.models.annotation_result import AnnotationResult
from autolink.session.editor import EditorSurface, NoEditableSurfaceError
from autolink.session.metrics import (
    record_links_inserted,
    record_rejection,
    timed_stage,
)

logger = logging.getLogger(__name__)
notify_logger = logging.getLogger("autolink.notify")

Notifier = Callable[[str, str], None]

_LOG_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def log_notifier(message: str, level: str = "info") -> None:
    """Default notifier: route user-facing messages to the log."""
    notify_logger.log(_LOG_LEVELS.get(level, logging.INFO), message)


@dataclass
class SessionOutcome:
    """Result of an auto_link() or undo() request."""

    status: Literal["success", "rejected", "noop"]
    message: str
    inserted_count: int = 0
    result: Optional[AnnotationResult] = None


class AutoLinkSession:
    """
    One editing session over a single surface.

    Args:
        surface: Buffer to annotate; None models a host without an editor.
        provider: Source of known names.
        name_cache: Optional shared cache (RedisNameCache).
        engine: AnnotationEngine. Defaults to the module-level engine.
        notifier: Function(message, level) for user-facing notices.
        max_pages: Cap on inventory requests.
    """

    def __init__(
        self,
        *,
        surface: Optional[EditorSurface],
        provider: NameInventoryProvider,
        name_cache=None,
        engine: Optional[AnnotationEngine] = None,
        notifier: Optional[Notifier] = None,
        max_pages: int = MAX_INVENTORY_PAGES,
    ):
        self.surface = surface
        self.provider = provider
        self.name_cache = name_cache if name_cache is not None else NullNameCache()
        self.engine = engine if engine is not None else annotation_engine
        self.notifier = notifier if notifier is not None else log_notifier
        self.max_pages = max_pages

        self._names: Optional[FrozenSet[str]] = None
        self._snapshot: Optional[str] = None
        self._processing = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    @property
    def names(self) -> FrozenSet[str]:
        return self._names or frozenset()

    def _notify(self, message: str, level: str) -> None:
        assert level in NOTIFY_LEVELS
        self.notifier(message, level)

    # ------------------------------------------------------------------
    # Name universe
    # ------------------------------------------------------------------

    async def ensure_names(self) -> FrozenSet[str]:
        """
        Return the name universe, loading it on first use.

        An empty universe counts as not loaded, so a session whose first
        retrieval failed outright tries again on the next run.
        """
        if self._names:
            return self._names

        cached = self.name_cache.load()
        if cached:
            self._names = frozenset(cached)
            return self._names

        self._notify("Loading the list of known pages...", "info")
        with timed_stage("fetch_names"):
            names = await fetch_all_names(
                self.provider,
                max_pages=self.max_pages,
                on_failure=self._on_inventory_failure,
            )
        self._names = frozenset(names)
        if self._names:
            self.name_cache.store(self._names)
        return self._names

    def _on_inventory_failure(self, exc: Exception) -> None:
        self._notify(f"Failed to load the page list: {exc}", "error")

    def reload_names(self) -> None:
        """Forget the cached names; the next run fetches them again."""
        self._names = None
        self.name_cache.clear()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def auto_link(self) -> SessionOutcome:
        """
        Annotate the surface content in place.

        Raises:
            NoEditableSurfaceError: The session has no surface.
        """
        if self._processing:
            record_rejection("concurrent_invocation")
            self._notify("Already processing, please wait...", "warn")
            return SessionOutcome(status="rejected", message="already processing")

        if self.surface is None:
            self._notify("No edit box found", "error")
            raise NoEditableSurfaceError()

        self._processing = True
        self._notify("Processing, please wait...", "info")
        try:
            self._snapshot = self.surface.read()
            names = await self.ensure_names()

            with timed_stage("annotate"):
                result = self.engine.annotate(self._snapshot, names)

            self.surface.write(result.text)
        except Exception as exc:
            self._notify(f"Auto-link failed: {exc}", "error")
            raise
        finally:
            self._processing = False

        record_links_inserted(result.inserted_count)
        message = f"Auto-link complete: {result.inserted_count} links added"
        self._notify(message, "success")
        logger.info("%s (%d names known)", message, len(names))
        return SessionOutcome(
            status="success",
            message=message,
            inserted_count=result.inserted_count,
            result=result,
        )

    def undo(self) -> SessionOutcome:
        """
        Overwrite the surface with the snapshot taken by the last run.

        Only one level is kept; the snapshot is consumed by a successful undo.

        Raises:
            NoEditableSurfaceError: The session has no surface.
        """
        if self.surface is None:
            self._notify("No edit box found", "error")
            raise NoEditableSurfaceError()

        if self._snapshot is None:
            record_rejection("empty_undo")
            self._notify("Nothing to undo", "warn")
            return SessionOutcome(status="noop", message="nothing to undo")

        self.surface.write(self._snapshot)
        self._snapshot = None
        self._notify("Auto-link undone", "success")
        return SessionOutcome(status="success", message="auto-link undone")

    async def aclose(self) -> None:
        """End the session: drop its state and close the provider if possible."""
        self._names = None
        self._snapshot = None
        aclose = getattr(self.provider, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "AutoLinkSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
