"""
Name Inventory — paginated retrieval of known page titles.

The retrieval loop is sequential and bounded: it stops when a page has no
continuation cursor or after ``max_pages`` requests, whichever comes first.
A failing page ends the loop early and the names gathered so far are
returned; there is no retry.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Protocol, Set

import httpx
from jsonschema import validate

from autolink.config.constants import DEFAULT_NAMESPACE, MAX_INVENTORY_PAGES
from autolink.config.schemas import ALLPAGES_RESPONSE_SCHEMA
from autolink.config.settings import AUTOLINK_HTTP_TIMEOUT
from autolink.models.inventory_io import InventoryPage
from autolink.session.metrics import record_inventory_failure, record_inventory_page

logger = logging.getLogger(__name__)


class NameInventoryProvider(Protocol):
    """Anything that can hand out known names one page at a time."""

    async def fetch_page(self, cursor: Optional[str] = None) -> InventoryPage:
        ...


class InventoryError(RuntimeError):
    """Raised when the wiki API answers with an error payload."""


# ---------------------------------------------------------------------------
# MediaWiki API
# ---------------------------------------------------------------------------

class MediaWikiInventoryProvider:
    """Lists page titles of one namespace through ``list=allpages``."""

    def __init__(
        self,
        api_url: str,
        *,
        namespace: int = DEFAULT_NAMESPACE,
        client: httpx.AsyncClient | None = None,
        timeout: float = AUTOLINK_HTTP_TIMEOUT,
    ) -> None:
        self._api_url = api_url
        self._namespace = namespace
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client: bool = client is None

    async def fetch_page(self, cursor: Optional[str] = None) -> InventoryPage:
        """
        Fetch one page of titles.

        Raises:
            httpx.HTTPError: Transport failure or non-success status.
            jsonschema.ValidationError: Payload does not look like allpages.
            InventoryError: The API returned an ``error`` object.
        """
        params = {
            "action": "query",
            "list": "allpages",
            "aplimit": "max",
            "apnamespace": str(self._namespace),
            "format": "json",
            "origin": "*",
        }
        if cursor:
            params["apcontinue"] = cursor

        response = await self._client.get(self._api_url, params=params)
        response.raise_for_status()
        data = response.json()

        validate(instance=data, schema=ALLPAGES_RESPONSE_SCHEMA)
        if "error" in data:
            error = data["error"]
            raise InventoryError(f"{error.get('code', 'unknown')}: {error.get('info', '')}")

        titles = [page["title"] for page in data.get("query", {}).get("allpages", [])]
        next_cursor = data.get("continue", {}).get("apcontinue")
        return InventoryPage(names=titles, next_cursor=next_cursor)

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()


# ---------------------------------------------------------------------------
# Static source (names file, fixtures)
# ---------------------------------------------------------------------------

class StaticInventoryProvider:
    """Serves a fixed collection of names as a single page."""

    def __init__(self, names: Iterable[str]):
        self._names = list(names)

    @classmethod
    def from_file(cls, path: Path | str) -> "StaticInventoryProvider":
        """One name per line; blank lines are ignored."""
        with open(path, encoding="utf-8") as f:
            return cls(line.strip() for line in f if line.strip())

    async def fetch_page(self, cursor: Optional[str] = None) -> InventoryPage:  # noqa: ARG002
        return InventoryPage(names=self._names)


# ---------------------------------------------------------------------------
# Retrieval loop
# ---------------------------------------------------------------------------

async def fetch_all_names(
    provider: NameInventoryProvider,
    *,
    max_pages: int = MAX_INVENTORY_PAGES,
    on_failure: Optional[Callable[[Exception], None]] = None,
) -> Set[str]:
    """
    Collect every name the provider knows about.

    Args:
        provider: Page source.
        max_pages: Hard cap on the number of requests.
        on_failure: Called with the exception when a page fetch fails.

    Returns:
        Deduplicated names; partial if a page failed.
    """
    names: Set[str] = set()
    cursor: Optional[str] = None

    for request_count in range(1, max_pages + 1):
        try:
            page = await provider.fetch_page(cursor)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Name inventory page %d failed, keeping %d names: %s",
                request_count, len(names), exc,
            )
            record_inventory_failure()
            if on_failure is not None:
                on_failure(exc)
            return names

        record_inventory_page()
        names.update(page.names)
        cursor = page.next_cursor
        if not cursor:
            break
    else:
        logger.warning(
            "Name inventory stopped at the %d page cap with a pending cursor", max_pages
        )

    logger.info("Loaded %d names", len(names))
    return names
