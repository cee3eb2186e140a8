"""
Editor Surfaces — the text buffer an auto-link session reads and writes.

Every write notifies subscribed listeners so that downstream observers
(form state, live preview, file watchers) see the new content.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], None]


class EditorSurface(Protocol):
    """Read/write access to the document being edited."""

    def read(self) -> str:
        ...

    def write(self, text: str) -> None:
        ...


class NoEditableSurfaceError(RuntimeError):
    """Raised when a session has no text buffer to work on."""

    def __init__(self) -> None:
        super().__init__("No editable text surface attached")


class _NotifyingSurface:
    """Listener bookkeeping shared by the concrete surfaces."""

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def _notify(self, text: str) -> None:
        for listener in self._listeners:
            listener(text)


class TextBufferSurface(_NotifyingSurface):
    """In-memory buffer."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self._text = text

    def read(self) -> str:
        return self._text

    def write(self, text: str) -> None:
        self._text = text
        self._notify(text)


class FileSurface(_NotifyingSurface):
    """
    A UTF-8 text file on disk.

    Args:
        path: File read by ``read()``.
        output_path: File written by ``write()``; defaults to *path*.
    """

    def __init__(self, path: Path | str, output_path: Path | str | None = None) -> None:
        super().__init__()
        self.path = Path(path)
        self.output_path = Path(output_path) if output_path is not None else self.path

    def read(self) -> str:
        # newline="" keeps \r\n intact so an undo restores the exact bytes
        with open(self.path, encoding="utf-8", newline="") as f:
            return f.read()

    def write(self, text: str) -> None:
        with open(self.output_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.debug("Wrote %d chars to %s", len(text), self.output_path)
        self._notify(text)
