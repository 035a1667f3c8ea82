"""Clipboard protocol for import/export text transfer."""

from typing import Optional, Protocol


class ClipboardProtocol(Protocol):
    """Plain-text clipboard."""

    def read(self) -> str:
        """Return the clipboard text, or an empty string."""
        ...

    def write(self, text: str) -> None:
        """Replace the clipboard text."""
        ...


_clipboard: Optional[ClipboardProtocol] = None


def register_clipboard(clipboard: ClipboardProtocol) -> None:
    """Register the global clipboard implementation."""
    global _clipboard
    _clipboard = clipboard


def get_clipboard() -> Optional[ClipboardProtocol]:
    """Get the registered clipboard implementation."""
    return _clipboard
