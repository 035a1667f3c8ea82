"""ClipboardProtocol implementations."""

from typing import Optional

from PyQt6.QtGui import QClipboard, QGuiApplication


class QtClipboard:
    """
    System clipboard through Qt.

    Requires a running QGuiApplication (or QApplication).
    """

    def __init__(self, clipboard: Optional[QClipboard] = None):
        self._clipboard = clipboard

    def _get(self) -> QClipboard:
        if self._clipboard is None:
            if QGuiApplication.instance() is None:
                raise RuntimeError("QtClipboard needs a QGuiApplication instance")
            self._clipboard = QGuiApplication.clipboard()
        return self._clipboard

    def read(self) -> str:
        return self._get().text() or ""

    def write(self, text: str) -> None:
        self._get().setText(text)


class MemoryClipboard:
    """Process-local clipboard, for tests and headless use."""

    def __init__(self, text: str = ""):
        self._text = text

    def read(self) -> str:
        return self._text

    def write(self, text: str) -> None:
        self._text = text
