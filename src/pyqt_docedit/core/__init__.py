"""
Core utilities.

Clipboard implementations and persisted connection settings. No dependency on
the editing engine.
"""

from .clipboard import QtClipboard, MemoryClipboard
from .connection_settings import ConnectionSettings, ConnectionSettingsStore

__all__ = [
    "QtClipboard",
    "MemoryClipboard",
    "ConnectionSettings",
    "ConnectionSettingsStore",
]
