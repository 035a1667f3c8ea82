"""
Collaborator protocols and global configuration hooks.

The engine depends on these contracts only; applications register concrete
implementations at startup.
"""

from .document_store import DocumentStoreProtocol, register_document_store, get_document_store
from .clipboard import ClipboardProtocol, register_clipboard, get_clipboard
from .editor_config import EditorConfig, DEFAULT_COLLECTIONS, set_editor_config, get_editor_config

__all__ = [
    "DocumentStoreProtocol",
    "register_document_store",
    "get_document_store",
    "ClipboardProtocol",
    "register_clipboard",
    "get_clipboard",
    "EditorConfig",
    "DEFAULT_COLLECTIONS",
    "set_editor_config",
    "get_editor_config",
]
