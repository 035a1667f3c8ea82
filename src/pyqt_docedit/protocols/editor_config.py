"""Base configuration class for the document editor.

Provides hooks for applications to customize editing behavior.
"""

from typing import List, Optional
from dataclasses import dataclass, field


DEFAULT_COLLECTIONS = ["gameconfig", "playerdata", "chat"]


@dataclass
class EditorConfig:
    """Base configuration for document editing behavior.

    Attributes:
        id_field: Name of the immutable identifier field
        structured_indent: Indentation used when rendering nested objects/arrays
        settings_file: Where connection settings are persisted (None = default location)
        default_collection: Collection opened on startup
        available_collections: Collections offered for switching
    """

    id_field: str = "_id"
    structured_indent: int = 2
    settings_file: Optional[str] = None
    default_collection: str = "gameconfig"
    available_collections: List[str] = field(default_factory=lambda: list(DEFAULT_COLLECTIONS))


_editor_config: Optional[EditorConfig] = None


def set_editor_config(config: Optional[EditorConfig]) -> None:
    """Set the global editor configuration. Pass None to restore defaults."""
    global _editor_config
    _editor_config = config


def get_editor_config() -> EditorConfig:
    """Get the current editor configuration, or the defaults if none was set."""
    if _editor_config is None:
        return EditorConfig()
    return _editor_config
