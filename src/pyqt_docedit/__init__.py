"""
pyqt-docedit: typed document editing engine for schemaless stores.

Edits documents from a MongoDB-style store as per-field text and reconciles
the text back into typed partial updates.

Architecture:
- Services: ValueCodec (value <-> text, kind dispatch), IdentityResolver
- Documents: EditBuffer, ChangeDetector, DocumentReconciler, EditSession
- Protocols: DocumentStore and Clipboard contracts, EditorConfig
- Stores: in-memory and pymongo implementations
- View models: CollectionViewModel (Qt signals)

Key Features:
- Per-field kind dispatch; no scattered type checks
- Fail-soft validation that reports every bad field at once
- Identity-verified clipboard import/export
- Explicit unset of fields removed during an edit session
"""

__version__ = "0.1.0"

from .errors import (
    ValidationError,
    ImportErrorKind,
    ImportRejection,
    StoreError,
    EditSessionError,
)

__all__ = [
    "__version__",
    "ValidationError",
    "ImportErrorKind",
    "ImportRejection",
    "StoreError",
    "EditSessionError",
]
