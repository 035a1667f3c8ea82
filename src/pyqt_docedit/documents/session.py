"""
Edit session for a single document.

An EditSession owns one document snapshot and its EditBuffer from the moment
the document is opened until it is saved or discarded. It is the only object
that talks to the DocumentStore and Clipboard collaborators on behalf of the
engine; the detector and reconciler stay pure.

State machine:
    EDITING -> SAVING -> CLOSED            (saved, or nothing to save)
                      -> EDITING           (validation errors, store failure)
    EDITING -> IMPORTING -> EDITING        (import accepted)
                         -> REJECTED       (import refused, buffer untouched)

REJECTED behaves like EDITING for every further operation.

Removed fields: remove_field() drops the key from the session document and
buffer. The key never appears in the partial update; it is sent to the store
as an explicit unset on the next save.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pyqt_docedit.errors import EditSessionError, StoreError, ValidationError
from pyqt_docedit.protocols.clipboard import ClipboardProtocol, get_clipboard
from pyqt_docedit.protocols.document_store import DocumentStoreProtocol, get_document_store
from pyqt_docedit.protocols.editor_config import get_editor_config
from pyqt_docedit.services.identity_resolver import IdentityResolver
from pyqt_docedit.services.value_codec import ValueCodec
from .change_detector import ChangeDetector, DiffResult
from .edit_buffer import EditBuffer
from .reconciler import DocumentReconciler, ImportResult

logger = logging.getLogger(__name__)


class SessionState(Enum):
    EDITING = "editing"
    SAVING = "saving"
    IMPORTING = "importing"
    REJECTED = "rejected"
    CLOSED = "closed"


_EDITABLE_STATES = (SessionState.EDITING, SessionState.REJECTED)


class SaveStatus(Enum):
    SAVED = "saved"                  # store reported a modification
    NOT_MODIFIED = "not_modified"    # write issued, store changed nothing
    NO_CHANGES = "no_changes"        # nothing to write
    INVALID = "invalid"              # validation errors, no write
    STORE_FAILED = "store_failed"    # store raised, session still editing


@dataclass
class SaveOutcome:
    """Result of EditSession.save()."""
    status: SaveStatus
    diff: DiffResult
    error: Optional[StoreError] = None

    @property
    def closed(self) -> bool:
        return self.status in (SaveStatus.SAVED, SaveStatus.NOT_MODIFIED, SaveStatus.NO_CHANGES)

    @property
    def errors(self) -> List[ValidationError]:
        return self.diff.errors


class EditSession:
    """
    One document opened for editing.

    Usage:
        session = EditSession(document, "gameconfig", store=store, clipboard=clipboard)
        session.set_text("level", "7")
        outcome = session.save()
        if outcome.status is SaveStatus.INVALID:
            show(outcome.errors)
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        collection: str,
        store: Optional[DocumentStoreProtocol] = None,
        clipboard: Optional[ClipboardProtocol] = None,
        codec: Optional[ValueCodec] = None,
        id_field: Optional[str] = None,
    ):
        self._id_field = id_field or get_editor_config().id_field
        if self._id_field not in document:
            raise EditSessionError(f"Document has no '{self._id_field}' field")

        self._codec = codec or ValueCodec.instance()
        self._document: Dict[str, Any] = copy.deepcopy(dict(document))
        self._collection = collection
        self._store = store
        self._clipboard = clipboard
        self._detector = ChangeDetector(self._codec)
        self._reconciler = DocumentReconciler(self._codec, id_field=self._id_field)
        self._buffer = EditBuffer.from_document(self._document, self._codec, self._id_field)
        self._removed: List[str] = []
        self._state = SessionState.EDITING

    # ========== STATE ==========

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def document(self) -> Mapping[str, Any]:
        """Read-only view of the session's document (original values, minus removed fields)."""
        return MappingProxyType(self._document)

    @property
    def buffer(self) -> EditBuffer:
        return self._buffer

    @property
    def identifier(self) -> Any:
        return self._document[self._id_field]

    @property
    def removed_fields(self) -> List[str]:
        return list(self._removed)

    @property
    def is_open(self) -> bool:
        return self._state is not SessionState.CLOSED

    def _require_editable(self, action: str) -> None:
        if self._state not in _EDITABLE_STATES:
            raise EditSessionError(f"Cannot {action} while session is {self._state.value}")

    # ========== FIELD EDITING ==========

    def get_text(self, key: str) -> str:
        return self._buffer.get_text(key)

    def set_text(self, key: str, text: str) -> None:
        self._require_editable("edit")
        if key == self._id_field:
            raise EditSessionError(f"'{self._id_field}' is immutable")
        self._buffer.set_text(key, text)

    def is_structured(self, key: str) -> bool:
        return self._codec.is_structured(self._document.get(key))

    def validate_field(self, key: str) -> Optional[ValidationError]:
        """Check the current text of one field against its original kind."""
        decoded = self._codec.decode(self._buffer.get_text(key), self._document[key], field=key)
        return decoded if isinstance(decoded, ValidationError) else None

    def format_field(self, key: str) -> Optional[ValidationError]:
        """Re-indent the JSON text of a structured field in place."""
        self._require_editable("format")
        formatted = self._codec.format_structured_text(self._buffer.get_text(key), field=key)
        if isinstance(formatted, ValidationError):
            return formatted
        self._buffer.set_text(key, formatted)
        return None

    def remove_field(self, key: str) -> None:
        """Drop a field from the session. Storage is touched only on save."""
        self._require_editable("remove a field")
        if key == self._id_field:
            raise EditSessionError(f"'{self._id_field}' cannot be removed")
        self._buffer.remove(key)
        del self._document[key]
        self._removed.append(key)
        logger.debug(f"[EditSession] removed field {key!r}")

    # ========== SAVE ==========

    def diff(self) -> DiffResult:
        return self._detector.diff(self._buffer, self._document, removed=self._removed)

    def save(self) -> SaveOutcome:
        """
        Validate, diff and write the changes.

        A store failure is reported in the outcome; the buffer and document are
        left exactly as they were so the user can retry.
        """
        self._require_editable("save")
        self._state = SessionState.SAVING
        next_state = SessionState.EDITING
        try:
            diff = self.diff()
            if not diff.is_valid:
                logger.debug(f"[EditSession] save blocked by {len(diff.errors)} validation error(s)")
                return SaveOutcome(SaveStatus.INVALID, diff)

            if not diff.has_changes:
                next_state = SessionState.CLOSED
                return SaveOutcome(SaveStatus.NO_CHANGES, diff)

            store = self._store or get_document_store()
            if store is None:
                raise EditSessionError("No document store registered")

            try:
                modified = store.update(
                    self._collection,
                    IdentityResolver.to_native(self.identifier),
                    diff.update,
                    unset=diff.removed,
                )
            except StoreError as e:
                logger.warning(f"[EditSession] save failed for {IdentityResolver.normalize(self.identifier)}: {e}")
                return SaveOutcome(SaveStatus.STORE_FAILED, diff, error=e)

            next_state = SessionState.CLOSED
            status = SaveStatus.SAVED if modified else SaveStatus.NOT_MODIFIED
            logger.info(f"[EditSession] {self._collection}/{IdentityResolver.normalize(self.identifier)}: {status.value}")
            return SaveOutcome(status, diff)
        finally:
            self._state = next_state

    def discard(self) -> None:
        """Close without writing."""
        self._state = SessionState.CLOSED

    # ========== IMPORT / EXPORT ==========

    def _require_clipboard(self) -> ClipboardProtocol:
        clipboard = self._clipboard or get_clipboard()
        if clipboard is None:
            raise EditSessionError("No clipboard registered")
        return clipboard

    def export_snapshot(self) -> Dict[str, Any]:
        return self._reconciler.export_snapshot(self._document, self._buffer)

    def export_text(self) -> str:
        return self._reconciler.export_text(self._document, self._buffer)

    def export_to_clipboard(self) -> str:
        """Copy the whole document, with current edits, to the clipboard."""
        text = self.export_text()
        self._require_clipboard().write(text)
        return text

    def copy_field(self, key: str) -> str:
        """Copy one field's current text to the clipboard."""
        text = self._buffer.get_text(key)
        self._require_clipboard().write(text)
        return text

    def import_text(self, raw_text: str) -> ImportResult:
        """Merge a pasted document into the buffer after identity verification."""
        self._require_editable("import")
        self._state = SessionState.IMPORTING
        result = None
        try:
            result = self._reconciler.import_snapshot(raw_text, self._document, self._buffer)
        finally:
            self._state = SessionState.EDITING if result is None or result.ok else SessionState.REJECTED
        return result

    def import_from_clipboard(self) -> ImportResult:
        return self.import_text(self._require_clipboard().read())
