"""
Export and import of whole documents as JSON text.

Export turns the live edit state into a complete document, decoding each
buffer entry against its original value. Import goes the other way: a
document pasted from elsewhere is checked against the live document's
identifier, then its fields are re-encoded into the buffer. Import never
adds fields; anything the buffer does not already track is ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pyqt_docedit.errors import ImportErrorKind, ImportRejection, ValidationError
from pyqt_docedit.protocols.editor_config import get_editor_config
from pyqt_docedit.services.identity_resolver import IdentityResolver
from pyqt_docedit.services.value_codec import ValueCodec
from .edit_buffer import EditBuffer

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of an import attempt.

    Exactly one of ``buffer`` and ``rejection`` is set.
    """
    buffer: Optional[EditBuffer] = None
    rejection: Optional[ImportRejection] = None
    applied: List[str] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.rejection is None


class DocumentReconciler:
    """Build exportable snapshots and merge imported documents into a buffer."""

    def __init__(
        self,
        codec: Optional[ValueCodec] = None,
        resolver: Optional[IdentityResolver] = None,
        id_field: Optional[str] = None,
    ):
        self._codec = codec or ValueCodec.instance()
        self._resolver = resolver or IdentityResolver()
        self._id_field = id_field or get_editor_config().id_field

    @property
    def id_field(self) -> str:
        return self._id_field

    # ========== EXPORT ==========

    def export_snapshot(self, document: Mapping[str, Any], buffer: EditBuffer) -> Dict[str, Any]:
        """
        Full document from the current edit state.

        The identifier comes first, in its canonical display form. Fields
        whose text does not decode are exported as trimmed raw text instead of
        failing the export.
        """
        snapshot: Dict[str, Any] = {
            self._id_field: self._resolver.display(document.get(self._id_field)),
        }
        for key, text in buffer.items():
            decoded = self._codec.decode(text, document.get(key), field=key)
            if isinstance(decoded, ValidationError):
                logger.debug(f"[Reconciler] export: {key} kept as raw text ({decoded.reason})")
                snapshot[key] = text.strip()
            else:
                snapshot[key] = decoded
        return snapshot

    def export_text(self, document: Mapping[str, Any], buffer: EditBuffer) -> str:
        """Snapshot rendered as indented JSON, ready for the clipboard."""
        return self._codec.render_structured(self.export_snapshot(document, buffer))

    # ========== IMPORT ==========

    def import_snapshot(
        self,
        raw_text: str,
        document: Mapping[str, Any],
        buffer: EditBuffer,
    ) -> ImportResult:
        """
        Merge a pasted document into the buffer after identity verification.

        The buffer is only mutated when the import is accepted.
        """
        imported = self._parse(raw_text)
        if isinstance(imported, ImportRejection):
            return ImportResult(rejection=imported)

        imported_id = imported.get(self._id_field)
        current_id = document.get(self._id_field)
        if not self._resolver.matches(imported_id, current_id):
            rejection = ImportRejection(
                kind=ImportErrorKind.IDENTITY_MISMATCH,
                message="Document ID does not match, import refused",
                imported_id=self._resolver.normalize(imported_id),
                current_id=self._resolver.normalize(current_id),
            )
            logger.warning(
                f"[Reconciler] import refused: {rejection.imported_id!r} != {rejection.current_id!r}"
            )
            return ImportResult(rejection=rejection)

        result = ImportResult(buffer=buffer)
        for key, value in imported.items():
            if key == self._id_field:
                continue
            if key not in buffer:
                result.ignored.append(key)
                continue
            buffer.set_text(key, self._codec.encode(value, field=key))
            result.applied.append(key)

        logger.debug(f"[Reconciler] imported fields={result.applied} ignored={result.ignored}")
        return result

    def _parse(self, raw_text: Optional[str]):
        if not raw_text or not raw_text.strip():
            return ImportRejection(ImportErrorKind.MALFORMED_INPUT, "Clipboard is empty")
        try:
            parsed = json.loads(raw_text)
        except (ValueError, RecursionError) as e:
            return ImportRejection(ImportErrorKind.MALFORMED_INPUT, f"Clipboard content is not valid JSON: {e}")
        if not isinstance(parsed, dict):
            return ImportRejection(
                ImportErrorKind.MALFORMED_INPUT,
                f"Expected a JSON object, got {type(parsed).__name__}",
            )
        return parsed
