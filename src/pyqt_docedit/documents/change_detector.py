"""
Minimal partial updates from an edited buffer.

The detector compares each buffer entry against the text its original value
encodes to. Untouched fields are skipped; touched fields are decoded back to
their original kind. A field that fails to decode is recorded and the scan
continues, so a single save attempt reports every offending field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pyqt_docedit.errors import EditSessionError, ValidationError
from pyqt_docedit.services.value_codec import ValueCodec
from .edit_buffer import EditBuffer

logger = logging.getLogger(__name__)


@dataclass
class DiffResult:
    """Outcome of one diff.

    Attributes:
        update: {field: new value} for changed fields that decoded cleanly
        errors: ValidationErrors in buffer order
        removed: Fields dropped from the document during the session
    """
    update: Dict[str, Any] = field(default_factory=dict)
    errors: List[ValidationError] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Saving is allowed only without validation errors."""
        return not self.errors

    @property
    def has_changes(self) -> bool:
        return bool(self.update) or bool(self.removed)

    @property
    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None


class ChangeDetector:
    """Diff an EditBuffer against the document it was opened from."""

    def __init__(self, codec: Optional[ValueCodec] = None):
        self._codec = codec or ValueCodec.instance()

    def diff(
        self,
        buffer: EditBuffer,
        original: Mapping[str, Any],
        removed: Iterable[str] = (),
    ) -> DiffResult:
        """
        Collect changed fields and validation errors.

        Args:
            buffer: Current edit texts
            original: Field values as they were when the session opened
            removed: Fields removed locally during the session

        Raises:
            EditSessionError: If the buffer tracks a field the original lacks
        """
        result = DiffResult(removed=list(removed))

        for key, text in buffer.items():
            if key not in original:
                raise EditSessionError(f"Buffer field '{key}' is not present in the original document")

            original_value = original[key]
            original_text = self._codec.encode(original_value, field=key)
            if text == original_text:
                continue

            decoded = self._codec.decode(text, original_value, field=key)
            if isinstance(decoded, ValidationError):
                logger.debug(f"[ChangeDetector] {key}: {decoded.reason}")
                result.errors.append(decoded)
                continue

            result.update[key] = decoded

        logger.debug(
            f"[ChangeDetector] changed={list(result.update)} "
            f"errors={[e.field for e in result.errors]} removed={result.removed}"
        )
        return result
