"""
Type-aware conversion between stored values and editable text.

Every field of a document is edited as text. The codec renders a stored value
as display text and coerces edited text back to a value of the same kind as
the original:

- Null        -> ""                      ("" decodes back to None)
- Boolean     -> "true" / "false"
- Number      -> str(value)              (int first, then float on decode)
- Structured  -> indented JSON           (must decode to an object or array)
- Text        -> str(value)              (trimmed on decode, never fails)

Decoding never raises for bad input: it returns a ValidationError instead, so
callers can collect errors across fields.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Callable, Optional, Union

from pyqt_docedit.documents.value_kinds import (
    ValueKind,
    NullKind,
    BooleanKind,
    NumberKind,
    StructuredKind,
    TextKind,
    classify_value,
)
from pyqt_docedit.errors import ValidationError
from pyqt_docedit.protocols.editor_config import get_editor_config
from .value_service_abc import ValueServiceABC

logger = logging.getLogger(__name__)

MALFORMED_STRUCTURED = "malformed structured value"
EXPECTED_NUMBER = "expected numeric value"
EXPECTED_BOOLEAN = "expected boolean value"

DecodeResult = Union[Any, ValidationError]


def parse_number(text: str) -> Optional[Union[int, float]]:
    """
    Parse a trimmed numeric literal, integer first.

    Returns None when the text is not a number. Digit-group underscores are
    rejected even though Python's own parsers accept them.
    """
    if not text or '_' in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


class ValueCodec(ValueServiceABC):
    """
    Encode stored values as text and decode edited text back.

    Examples:
        codec = ValueCodec.instance()

        codec.encode({"sword": 1})
        # '{\\n  "sword": 1\\n}'

        codec.decode("7", 5, field="level")
        # 7

        codec.decode("abc", 5, field="level")
        # ValidationError(field='level', reason='expected numeric value')
    """

    _instance: Optional['ValueCodec'] = None

    def __init__(self, indent: Optional[int] = None):
        self._indent = indent
        super().__init__()
        self._decode_handlers: Dict[str, Callable] = self._discover_handlers('_decode_')

    @classmethod
    def instance(cls) -> 'ValueCodec':
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _get_handler_prefix(self) -> str:
        return '_encode_'

    @property
    def indent(self) -> int:
        return self._indent if self._indent is not None else get_editor_config().structured_indent

    # ========== PUBLIC API ==========

    def encode(self, value: Any, field: Optional[str] = None) -> str:
        """Render a stored value as display text."""
        return self.dispatch(classify_value(field, value))

    def decode(self, text: str, original: Any, field: Optional[str] = None) -> DecodeResult:
        """
        Coerce edited text back to the kind of the original value.

        Args:
            text: Edited display text
            original: The value the field held when the document was opened
            field: Field name, reported in any ValidationError

        Returns:
            The decoded value, or a ValidationError
        """
        kind = classify_value(field, original)
        return self._dispatch_to(self._decode_handlers, kind, text)

    def is_structured(self, value: Any) -> bool:
        return isinstance(classify_value(None, value), StructuredKind)

    def render_structured(self, value: Any) -> str:
        """Indented JSON in insertion key order. Non-JSON leaves fall back to str()."""
        return json.dumps(value, indent=self.indent, ensure_ascii=False, default=str)

    def validate_structured_text(self, text: str) -> Optional[str]:
        """
        Check that text parses as JSON.

        Returns:
            None when valid (empty text counts as valid), else the parser message
        """
        if not text.strip():
            return None
        try:
            json.loads(text)
        except (ValueError, RecursionError) as e:
            return str(e)
        return None

    def format_structured_text(self, text: str, field: Optional[str] = None) -> Union[str, ValidationError]:
        """Re-indent JSON text, or report why it cannot be parsed."""
        try:
            parsed = json.loads(text)
        except (ValueError, RecursionError) as e:
            return ValidationError(field, MALFORMED_STRUCTURED, str(e))
        return self.render_structured(parsed)

    # ========== ENCODE HANDLERS ==========

    def _encode_NullKind(self, kind: NullKind) -> str:
        return ""

    def _encode_BooleanKind(self, kind: BooleanKind) -> str:
        return "true" if kind.original else "false"

    def _encode_NumberKind(self, kind: NumberKind) -> str:
        return str(kind.original)

    def _encode_StructuredKind(self, kind: StructuredKind) -> str:
        return self.render_structured(kind.original)

    def _encode_TextKind(self, kind: TextKind) -> str:
        return str(kind.original)

    # ========== DECODE HANDLERS ==========

    def _decode_NullKind(self, kind: NullKind, text: str) -> DecodeResult:
        stripped = text.strip()
        return None if stripped == "" else stripped

    def _decode_BooleanKind(self, kind: BooleanKind, text: str) -> DecodeResult:
        lowered = text.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        logger.debug(f"[ValueCodec] {kind.field}: {text!r} is not a boolean")
        return ValidationError(kind.field, EXPECTED_BOOLEAN)

    def _decode_NumberKind(self, kind: NumberKind, text: str) -> DecodeResult:
        number = parse_number(text.strip())
        if number is None:
            logger.debug(f"[ValueCodec] {kind.field}: {text!r} is not numeric")
            return ValidationError(kind.field, EXPECTED_NUMBER)
        return number

    def _decode_StructuredKind(self, kind: StructuredKind, text: str) -> DecodeResult:
        try:
            parsed = json.loads(text)
        except (ValueError, RecursionError) as e:
            logger.debug(f"[ValueCodec] {kind.field}: JSON parse failed: {e}")
            return ValidationError(kind.field, MALFORMED_STRUCTURED, str(e))

        if not isinstance(parsed, (dict, list)):
            return ValidationError(kind.field, MALFORMED_STRUCTURED, "expected a JSON object or array")
        return parsed

    def _decode_TextKind(self, kind: TextKind, text: str) -> DecodeResult:
        return text.strip()
