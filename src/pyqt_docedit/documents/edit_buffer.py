"""Per-field display text for one document being edited."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional, TYPE_CHECKING

from pyqt_docedit.errors import EditSessionError

if TYPE_CHECKING:
    from pyqt_docedit.services.value_codec import ValueCodec

logger = logging.getLogger(__name__)


class EditBuffer:
    """
    Ordered mapping from field name to the text currently shown for it.

    The identifier field is never tracked. The set of tracked fields is fixed
    at open time; later it can only shrink (remove()).

    Usage:
        buffer = EditBuffer.from_document(document, codec, id_field="_id")
        buffer.set_text("level", "7")
    """

    def __init__(self, texts: Optional[Mapping[str, str]] = None):
        self._texts: Dict[str, str] = dict(texts or {})

    @classmethod
    def from_document(cls, document: Mapping, codec: 'ValueCodec', id_field: str) -> 'EditBuffer':
        """Seed a buffer with the encoded text of every non-identifier field."""
        texts = {
            key: codec.encode(value, field=key)
            for key, value in document.items()
            if key != id_field
        }
        logger.debug(f"EditBuffer opened with {len(texts)} fields: {list(texts)}")
        return cls(texts)

    def __contains__(self, field: object) -> bool:
        return field in self._texts

    def __iter__(self) -> Iterator[str]:
        return iter(self._texts)

    def __len__(self) -> int:
        return len(self._texts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EditBuffer):
            return NotImplemented
        return self._texts == other._texts

    def __repr__(self) -> str:
        return f"EditBuffer({self._texts!r})"

    @property
    def fields(self) -> List[str]:
        return list(self._texts)

    def get_text(self, field: str) -> str:
        if field not in self._texts:
            raise EditSessionError(f"Field '{field}' is not tracked by this buffer")
        return self._texts[field]

    def set_text(self, field: str, text: str) -> None:
        """Replace the text of a tracked field."""
        if field not in self._texts:
            raise EditSessionError(f"Field '{field}' is not tracked by this buffer")
        self._texts[field] = text

    def remove(self, field: str) -> None:
        if field not in self._texts:
            raise EditSessionError(f"Field '{field}' is not tracked by this buffer")
        del self._texts[field]

    def items(self):
        return self._texts.items()

    def snapshot(self) -> Dict[str, str]:
        """Copy of the current texts."""
        return dict(self._texts)

    def copy(self) -> 'EditBuffer':
        return EditBuffer(self._texts)
