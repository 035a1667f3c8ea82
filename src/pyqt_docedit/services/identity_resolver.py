"""
Canonical form for document identifiers.

The same identifier reaches the editor in several shapes:

- a native ``bson.ObjectId`` (documents read from the store)
- an extended-JSON wrapper ``{"$oid": "507f..."}`` (documents exported by
  other tools)
- a plain string, possibly decorated as ``ObjectId("507f...")`` (documents
  copied from a shell or a log)

``normalize()`` reduces all of them to one comparable token. It is the only
place that knows about these encodings.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Union

from bson import ObjectId

logger = logging.getLogger(__name__)

OID_KEY = "$oid"

_OBJECT_ID_CALL = re.compile(r'^ObjectId\s*\((.*)\)$', re.DOTALL)
_QUOTES = "\"'"


def _strip_quotes(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token[0] == token[-1] and token[0] in _QUOTES:
        return token[1:-1].strip()
    return token


class IdentityResolver:
    """
    Normalize and compare identifiers regardless of encoding.

    An identifier that normalizes to an empty token never matches anything,
    not even another empty token. Mismatch is a normal outcome, reported by
    the caller; nothing here raises for bad input.
    """

    @staticmethod
    def normalize(raw: Any) -> str:
        """
        Reduce an identifier to its canonical token.

        Examples:
            >>> IdentityResolver.normalize(ObjectId("507f1f77bcf86cd799439011"))
            '507f1f77bcf86cd799439011'
            >>> IdentityResolver.normalize({"$oid": "507f1f77bcf86cd799439011"})
            '507f1f77bcf86cd799439011'
            >>> IdentityResolver.normalize('ObjectId("507f1f77bcf86cd799439011")')
            '507f1f77bcf86cd799439011'
        """
        if raw is None:
            return ""
        if isinstance(raw, ObjectId):
            return str(raw)
        if isinstance(raw, Mapping):
            if OID_KEY in raw:
                return IdentityResolver.normalize(raw[OID_KEY])
            # Compound identifiers compare by content
            return json.dumps(raw, sort_keys=True, separators=(",", ":"), default=str)
        return IdentityResolver._strip_decoration(str(raw))

    @staticmethod
    def _strip_decoration(text: str) -> str:
        token = _strip_quotes(text)
        match = _OBJECT_ID_CALL.match(token)
        if match:
            token = _strip_quotes(match.group(1))
        return token

    @staticmethod
    def matches(a: Any, b: Any) -> bool:
        """True iff both identifiers normalize to the same non-empty token."""
        token_a = IdentityResolver.normalize(a)
        token_b = IdentityResolver.normalize(b)
        if not token_a or not token_b:
            return False
        return token_a == token_b

    @staticmethod
    def to_native(raw: Any) -> Union[ObjectId, str]:
        """
        Store-side form of an identifier.

        A 24-hex token becomes an ObjectId. Other strings and wrappers are kept
        as the normalized string; numbers and other scalars pass through.
        """
        if isinstance(raw, ObjectId):
            return raw
        if raw is not None and not isinstance(raw, (str, Mapping)):
            return raw
        token = IdentityResolver.normalize(raw)
        if ObjectId.is_valid(token):
            return ObjectId(token)
        logger.debug(f"[IdentityResolver] {token!r} is not an ObjectId, keeping string form")
        return token

    @staticmethod
    def display(raw: Any) -> str:
        """Canonical display form, used when exporting a document."""
        return IdentityResolver.normalize(raw)
