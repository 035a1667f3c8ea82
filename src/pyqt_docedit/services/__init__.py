"""
Service layer for value conversion and identifier handling.

Framework-agnostic; nothing here touches Qt or the store.
"""

from .value_service_abc import ValueServiceABC
from .value_codec import ValueCodec, parse_number
from .identity_resolver import IdentityResolver

__all__ = [
    "ValueServiceABC",
    "ValueCodec",
    "parse_number",
    "IdentityResolver",
]
