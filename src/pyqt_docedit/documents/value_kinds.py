"""
Discriminated union types for stored field values.

A document coming out of the store is a plain dict whose values can be
anything the driver produces. The editor needs to know, per field, which
edit/validation path applies. Instead of scattering ``isinstance`` checks over
every call site, each field value is classified exactly once into a
``ValueKind`` instance, and services dispatch on the kind's class name.

Pattern:
    Instead of:
        if isinstance(value, (dict, list)):
            ...
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            ...

    Use:
        kind = classify_value("level", value)
        codec.dispatch(kind, ...)   # calls _encode_NumberKind etc.

Architecture:
    - ValueKindMeta: Metaclass that auto-registers every kind with matches()
    - ValueKindBase: Base class for all kinds
    - NullKind, BooleanKind, NumberKind, StructuredKind, TextKind
    - classify_value(): Factory that auto-selects the kind

Registration order is the match order, so TextKind (the catch-all) is
declared last.
"""

from typing import Any, List, Optional, Type, Union
from dataclasses import dataclass
from abc import ABC, ABCMeta
import logging

logger = logging.getLogger(__name__)


@dataclass
class ValueKindBase(ABC):
    """ABC for value kind objects."""
    field: Optional[str]
    original: Any


class ValueKindMeta(ABCMeta):
    """
    Metaclass for auto-registration of value kinds.

    All classes defining a matches() predicate are registered in declaration
    order for use by classify_value().
    """
    _registry: List[Type] = []

    def __new__(mcs, name, bases, namespace):
        cls = super().__new__(mcs, name, bases, namespace)

        if 'matches' in namespace and callable(namespace['matches']):
            mcs._registry.append(cls)
            logger.debug(f"Auto-registered value kind: {name}")

        return cls

    @classmethod
    def get_registry(mcs) -> List[Type]:
        """Get all registered value kinds."""
        return mcs._registry.copy()


@dataclass
class NullKind(ValueKindBase, metaclass=ValueKindMeta):
    """A missing value. Displayed as an empty string."""

    @staticmethod
    def matches(value: Any) -> bool:
        return value is None


@dataclass
class BooleanKind(ValueKindBase, metaclass=ValueKindMeta):
    """
    A boolean flag.

    Must be checked before NumberKind since bool is a subclass of int.
    """

    @staticmethod
    def matches(value: Any) -> bool:
        return isinstance(value, bool)


@dataclass
class NumberKind(ValueKindBase, metaclass=ValueKindMeta):
    """An integer or floating point number."""

    @staticmethod
    def matches(value: Any) -> bool:
        return isinstance(value, (int, float))


@dataclass
class StructuredKind(ValueKindBase, metaclass=ValueKindMeta):
    """A nested object or ordered list, edited as JSON text."""

    @staticmethod
    def matches(value: Any) -> bool:
        return isinstance(value, (dict, list))


@dataclass
class TextKind(ValueKindBase, metaclass=ValueKindMeta):
    """
    Text, and the fallback for every other stored type.

    Dates, non-identifier ObjectIds and other driver types end up here and are
    edited through their ``str()`` form.
    """

    @staticmethod
    def matches(value: Any) -> bool:
        return True


ValueKind = Union[NullKind, BooleanKind, NumberKind, StructuredKind, TextKind]


def classify_value(field: Optional[str], value: Any) -> ValueKind:
    """
    Select the ValueKind for a stored value.

    Args:
        field: Field name the value belongs to (used in validation errors)
        value: The stored value

    Returns:
        The first registered kind whose matches() accepts the value

    Examples:
        >>> type(classify_value("level", 5)).__name__
        'NumberKind'
        >>> type(classify_value("inventory", {"sword": 1})).__name__
        'StructuredKind'
    """
    for kind_class in ValueKindMeta.get_registry():
        if kind_class.matches(value):
            return kind_class(field=field, original=value)

    # TextKind matches everything
    raise ValueError(f"No matching value kind for {type(value).__name__}")
