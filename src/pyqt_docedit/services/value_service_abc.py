"""
Abstract base class for value services with auto-discovery dispatch.

Services that behave differently per value kind define one handler method per
kind, named ``{prefix}{KindClassName}``. The ABC discovers them at construction
time and ``dispatch()`` routes a ValueKind to its handler by class name.

Pattern:
    class ValueCodec(ValueServiceABC):
        def _get_handler_prefix(self) -> str:
            return '_encode_'

        def _encode_NumberKind(self, kind): ...
        def _encode_StructuredKind(self, kind): ...

A service that handles several operations keeps one handler table per prefix,
see ``_discover_handlers()``.
"""

from typing import Dict, Callable, Any
from abc import ABC, abstractmethod
import logging

from pyqt_docedit.documents.value_kinds import ValueKind, ValueKindMeta

logger = logging.getLogger(__name__)


class ValueServiceABC(ABC):
    """
    Abstract base for value services with auto-discovery dispatch.

    Subclasses must:
    1. Implement _get_handler_prefix() to return the primary method prefix
    2. Define handler methods following the naming convention {prefix}{ClassName}
    """

    def __init__(self):
        self._handlers: Dict[str, Callable] = self._discover_handlers(self._get_handler_prefix())

        if self._handlers:
            logger.debug(
                f"{self.__class__.__name__} auto-discovered handlers: "
                f"{list(self._handlers.keys())}"
            )
        else:
            logger.warning(
                f"{self.__class__.__name__} found no handlers with prefix "
                f"'{self._get_handler_prefix()}'. Did you forget to define handler methods?"
            )

    def _discover_handlers(self, prefix: str) -> Dict[str, Callable]:
        """Collect {KindClassName: bound method} for every method starting with prefix."""
        handlers: Dict[str, Callable] = {}
        for attr_name in dir(self):
            if attr_name.startswith(prefix):
                class_name = attr_name[len(prefix):]
                handler = getattr(self, attr_name)
                if callable(handler):
                    handlers[class_name] = handler
        return handlers

    @abstractmethod
    def _get_handler_prefix(self) -> str:
        """
        Return the method prefix for this service's primary handlers.

        Returns:
            Method prefix string (must include leading underscore)
        """
        pass

    def dispatch(self, kind: ValueKind, *args, **kwargs) -> Any:
        """Dispatch to the primary handler for the kind."""
        return self._dispatch_to(self._handlers, kind, *args, **kwargs)

    def _dispatch_to(self, handlers: Dict[str, Callable], kind: ValueKind, *args, **kwargs) -> Any:
        """
        Call the handler registered for the kind's class name.

        Raises:
            ValueError: If no handler found for the kind
        """
        class_name = kind.__class__.__name__
        handler = handlers.get(class_name)

        if handler is None:
            raise ValueError(
                f"No handler for {class_name} in {self.__class__.__name__}. "
                f"Available handlers: {list(handlers.keys())}."
            )

        return handler(kind, *args, **kwargs)

    def has_handler(self, kind: ValueKind) -> bool:
        """Check if a primary handler exists for the given kind."""
        return kind.__class__.__name__ in self._handlers

    def get_supported_kinds(self) -> list[str]:
        """List kind names that have primary handlers."""
        return list(self._handlers.keys())

    def missing_kinds(self) -> list[str]:
        """Registered value kinds with no primary handler. Empty when dispatch is exhaustive."""
        return [
            kind_class.__name__
            for kind_class in ValueKindMeta.get_registry()
            if kind_class.__name__ not in self._handlers
        ]
