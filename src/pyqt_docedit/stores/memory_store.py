"""In-process document store, for tests and offline editing."""

import copy
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bson import ObjectId

from pyqt_docedit.errors import StoreError
from pyqt_docedit.protocols.editor_config import get_editor_config
from pyqt_docedit.services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)


def _same_value(old: Any, new: Any) -> bool:
    # 5 and 5.0 are different stored values
    return type(old) is type(new) and old == new


class InMemoryDocumentStore:
    """
    Dict-backed implementation of DocumentStoreProtocol.

    Documents are deep-copied on the way in and out, so callers can never
    mutate stored state by accident. ``disconnect()`` makes every call raise
    StoreError, which is how tests exercise connectivity failures.
    """

    def __init__(
        self,
        collections: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None,
        id_field: Optional[str] = None,
    ):
        self._id_field = id_field or get_editor_config().id_field
        self._collections: Dict[str, List[Dict[str, Any]]] = {}
        self._connected = True
        for name, documents in (collections or {}).items():
            for document in documents:
                self.insert(name, document)

    # ========== CONNECTION ==========

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    def _check_connected(self) -> None:
        if not self._connected:
            raise StoreError("Not connected to the document store")

    def _locate(self, collection: str, identifier: Any) -> Optional[Dict[str, Any]]:
        for document in self._collections.get(collection, []):
            if IdentityResolver.matches(document.get(self._id_field), identifier):
                return document
        return None

    # ========== READS ==========

    def list_collections(self) -> List[str]:
        self._check_connected()
        return list(self._collections)

    def find(self, collection: str) -> List[Dict[str, Any]]:
        self._check_connected()
        if collection not in self._collections:
            logger.warning(f"Collection {collection!r} does not exist")
            return []
        documents = copy.deepcopy(self._collections[collection])
        logger.debug(f"Read {len(documents)} documents from {collection!r}")
        return documents

    def find_by_id(self, collection: str, identifier: Any) -> Optional[Dict[str, Any]]:
        self._check_connected()
        document = self._locate(collection, identifier)
        return copy.deepcopy(document) if document is not None else None

    def find_where(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        self._check_connected()
        return [
            copy.deepcopy(document)
            for document in self._collections.get(collection, [])
            if field in document and document[field] == value
        ]

    # ========== WRITES ==========

    def update(
        self,
        collection: str,
        identifier: Any,
        update: Mapping[str, Any],
        unset: Iterable[str] = (),
    ) -> bool:
        self._check_connected()
        unset = list(unset)
        if self._id_field in update or self._id_field in unset:
            raise StoreError(f"'{self._id_field}' is immutable")

        document = self._locate(collection, identifier)
        if document is None:
            logger.debug(f"Update matched no document in {collection!r}")
            return False

        modified = False
        for key, value in update.items():
            if key not in document or not _same_value(document[key], value):
                document[key] = copy.deepcopy(value)
                modified = True
        for key in unset:
            if key in document:
                del document[key]
                modified = True
        return modified

    def insert(self, collection: str, document: Mapping[str, Any]) -> Any:
        self._check_connected()
        stored = copy.deepcopy(dict(document))
        if self._id_field not in stored:
            # Identifier goes first, as the server would place it
            stored = {self._id_field: ObjectId(), **stored}
        self._collections.setdefault(collection, []).append(stored)
        return stored[self._id_field]

    def delete(self, collection: str, identifier: Any) -> bool:
        self._check_connected()
        document = self._locate(collection, identifier)
        if document is None:
            return False
        self._collections[collection].remove(document)
        return True
