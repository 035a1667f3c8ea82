"""MongoDB-backed document store."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from pyqt_docedit.core.connection_settings import ConnectionSettings
from pyqt_docedit.errors import StoreError
from pyqt_docedit.protocols.editor_config import get_editor_config
from pyqt_docedit.services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)

SERVER_SELECTION_TIMEOUT_MS = 5000


class MongoDocumentStore:
    """
    DocumentStoreProtocol over pymongo.

    Driver exceptions are re-raised as StoreError. Identifiers are converted
    with IdentityResolver.to_native, so callers may pass any encoding.

    Usage:
        store = MongoDocumentStore(ConnectionSettingsStore().load())
        store.connect()
        documents = store.find("gameconfig")
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        client_factory: Callable[..., MongoClient] = MongoClient,
        id_field: Optional[str] = None,
    ):
        self._settings = settings
        self._client_factory = client_factory
        self._id_field = id_field or get_editor_config().id_field
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    # ========== CONNECTION ==========

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def connect(self) -> None:
        """Open the client and verify the server answers."""
        logger.info(f"Connecting to {self._settings.redacted_uri()}")
        try:
            self._client = self._client_factory(
                self._settings.connection_uri(),
                serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
            )
            self._db = self._client[self._settings.database]
            self._db.command("ping")
        except PyMongoError as e:
            self.disconnect()
            raise StoreError(f"Failed to connect to {self._settings.redacted_uri()}: {e}") from e
        logger.info(f"Connected to database {self._settings.database!r}")

    def disconnect(self) -> None:
        """Close the client. Safe to call when not connected."""
        if self._client is not None:
            self._client.close()
            logger.debug("MongoDB client closed")
        self._client = None
        self._db = None

    def ping(self) -> bool:
        """True if the server answers; never raises."""
        if self._db is None:
            return False
        try:
            self._db.command("ping")
        except PyMongoError as e:
            logger.warning(f"Ping failed: {e}")
            return False
        return True

    def _database(self) -> Database:
        if self._db is None:
            raise StoreError("Not connected to the document store")
        return self._db

    def _id_filter(self, identifier: Any) -> Dict[str, Any]:
        return {self._id_field: IdentityResolver.to_native(identifier)}

    # ========== READS ==========

    def list_collections(self) -> List[str]:
        try:
            return self._database().list_collection_names()
        except PyMongoError as e:
            raise StoreError(f"Failed to list collections: {e}") from e

    def find(self, collection: str) -> List[Dict[str, Any]]:
        db = self._database()
        try:
            if collection not in db.list_collection_names():
                logger.warning(f"Collection {collection!r} does not exist")
                return []
            documents = list(db[collection].find())
        except PyMongoError as e:
            raise StoreError(f"Failed to read {collection!r}: {e}") from e
        logger.debug(f"Read {len(documents)} documents from {collection!r}")
        return documents

    def find_by_id(self, collection: str, identifier: Any) -> Optional[Dict[str, Any]]:
        id_filter = self._id_filter(identifier)
        try:
            return self._database()[collection].find_one(id_filter)
        except PyMongoError as e:
            raise StoreError(f"Failed to look up {identifier!r} in {collection!r}: {e}") from e

    def find_where(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        try:
            return list(self._database()[collection].find({field: value}))
        except PyMongoError as e:
            raise StoreError(f"Failed to query {collection!r}: {e}") from e

    # ========== WRITES ==========

    def update(
        self,
        collection: str,
        identifier: Any,
        update: Mapping[str, Any],
        unset: Iterable[str] = (),
    ) -> bool:
        operations: Dict[str, Dict[str, Any]] = {}
        if update:
            operations["$set"] = dict(update)
        unset = list(unset)
        if unset:
            operations["$unset"] = {key: "" for key in unset}
        if not operations:
            return False

        id_filter = self._id_filter(identifier)
        try:
            result = self._database()[collection].update_one(id_filter, operations)
        except PyMongoError as e:
            raise StoreError(f"Failed to update {identifier!r} in {collection!r}: {e}") from e
        logger.debug(f"Update {collection!r}: matched={result.matched_count} modified={result.modified_count}")
        return result.modified_count > 0

    def insert(self, collection: str, document: Mapping[str, Any]) -> Any:
        try:
            result = self._database()[collection].insert_one(dict(document))
        except PyMongoError as e:
            raise StoreError(f"Failed to insert into {collection!r}: {e}") from e
        return result.inserted_id

    def delete(self, collection: str, identifier: Any) -> bool:
        id_filter = self._id_filter(identifier)
        try:
            result = self._database()[collection].delete_one(id_filter)
        except PyMongoError as e:
            raise StoreError(f"Failed to delete {identifier!r} from {collection!r}: {e}") from e
        return result.deleted_count > 0
