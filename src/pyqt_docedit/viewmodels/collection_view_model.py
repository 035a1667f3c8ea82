"""
View model for the collection browser.

Holds the active collection and the documents loaded from it, and exposes
them to whatever view renders the list through Qt signals. Loads are
synchronous calls into the DocumentStore; a load requested while another is
still running is refused rather than queued.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_docedit.documents.session import EditSession, SaveOutcome, SaveStatus
from pyqt_docedit.errors import StoreError
from pyqt_docedit.protocols.clipboard import ClipboardProtocol
from pyqt_docedit.protocols.document_store import DocumentStoreProtocol, get_document_store
from pyqt_docedit.protocols.editor_config import get_editor_config
from pyqt_docedit.services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)


class CollectionViewModel(QObject):
    """
    Active collection, loaded documents, loading flag and status message.

    Signals:
        documents_changed(list): loaded documents replaced
        loading_changed(bool): a load started or finished
        status_changed(str): user-facing status text changed
        collection_changed(str): active collection switched
    """

    documents_changed = pyqtSignal(list)
    loading_changed = pyqtSignal(bool)
    status_changed = pyqtSignal(str)
    collection_changed = pyqtSignal(str)

    def __init__(
        self,
        store: Optional[DocumentStoreProtocol] = None,
        collection: Optional[str] = None,
        available_collections: Optional[List[str]] = None,
        clipboard: Optional[ClipboardProtocol] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        config = get_editor_config()
        self._store = store
        self._clipboard = clipboard
        self._active_collection = collection or config.default_collection
        self._available_collections = list(available_collections or config.available_collections)
        self._documents: List[Dict[str, Any]] = []
        self._loading = False
        self._status_message = "Not loaded"

    # ========== STATE ==========

    @property
    def active_collection(self) -> str:
        return self._active_collection

    @property
    def available_collections(self) -> List[str]:
        return list(self._available_collections)

    @property
    def documents(self) -> List[Dict[str, Any]]:
        return list(self._documents)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def status_message(self) -> str:
        return self._status_message

    def _require_store(self) -> DocumentStoreProtocol:
        store = self._store or get_document_store()
        if store is None:
            raise RuntimeError("No document store registered")
        return store

    def _set_loading(self, loading: bool) -> None:
        if self._loading != loading:
            self._loading = loading
            self.loading_changed.emit(loading)

    def _set_status(self, message: str) -> None:
        self._status_message = message
        self.status_changed.emit(message)

    def _set_documents(self, documents: List[Dict[str, Any]]) -> None:
        self._documents = documents
        self.documents_changed.emit(list(documents))

    # ========== LOADING ==========

    def reload(self) -> bool:
        """
        Re-fetch the active collection.

        Returns:
            True if documents were loaded; False if refused (load in flight)
            or the store failed
        """
        if self._loading:
            logger.debug(f"Reload of {self._active_collection!r} refused: load in flight")
            return False

        store = self._require_store()
        self._set_loading(True)
        self._set_status(f"Loading {self._active_collection}...")
        try:
            documents = store.find(self._active_collection)
        except StoreError as e:
            logger.warning(f"Failed to load {self._active_collection!r}: {e}")
            self._set_status(f"Failed to load data: {e}")
            return False
        finally:
            self._set_loading(False)

        self._set_documents(documents)
        self._set_status(f"Loaded {len(documents)} documents")
        return True

    def switch_collection(self, name: str) -> bool:
        """Make another collection active, clear the list and load it."""
        name = (name or "").strip()
        if not name:
            self._set_status("Collection name must not be empty")
            return False
        if self._loading:
            logger.debug(f"Switch to {name!r} refused: load in flight")
            return False

        self._active_collection = name
        if name not in self._available_collections:
            self._available_collections.append(name)
        self.collection_changed.emit(name)
        self._set_documents([])
        self._set_status(f"Switching to {name}...")
        return self.reload()

    # ========== LOOKUPS ==========

    def lookup(self, identifier: Any) -> Optional[Dict[str, Any]]:
        """Fetch one document of the active collection by identifier."""
        try:
            document = self._require_store().find_by_id(self._active_collection, identifier)
        except StoreError as e:
            self._set_status(f"Lookup failed: {e}")
            return None
        if document is None:
            self._set_status(f"No document with ID {IdentityResolver.normalize(identifier)}")
        return document

    def filter_by(self, field: str, value: Any) -> bool:
        """Replace the loaded documents with those whose field equals value."""
        if self._loading:
            return False
        self._set_loading(True)
        try:
            documents = self._require_store().find_where(self._active_collection, field, value)
        except StoreError as e:
            self._set_status(f"Query failed: {e}")
            return False
        finally:
            self._set_loading(False)

        self._set_documents(documents)
        self._set_status(f"Found {len(documents)} documents where {field} = {value!r}")
        return True

    # ========== EDITING ==========

    def open_document(self, document: Dict[str, Any]) -> EditSession:
        """Start an edit session on a document of the active collection."""
        return EditSession(
            document,
            self._active_collection,
            store=self._store,
            clipboard=self._clipboard,
        )

    def commit(self, session: EditSession) -> SaveOutcome:
        """Save a session, report the outcome and reload after a write."""
        outcome = session.save()
        if outcome.status is SaveStatus.SAVED:
            self.reload()
            self._set_status("Saved")
        elif outcome.status is SaveStatus.NOT_MODIFIED:
            self._set_status("Update failed: no matching document or nothing modified")
        elif outcome.status is SaveStatus.STORE_FAILED:
            self._set_status(f"Update failed: {outcome.error}")
        elif outcome.status is SaveStatus.INVALID:
            self._set_status(str(outcome.diff.first_error))
        return outcome

    def delete_document(self, identifier: Any) -> bool:
        """Delete a document of the active collection and reload."""
        try:
            deleted = self._require_store().delete(self._active_collection, identifier)
        except StoreError as e:
            self._set_status(f"Delete failed: {e}")
            return False
        if deleted:
            self.reload()
            self._set_status(f"Deleted {IdentityResolver.normalize(identifier)}")
        else:
            self._set_status("Delete failed: no matching document")
        return deleted
