"""Document store protocol for pluggable storage backends."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol


class DocumentStoreProtocol(Protocol):
    """
    Protocol for the store the editor reads from and writes to.

    Connectivity failures raise StoreError. A collection that does not exist
    is not an error: it reads as empty.
    """

    def list_collections(self) -> List[str]:
        """Return the names of existing collections."""
        ...

    def find(self, collection: str) -> List[Dict[str, Any]]:
        """Return every document of a collection, in store order."""
        ...

    def find_by_id(self, collection: str, identifier: Any) -> Optional[Dict[str, Any]]:
        """Return the document with the given identifier, or None."""
        ...

    def find_where(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        """Return documents whose field equals value."""
        ...

    def update(
        self,
        collection: str,
        identifier: Any,
        update: Mapping[str, Any],
        unset: Iterable[str] = (),
    ) -> bool:
        """Set fields and remove fields. True iff at least one field was modified."""
        ...

    def insert(self, collection: str, document: Mapping[str, Any]) -> Any:
        """Insert a document and return its identifier."""
        ...

    def delete(self, collection: str, identifier: Any) -> bool:
        """Delete a document. True iff one was removed."""
        ...


_document_store: Optional[DocumentStoreProtocol] = None


def register_document_store(store: DocumentStoreProtocol) -> None:
    """Register the global document store."""
    global _document_store
    _document_store = store


def get_document_store() -> Optional[DocumentStoreProtocol]:
    """Get the registered document store."""
    return _document_store
