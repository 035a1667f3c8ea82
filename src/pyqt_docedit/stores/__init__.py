"""DocumentStoreProtocol implementations."""

from .memory_store import InMemoryDocumentStore
from .mongo_store import MongoDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "MongoDocumentStore",
]
