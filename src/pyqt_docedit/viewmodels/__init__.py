"""Qt view models for the editor screens."""

from .collection_view_model import CollectionViewModel

__all__ = [
    "CollectionViewModel",
]
