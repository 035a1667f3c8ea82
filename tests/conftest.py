"""pytest configuration and fixtures for pyqt-docedit tests."""

import os

import pytest
from bson import ObjectId

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402


HEX_ID = "507f1f77bcf86cd799439011"


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def player_doc():
    """Document with a native identifier and one field of each kind."""
    return {
        "_id": ObjectId(HEX_ID),
        "level": 5,
        "nickname": "Ann",
        "inventory": {"sword": 1},
        "ratio": 0.5,
        "banned": False,
        "note": None,
    }


@pytest.fixture
def store(player_doc):
    from pyqt_docedit.stores import InMemoryDocumentStore

    return InMemoryDocumentStore({"playerdata": [player_doc]})


@pytest.fixture
def clipboard():
    from pyqt_docedit.core import MemoryClipboard

    return MemoryClipboard()


@pytest.fixture(autouse=True)
def reset_globals():
    """Keep global registries from leaking between tests."""
    from pyqt_docedit.protocols import register_clipboard, register_document_store, set_editor_config

    yield
    register_document_store(None)
    register_clipboard(None)
    set_editor_config(None)
