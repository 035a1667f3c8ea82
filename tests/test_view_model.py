"""Tests for the collection view model."""

import pytest
from bson import ObjectId

HEX_ID = "507f1f77bcf86cd799439011"


@pytest.fixture
def view_model(qapp, store, clipboard):
    from pyqt_docedit.viewmodels import CollectionViewModel

    store.insert("gameconfig", {"config_type": "weapon", "damage": 10})
    store.insert("gameconfig", {"config_type": "armor", "defense": 4})
    return CollectionViewModel(store=store, collection="gameconfig", clipboard=clipboard)


def test_defaults_come_from_editor_config(qapp, store):
    from pyqt_docedit.viewmodels import CollectionViewModel

    vm = CollectionViewModel(store=store)
    assert vm.active_collection == "gameconfig"
    assert vm.available_collections == ["gameconfig", "playerdata", "chat"]
    assert vm.documents == []
    assert not vm.loading


def test_reload_loads_documents_and_emits(view_model):
    seen = []
    loading = []
    view_model.documents_changed.connect(seen.append)
    view_model.loading_changed.connect(loading.append)

    assert view_model.reload()
    assert len(view_model.documents) == 2
    assert len(seen[-1]) == 2
    assert loading == [True, False]
    assert view_model.status_message == "Loaded 2 documents"


def test_switch_collection_resets_and_loads(view_model):
    switched = []
    view_model.collection_changed.connect(switched.append)
    view_model.reload()

    assert view_model.switch_collection("playerdata")
    assert switched == ["playerdata"]
    assert view_model.active_collection == "playerdata"
    assert [d["nickname"] for d in view_model.documents] == ["Ann"]


def test_switch_to_absent_collection_is_empty_not_an_error(view_model):
    assert view_model.switch_collection("nothing_here")
    assert view_model.documents == []
    assert "nothing_here" in view_model.available_collections


def test_switch_to_empty_name_is_refused(view_model):
    assert not view_model.switch_collection("  ")
    assert view_model.active_collection == "gameconfig"
    assert "empty" in view_model.status_message


def test_reload_refused_while_loading(view_model):
    """A load in flight blocks a second one from starting."""
    view_model._set_loading(True)
    assert not view_model.reload()
    assert not view_model.switch_collection("playerdata")
    view_model._set_loading(False)
    assert view_model.reload()


def test_store_failure_is_reported_in_status(view_model, store):
    statuses = []
    view_model.status_changed.connect(statuses.append)
    store.disconnect()

    assert not view_model.reload()
    assert view_model.status_message.startswith("Failed to load data")
    assert not view_model.loading
    assert view_model.documents == []


def test_lookup_and_filter(view_model):
    view_model.switch_collection("playerdata")
    assert view_model.lookup(f'ObjectId("{HEX_ID}")')["nickname"] == "Ann"
    assert view_model.lookup("000000000000000000000000") is None

    view_model.switch_collection("gameconfig")
    assert view_model.filter_by("config_type", "armor")
    assert [d["defense"] for d in view_model.documents] == [4]


def test_open_and_commit_session_reloads(view_model, store):
    from pyqt_docedit.documents import SaveStatus

    view_model.switch_collection("playerdata")
    session = view_model.open_document(view_model.documents[0])
    assert session.collection == "playerdata"

    session.set_text("level", "9")
    outcome = view_model.commit(session)
    assert outcome.status is SaveStatus.SAVED
    assert view_model.documents[0]["level"] == 9
    assert view_model.status_message == "Saved"


def test_commit_invalid_session_reports_first_error(view_model):
    from pyqt_docedit.documents import SaveStatus

    view_model.switch_collection("playerdata")
    session = view_model.open_document(view_model.documents[0])
    session.set_text("level", "abc")

    outcome = view_model.commit(session)
    assert outcome.status is SaveStatus.INVALID
    assert "level" in view_model.status_message


def test_delete_document(view_model):
    view_model.switch_collection("playerdata")
    assert view_model.delete_document(ObjectId(HEX_ID))
    assert view_model.documents == []
    assert not view_model.delete_document(ObjectId(HEX_ID))
