"""Tests for core utilities."""

import json


def test_connection_uri_without_credentials():
    from pyqt_docedit.core import ConnectionSettings

    settings = ConnectionSettings(host="localhost", port="27017", database="farm")
    assert settings.connection_uri() == "mongodb://localhost:27017/farm"
    assert not settings.has_credentials


def test_connection_uri_encodes_credentials():
    from pyqt_docedit.core import ConnectionSettings

    settings = ConnectionSettings(host="h", port="1", database="d", username="ad@min", password="p:w/d")
    assert settings.connection_uri() == "mongodb://ad%40min:p%3Aw%2Fd@h:1/d?authSource=admin"
    assert "p%3Aw" not in settings.redacted_uri()


def test_blank_credentials_are_absent():
    from pyqt_docedit.core import ConnectionSettings

    settings = ConnectionSettings(username="  ", password="")
    assert settings.username is None
    assert settings.password is None


def test_settings_store_defaults_when_missing(tmp_path):
    from pyqt_docedit.core import ConnectionSettingsStore

    settings = ConnectionSettingsStore(tmp_path / "connection.json").load()
    assert settings.host == "192.168.31.205"
    assert settings.port == "27017"
    assert settings.database == "mengyafarm"


def test_settings_store_round_trip(tmp_path):
    from pyqt_docedit.core import ConnectionSettings, ConnectionSettingsStore

    path = tmp_path / "nested" / "connection.json"
    store = ConnectionSettingsStore(path)
    assert store.save(ConnectionSettings(host="db", port="27018", database="x", username="u", password="p"))

    assert json.loads(path.read_text())["host"] == "db"
    loaded = store.load()
    assert loaded.connection_uri() == "mongodb://u:p@db:27018/x?authSource=admin"


def test_settings_store_omits_absent_credentials(tmp_path):
    from pyqt_docedit.core import ConnectionSettings, ConnectionSettingsStore

    path = tmp_path / "connection.json"
    ConnectionSettingsStore(path).save(ConnectionSettings(username="u"))
    assert "username" in json.loads(path.read_text())
    assert "password" not in json.loads(path.read_text())


def test_settings_store_tolerates_corrupt_file(tmp_path):
    from pyqt_docedit.core import ConnectionSettingsStore

    path = tmp_path / "connection.json"
    path.write_text("{not json")
    assert ConnectionSettingsStore(path).load().database == "mengyafarm"


def test_settings_file_from_editor_config(tmp_path):
    from pyqt_docedit.core import ConnectionSettingsStore
    from pyqt_docedit.protocols import EditorConfig, set_editor_config

    set_editor_config(EditorConfig(settings_file=str(tmp_path / "custom.json")))
    assert ConnectionSettingsStore().settings_file == tmp_path / "custom.json"


def test_memory_clipboard():
    from pyqt_docedit.core import MemoryClipboard

    clipboard = MemoryClipboard()
    assert clipboard.read() == ""
    clipboard.write("hello")
    assert clipboard.read() == "hello"


def test_qt_clipboard(qapp):
    """QtClipboard implements the clipboard protocol."""
    from pyqt_docedit.core import QtClipboard

    clipboard = QtClipboard()
    clipboard.write("exported")
    assert clipboard.read() == "exported"


def test_registered_clipboard_is_used_by_sessions():
    from pyqt_docedit.core import MemoryClipboard
    from pyqt_docedit.documents import EditSession
    from pyqt_docedit.protocols import get_clipboard, register_clipboard

    clipboard = MemoryClipboard()
    register_clipboard(clipboard)
    assert get_clipboard() is clipboard

    session = EditSession({"_id": "a1", "name": "x"}, "chat")
    session.copy_field("name")
    assert clipboard.read() == "x"
