"""Tests for value kinds and the value codec."""

import pytest
from bson import ObjectId


@pytest.fixture
def codec():
    from pyqt_docedit.services import ValueCodec

    return ValueCodec(indent=2)


def test_classify_value_kinds():
    """Each stored type lands in one kind; bool is not a number."""
    from pyqt_docedit.documents.value_kinds import classify_value

    assert type(classify_value("a", None)).__name__ == "NullKind"
    assert type(classify_value("a", True)).__name__ == "BooleanKind"
    assert type(classify_value("a", 3)).__name__ == "NumberKind"
    assert type(classify_value("a", 3.5)).__name__ == "NumberKind"
    assert type(classify_value("a", [1])).__name__ == "StructuredKind"
    assert type(classify_value("a", {"k": 1})).__name__ == "StructuredKind"
    assert type(classify_value("a", "x")).__name__ == "TextKind"
    assert type(classify_value("a", ObjectId())).__name__ == "TextKind"


def test_codec_dispatch_is_exhaustive(codec):
    """Every registered kind has an encode handler."""
    assert codec.missing_kinds() == []


def test_encode_simple_values(codec):
    assert codec.encode(None) == ""
    assert codec.encode(5) == "5"
    assert codec.encode(2.5) == "2.5"
    assert codec.encode("Ann") == "Ann"
    assert codec.encode(True) == "true"
    assert codec.encode(False) == "false"


def test_encode_structured_uses_two_space_indent_and_insertion_order(codec):
    text = codec.encode({"sword": 1, "axe": [1, 2]})
    assert text == '{\n  "sword": 1,\n  "axe": [\n    1,\n    2\n  ]\n}'


def test_encode_structured_keeps_non_ascii(codec):
    assert codec.encode({"名字": "小明"}) == '{\n  "名字": "小明"\n}'


@pytest.mark.parametrize("value", [
    None,
    0,
    -17,
    5,
    2.5,
    5.0,
    1e20,
    "Ann",
    "",
    True,
    False,
    {"sword": 1, "nested": {"a": [1, 2.5, None, "x"]}},
    [],
    {},
])
def test_round_trip(codec, value):
    """decode(encode(v), v) == v, with the original type preserved."""
    decoded = codec.decode(codec.encode(value), value, field="f")
    assert decoded == value
    assert type(decoded) is type(value)


def test_decode_number_accepts_int_and_float(codec):
    assert codec.decode(" 7 ", 5, field="level") == 7
    assert isinstance(codec.decode("7", 5), int)
    assert codec.decode("7.25", 5) == 7.25


def test_decode_number_rejects_garbage(codec):
    from pyqt_docedit.errors import ValidationError

    result = codec.decode("abc", 5, field="level")
    assert isinstance(result, ValidationError)
    assert result.field == "level"
    assert result.reason == "expected numeric value"

    assert isinstance(codec.decode("", 5), ValidationError)
    assert isinstance(codec.decode("1_000", 5), ValidationError)


def test_decode_structured(codec):
    result = codec.decode('{"sword": 2, "shield": 1}', {"sword": 1}, field="inventory")
    assert result == {"sword": 2, "shield": 1}
    assert list(result) == ["sword", "shield"]


def test_decode_structured_malformed(codec):
    from pyqt_docedit.errors import ValidationError

    result = codec.decode('{"sword": ', {"sword": 1}, field="inventory")
    assert isinstance(result, ValidationError)
    assert result.reason == "malformed structured value"
    assert result.detail


def test_decode_structured_requires_container(codec):
    """A bare scalar is not an acceptable replacement for an object."""
    from pyqt_docedit.errors import ValidationError

    result = codec.decode("5", {"sword": 1}, field="inventory")
    assert isinstance(result, ValidationError)


def test_decode_text_is_trimmed_and_never_fails(codec):
    assert codec.decode("  Bob  ", "Ann") == "Bob"
    assert codec.decode("{not json", "Ann") == "{not json"


def test_decode_null_original(codec):
    assert codec.decode("   ", None) is None
    assert codec.decode(" hello ", None) == "hello"


def test_decode_boolean(codec):
    from pyqt_docedit.errors import ValidationError

    assert codec.decode("TRUE", False) is True
    assert codec.decode("false", True) is False
    assert isinstance(codec.decode("yes", True), ValidationError)


def test_format_and_validate_structured_text(codec):
    from pyqt_docedit.errors import ValidationError

    assert codec.format_structured_text('{"a":1,"b":[2]}') == '{\n  "a": 1,\n  "b": [\n    2\n  ]\n}'
    assert isinstance(codec.format_structured_text("{oops"), ValidationError)
    assert codec.validate_structured_text("") is None
    assert codec.validate_structured_text("[1, 2]") is None
    assert codec.validate_structured_text("[1, 2") is not None


def test_structured_nesting_past_parser_limit_is_malformed(codec):
    """Overly deep JSON is reported like any other parse failure."""
    from pyqt_docedit.errors import ValidationError

    deep = "[" * 200000
    result = codec.decode(deep, [1], field="inventory")
    assert isinstance(result, ValidationError)
    assert result.reason == "malformed structured value"
    assert isinstance(codec.format_structured_text(deep, field="inventory"), ValidationError)
    assert codec.validate_structured_text(deep) is not None


def test_indent_follows_editor_config():
    from pyqt_docedit.protocols import EditorConfig, set_editor_config
    from pyqt_docedit.services import ValueCodec

    set_editor_config(EditorConfig(structured_indent=4))
    assert ValueCodec().encode({"a": 1}) == '{\n    "a": 1\n}'
