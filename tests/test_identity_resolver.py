"""Tests for identifier normalization."""

import json

import pytest
from bson import ObjectId

HEX_ID = "507f1f77bcf86cd799439011"


REPRESENTATIONS = [
    ObjectId(HEX_ID),
    HEX_ID,
    {"$oid": HEX_ID},
    f'ObjectId("{HEX_ID}")',
    f"ObjectId('{HEX_ID}')",
    f"ObjectId({HEX_ID})",
    f'"{HEX_ID}"',
    f"  {HEX_ID}  ",
]


@pytest.mark.parametrize("raw", REPRESENTATIONS)
def test_normalize_strips_every_encoding(raw):
    from pyqt_docedit.services import IdentityResolver

    assert IdentityResolver.normalize(raw) == HEX_ID


def test_all_representations_match_each_other_symmetrically():
    from pyqt_docedit.services import IdentityResolver

    for a in REPRESENTATIONS:
        for b in REPRESENTATIONS:
            assert IdentityResolver.matches(a, b)
            assert IdentityResolver.matches(a, b) == IdentityResolver.matches(b, a)


def test_different_identifiers_do_not_match():
    from pyqt_docedit.services import IdentityResolver

    assert not IdentityResolver.matches("000000000000000000000000", ObjectId(HEX_ID))
    assert not IdentityResolver.matches(ObjectId(HEX_ID), "000000000000000000000000")


def test_matching_is_case_sensitive():
    from pyqt_docedit.services import IdentityResolver

    assert not IdentityResolver.matches(HEX_ID.upper(), HEX_ID)


def test_empty_identifiers_never_match():
    """An empty token is a distinct identity, even against another empty one."""
    from pyqt_docedit.services import IdentityResolver

    assert IdentityResolver.normalize(None) == ""
    assert IdentityResolver.normalize('ObjectId("")') == ""
    assert not IdentityResolver.matches(None, None)
    assert not IdentityResolver.matches("", "")
    assert not IdentityResolver.matches(None, HEX_ID)


def test_compound_identifier_compares_by_content():
    from pyqt_docedit.services import IdentityResolver

    assert IdentityResolver.matches({"a": 1, "b": 2}, {"b": 2, "a": 1})
    assert IdentityResolver.normalize({"a": 1}) == json.dumps({"a": 1}, separators=(",", ":"))


def test_plain_scalar_identifiers():
    from pyqt_docedit.services import IdentityResolver

    assert IdentityResolver.matches(42, "42")
    assert IdentityResolver.to_native(42) == 42


def test_to_native():
    from pyqt_docedit.services import IdentityResolver

    assert IdentityResolver.to_native(f'ObjectId("{HEX_ID}")') == ObjectId(HEX_ID)
    assert IdentityResolver.to_native({"$oid": HEX_ID}) == ObjectId(HEX_ID)
    assert IdentityResolver.to_native("player-1") == "player-1"
