"""Tests for the page -> menu item identity map."""

import json

import pytest

from menu_sync.core.identity_map import IdentityMap, IdentityMapError


def test_lookup_returns_none_for_unmapped_page() -> None:
    assert IdentityMap().lookup(1) is None
    assert IdentityMap().lookup(None) is None


def test_insert_then_lookup() -> None:
    identity_map = IdentityMap()
    assert identity_map.insert(1, 100) is True
    assert identity_map.lookup(1) == 100
    assert 1 in identity_map
    assert len(identity_map) == 1


def test_insert_keeps_first_association() -> None:
    identity_map = IdentityMap({1: 100})

    assert identity_map.insert(1, 200) is False
    assert identity_map.lookup(1) == 100


def test_serialize_is_flat_json_with_string_keys() -> None:
    raw = IdentityMap({12: 101, 3: 100}).serialize()

    assert isinstance(raw, bytes)
    assert json.loads(raw) == {"3": 100, "12": 101}


def test_deserialize_restores_serialized_map() -> None:
    original = IdentityMap({1: 100, 2: 101, 40: 7})

    restored = IdentityMap.deserialize(original.serialize())

    assert restored == original
    assert restored.lookup(40) == 7


def test_empty_map_survives_persistence() -> None:
    assert IdentityMap.deserialize(IdentityMap().serialize()) == IdentityMap()


def test_deserialize_accepts_text() -> None:
    assert IdentityMap.deserialize('{"5": 9}').lookup(5) == 9


@pytest.mark.parametrize(
    "raw",
    [b"not json", b"[1, 2]", b'{"a": 1}', b'{"1": "x"}', b'{"1": true}', b"\xff\xfe"],
)
def test_deserialize_rejects_malformed_payloads(raw: bytes) -> None:
    with pytest.raises(IdentityMapError):
        IdentityMap.deserialize(raw)


def test_copy_is_independent() -> None:
    identity_map = IdentityMap({1: 100})
    copied = identity_map.copy()
    copied.insert(2, 101)

    assert 2 not in identity_map
    assert copied != identity_map


@pytest.mark.parametrize(
    "raw", [b'{"01": 5}', b'{"1": 100, "01": 200}', b'{" 1": 5}', b'{"+1": 5}']
)
def test_deserialize_rejects_non_canonical_keys(raw: bytes) -> None:
    with pytest.raises(IdentityMapError, match="canonical"):
        IdentityMap.deserialize(raw)


def test_deserialize_accepts_negative_keys() -> None:
    assert IdentityMap.deserialize(b'{"-3": 1}').lookup(-3) == 1
