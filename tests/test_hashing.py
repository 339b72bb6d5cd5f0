"""Unit tests for the bucket hash functions."""
import pytest

from pyhtable import KEY_SIZE, UnknownHashFunctionError
from pyhtable.hashing import (
    HASH_FUNCTIONS,
    additive_hash,
    blake2b_hash,
    fnv1a_hash,
    get_hash_function,
    hash_name,
)


def test_additive_hash_sums_bytes():
    assert additive_hash(b"") == 0
    assert additive_hash(b"eric") == 101 + 114 + 105 + 99


def test_additive_hash_anagrams_collide():
    assert additive_hash(b"eric") == additive_hash(b"rice")
    assert additive_hash(b"eric") == additive_hash(b"erhd")


def test_additive_hash_caps_at_key_size():
    assert additive_hash(b"a" * (KEY_SIZE + 8)) == ord("a") * KEY_SIZE


def test_fnv1a_known_values():
    assert fnv1a_hash(b"") == 2166136261
    assert fnv1a_hash(b"a") == 0xE40C292C


def test_fnv1a_is_order_sensitive():
    assert fnv1a_hash(b"eric") != fnv1a_hash(b"rice")


def test_blake2b_hash_range():
    h = blake2b_hash(b"eric")
    assert h == blake2b_hash(b"eric")
    assert 0 <= h < 2**64


@pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
def test_registry_round_trip(name):
    func = get_hash_function(name)
    assert hash_name(func) == name


def test_unknown_hash_function():
    with pytest.raises(UnknownHashFunctionError):
        get_hash_function("md5")
    with pytest.raises(KeyError):
        get_hash_function("md5")
    assert hash_name(lambda key: 0) is None
