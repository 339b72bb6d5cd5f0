"""Hash functions used to address table buckets.

A hash function takes the encoded key and returns a non-negative integer;
the table reduces it modulo its bucket count. Functions are registered by
name so a serialised table can record which one addressed its buckets.

The default is the classic additive hash:

    hash(key) = sum(key[:KEY_SIZE])

It is deliberately weak: keys whose bytes sum to the same total (anagrams
such as ``eric`` and ``rice``) always share a bucket.
"""
from __future__ import annotations

import struct
from hashlib import blake2b
from typing import Callable

from .const import KEY_SIZE
from .errors import UnknownHashFunctionError

__all__ = [
    "HashFunction",
    "HASH_FUNCTIONS",
    "additive_hash",
    "fnv1a_hash",
    "blake2b_hash",
    "get_hash_function",
    "hash_name",
]

HashFunction = Callable[[bytes], int]

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def additive_hash(key: bytes) -> int:
    return sum(key[:KEY_SIZE])


def fnv1a_hash(key: bytes) -> int:
    """32-bit FNV-1a."""
    h = _FNV_OFFSET
    for byte in key:
        h ^= byte
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


def blake2b_hash(key: bytes) -> int:
    (h,) = struct.unpack("!Q", blake2b(key, digest_size=8).digest())
    return h


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "additive": additive_hash,
    "fnv1a": fnv1a_hash,
    "blake2b": blake2b_hash,
}


def get_hash_function(name: str) -> HashFunction:
    try:
        return HASH_FUNCTIONS[name]
    except KeyError:
        raise UnknownHashFunctionError(name) from None


def hash_name(func: HashFunction) -> str | None:
    """Registry name of *func*, or ``None`` for an unregistered callable."""
    for name, registered in HASH_FUNCTIONS.items():
        if registered is func:
            return name
    return None
