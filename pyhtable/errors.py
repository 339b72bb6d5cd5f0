"""Exception hierarchy for pyhtable."""
from __future__ import annotations

__all__ = [
    "HashTableError",
    "AllocationError",
    "KeyTooLongError",
    "TableDestroyedError",
    "UnknownHashFunctionError",
    "SnapshotError",
]


class HashTableError(Exception):
    """Base class for every error raised by this package."""


class AllocationError(HashTableError, MemoryError):
    """Raised when a table or a chain node cannot be allocated."""


class KeyTooLongError(HashTableError, ValueError):
    """Raised when a key does not fit into the table's key size."""

    def __init__(self, key: bytes, key_size: int):
        super().__init__(f"key of {len(key)} bytes does not fit (limit is {key_size - 1})")
        self.key = key
        self.key_size = key_size


class TableDestroyedError(HashTableError, RuntimeError):
    """Raised when a destroyed table is used again."""


class UnknownHashFunctionError(HashTableError, KeyError):
    """Raised when a hash function name is not registered."""


class SnapshotError(HashTableError, ValueError):
    """Raised when a serialised table cannot be loaded."""
