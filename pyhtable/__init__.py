"""pyhtable: a fixed-capacity separate-chaining hash table.

The main entry point is :class:`pyhtable.Table`, mapping short string keys to
integers over a fixed array of bucket chains. :mod:`pyhtable.api` offers the
same operations with return-value error signalling instead of exceptions.
"""

from __future__ import annotations

__all__ = [
    "Table",
    "Lookup",
    "Node",
    "HashTableError",
    "AllocationError",
    "KeyTooLongError",
    "TableDestroyedError",
    "UnknownHashFunctionError",
    "SnapshotError",
    "BUCKET_COUNT",
    "KEY_SIZE",
]

from .const import BUCKET_COUNT, KEY_SIZE
from .errors import (
    AllocationError,
    HashTableError,
    KeyTooLongError,
    SnapshotError,
    TableDestroyedError,
    UnknownHashFunctionError,
)
from .node import Node
from .table import Lookup, Table
