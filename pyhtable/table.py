"""Fixed-capacity separate-chaining hash table.

The table is an array of ``BUCKET_COUNT`` slots. Each slot is either empty or
holds the head :class:`~pyhtable.node.Node` of a chain whose keys all hash to
that slot. The number of slots never changes: there is no resizing, so the
load factor is unbounded and colliding keys degrade to a linear chain scan.

Keys are short strings (UTF-8 encoded) or bytes strictly shorter than
``KEY_SIZE`` bytes. Oversized keys are rejected by :meth:`Table.set` and
reported as absent by the lookup methods; they are never truncated.

Snapshot layout (a single msgpack array)::

    [magic, version, bucket_count, key_size, hash_name,
     [[bucket_index, [[key, value], ...]], ...]]

Chains are written in order so loading reproduces the same bucket layout.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Union

import msgpack

from .const import BUCKET_COUNT, DEFAULT_VALUE, KEY_SIZE, SNAPSHOT_MAGIC, SNAPSHOT_VERSION
from .errors import (
    AllocationError,
    KeyTooLongError,
    SnapshotError,
    TableDestroyedError,
    UnknownHashFunctionError,
)
from .hashing import HashFunction, additive_hash, get_hash_function, hash_name
from .node import Node

__all__ = ["Table", "Lookup", "Key"]

Key = Union[str, bytes, bytearray]


class Lookup(NamedTuple):
    """Result of :meth:`Table.lookup`: presence flag plus value."""

    found: bool
    value: int


def _encode_key(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"key must be str or bytes, not {type(key).__name__}")


def _check_value(value: int) -> int:
    # bool is an int subclass but never a meaningful table value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"value must be int, not {type(value).__name__}")
    return value


class Table:
    """Map of bounded string keys to integers with a fixed bucket array."""

    def __init__(
        self,
        *,
        buckets: int = BUCKET_COUNT,
        key_size: int = KEY_SIZE,
        hash_func: HashFunction = additive_hash,
        logger: Optional[logging.Logger] = None,
    ):
        if buckets < 1:
            raise ValueError("bucket count must be positive")
        if key_size < 1:
            raise ValueError("key size must be positive")
        self.bucket_count = buckets
        self.key_size = key_size
        self.hash_func = hash_func
        self._log = logger or logging.getLogger(__name__)
        self._count = 0
        try:
            self._buckets: Optional[list[Optional[Node]]] = [None] * buckets
        except (MemoryError, OverflowError) as exc:
            raise AllocationError(f"cannot allocate {buckets} buckets") from exc

    @classmethod
    def create(cls, **kwargs) -> "Table":
        """Allocate an empty table; keyword arguments as for the constructor."""
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def destroyed(self) -> bool:
        return self._buckets is None

    def destroy(self) -> int:
        """Release every chain node, then the bucket array.

        Returns the number of nodes released. Destroying twice is a no-op.
        """
        if self._buckets is None:
            return 0
        released = 0
        for index, head in enumerate(self._buckets):
            for node in Node.chain(head):
                node.next = None
                released += 1
            self._buckets[index] = None
        self._buckets = None
        self._count = 0
        self._log.debug("Destroyed table, released %d nodes", released)
        return released

    def __enter__(self) -> "Table":
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()

    def _slots(self) -> list[Optional[Node]]:
        if self._buckets is None:
            raise TableDestroyedError("table has been destroyed")
        return self._buckets

    # ------------------------------------------------------------------
    # Hashing
    # ------------------------------------------------------------------
    def hash(self, key: Key) -> int:
        """Bucket index of *key*."""
        return self._index(_encode_key(key))

    def _index(self, raw: bytes) -> int:
        # only the first key_size bytes take part in addressing
        return self.hash_func(raw[: self.key_size]) % self.bucket_count

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def lookup(self, key: Key) -> Lookup:
        raw = _encode_key(key)
        slots = self._slots()
        index = self._index(raw)
        node = Node.find(slots[index], raw, self.key_size)
        if node is None:
            self._log.debug("Cannot find node for key %r in bucket %d", raw, index)
            return Lookup(False, DEFAULT_VALUE)
        self._log.debug("Found value %d for key %r", node.value, raw)
        return Lookup(True, node.value)

    def get(self, key: Key) -> int:
        """Value stored for *key*, or ``0`` when absent.

        Use :meth:`lookup` to tell an absent key from a stored zero.
        """
        return self.lookup(key).value

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, bytes, bytearray)):
            return False
        return self.lookup(key).found

    def __len__(self) -> int:
        return self._count

    @property
    def load_factor(self) -> float:
        return self._count / self.bucket_count

    def chain_length(self, index: int) -> int:
        slots = self._slots()
        if not 0 <= index < self.bucket_count:
            raise IndexError(f"bucket index {index} out of range")
        return sum(1 for _ in Node.chain(slots[index]))

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def set(self, key: Key, value: int) -> bool:
        """Insert or overwrite *key*.

        Returns ``True`` when a new node was created and ``False`` when an
        existing node was overwritten in place.
        """
        raw = _encode_key(key)
        if len(raw) >= self.key_size:
            raise KeyTooLongError(raw, self.key_size)
        value = _check_value(value)
        slots = self._slots()
        index = self._index(raw)
        self._log.debug("Hash for %r is %d", raw, index)

        head = slots[index]
        if head is None:
            slots[index] = Node.create(raw, value)
            self._count += 1
            self._log.debug("Empty bucket %d, stored %r = %d as chain head", index, raw, value)
            return True

        found = Node.find(head, raw, self.key_size)
        if found is not None:
            found.value = value
            self._log.debug("Overwrote %r in bucket %d with %d", raw, index, value)
            return False

        Node.insert_after(head, Node.create(raw, value))
        self._count += 1
        self._log.debug("Appended %r = %d to chain of bucket %d", raw, value, index)
        return True

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_bytes(self) -> bytes:
        chains = [
            [index, [[node.key, node.value] for node in Node.chain(head)]]
            for index, head in enumerate(self._slots())
            if head is not None
        ]
        return msgpack.packb(
            [
                SNAPSHOT_MAGIC,
                SNAPSHOT_VERSION,
                self.bucket_count,
                self.key_size,
                hash_name(self.hash_func),
                chains,
            ],
            use_bin_type=True,
        )

    @classmethod
    def from_bytes(
        cls,
        blob: bytes,
        *,
        hash_func: Optional[HashFunction] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "Table":
        """Rebuild a table written by :meth:`to_bytes`.

        *hash_func* overrides the recorded hash function name and is required
        when the table was written with an unregistered function.
        """
        try:
            magic, version, buckets, key_size, name, chains = msgpack.unpackb(blob, raw=False)
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"malformed snapshot: {exc}") from exc
        if magic != SNAPSHOT_MAGIC:
            raise SnapshotError("invalid snapshot magic")
        if version != SNAPSHOT_VERSION:
            raise SnapshotError(f"unsupported snapshot version {version}")
        if hash_func is None:
            if name is None:
                raise SnapshotError("snapshot hash function is unregistered; pass hash_func")
            try:
                hash_func = get_hash_function(name)
            except (UnknownHashFunctionError, TypeError) as exc:
                raise SnapshotError(f"unknown hash function {name!r}") from exc

        try:
            table = cls(buckets=buckets, key_size=key_size, hash_func=hash_func, logger=logger)
        except (TypeError, ValueError, AllocationError) as exc:
            raise SnapshotError(f"invalid snapshot header: {exc}") from exc

        try:
            table._load_chains(chains)
        except SnapshotError:
            raise
        except (TypeError, ValueError) as exc:
            raise SnapshotError(f"invalid snapshot entry: {exc}") from exc
        return table

    def _load_chains(self, chains: list) -> None:
        for index, entries in chains:
            if not 0 <= index < self.bucket_count:
                raise SnapshotError(f"bucket index {index} out of range")
            for key, value in entries:
                if self.hash(key) != index:
                    raise SnapshotError(f"key {key!r} does not hash to bucket {index}")
                if not self.set(key, value):
                    raise SnapshotError(f"duplicate key {key!r}")
