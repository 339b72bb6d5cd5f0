"""Singly-linked chain element used by the table buckets.

Each bucket holds the head of a chain; every node owns its successor. Chains
only ever grow at the tail, so no cycle can be introduced.

Complexities:
    • find        – O(chain length)
    • insert_after – O(chain length), there is no cached tail pointer
"""
from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from .const import KEY_SIZE
from .errors import AllocationError

__all__ = ["Node"]


class Node:
    """One key/value pair in a bucket chain."""

    __slots__ = ("key", "value", "next", "__weakref__")

    def __init__(self, key: bytes, value: int):
        self.key = key
        self.value = value
        self.next: Optional[Node] = None

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.key!r}:{self.value!r}>"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def create(cls, key: bytes, value: int) -> "Node":
        """Allocate a detached node; *key* must already be validated."""
        try:
            return cls(bytes(key), value)
        except MemoryError as exc:
            raise AllocationError(f"cannot allocate node for key {key!r}") from exc

    # ------------------------------------------------------------------
    # Chain helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find(head: Optional["Node"], key: bytes, key_size: int = KEY_SIZE) -> Optional["Node"]:
        """Return the node holding *key* in the chain starting at *head*.

        Keys of ``key_size`` bytes or more can never be stored, so the scan
        is refused for them and ``None`` is returned.
        """
        if len(key) >= key_size:
            return None
        current = head
        while current is not None:
            if current.key == key:
                return current
            current = current.next
        return None

    @staticmethod
    def insert_after(head: "Node", node: "Node") -> None:
        """Append *node* to the tail of the chain starting at *head*."""
        node.next = None
        if head.next is None:
            head.next = node
            return
        current = head.next
        while current.next is not None:
            current = current.next
        current.next = node

    @staticmethod
    def chain(head: Optional["Node"]) -> Iterator["Node"]:
        current = head
        while current is not None:
            # read the successor first so callers may unlink the yielded node
            nxt = current.next
            yield current
            current = nxt
