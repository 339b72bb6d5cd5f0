"""Return-value style facade over :class:`~pyhtable.table.Table`.

The functions here never raise for the table's own failure modes: creation
failure yields ``None``, a rejected ``set`` yields ``False`` and an absent key
reads as ``0``. Failures are logged instead.
"""
from __future__ import annotations

import logging
from typing import Optional

from .errors import AllocationError, KeyTooLongError
from .table import Key, Table

__all__ = ["create", "destroy", "get", "set"]

logger = logging.getLogger(__name__)


def create() -> Optional[Table]:
    try:
        return Table()
    except AllocationError:
        logger.warning("Cannot allocate table")
        return None


def destroy(table: Optional[Table]) -> None:
    if table is None:
        logger.warning("Cannot free a None table")
        return
    table.destroy()


def get(table: Table, key: Key) -> int:
    return table.get(key)


def set(table: Table, key: Key, value: int) -> bool:
    """Store *value* under *key*; ``False`` when the table refused it."""
    try:
        table.set(key, value)
    except (AllocationError, KeyTooLongError) as exc:
        logger.warning("Cannot set key %r: %s", key, exc)
        return False
    return True
