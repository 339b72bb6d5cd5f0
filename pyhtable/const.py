"""Sizing constants shared by the table, its nodes and the snapshot format."""
from __future__ import annotations

BUCKET_COUNT = 100  # N: fixed number of chain heads per table
KEY_SIZE = 32  # K: keys must be strictly shorter than this many bytes
DEFAULT_VALUE = 0  # returned by get() for absent keys

SNAPSHOT_MAGIC = b"PHT1"
SNAPSHOT_VERSION = 1
