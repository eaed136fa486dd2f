"""Adapters - I/O implementations of ports."""

from .json_store import JsonRecordStore, StoreError

__all__ = [
    "JsonRecordStore",
    "StoreError",
]
