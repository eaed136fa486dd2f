"""Ports - interfaces/protocols for external dependencies."""

from .record_store import RecordStore

__all__ = [
    "RecordStore",
]
