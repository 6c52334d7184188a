"""
Output Sink Protocol.

Defines the append-only destination for matching records.

Design Notes:
    - Explicit open/close lifecycle
    - close() is idempotent
    - Single caller only, no internal locking
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputSink(Protocol):
    """Abstract interface for output sinks."""

    def open(self) -> None:
        ...

    def is_open(self) -> bool:
        ...

    def write(self, data: bytes) -> None:
        """Append one record. Raises RuntimeError if the sink is closed."""
        ...

    def close(self) -> None:
        ...
