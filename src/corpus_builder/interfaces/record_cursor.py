"""
Record Cursor Protocol.

Defines the abstract interface for sequential extraction of records from a
local archive. A cursor is lazy, finite and one-pass.

Design Notes:
    - next() signals the end with RecordsExhausted, has_next() avoids it
    - close() is idempotent
    - current_position() and source_name() exist for diagnostics only
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, runtime_checkable


class RecordsExhausted(Exception):
    """Raised by next() when the cursor has no more records."""
    pass


class ArchiveOpenError(OSError):
    """Raised when an archive container cannot be opened or read."""
    pass


@runtime_checkable
class RecordCursor(Protocol):
    """Abstract interface for record cursors."""

    def open(self) -> "RecordCursor":
        """Open the underlying file. Raises OSError on failure."""
        ...

    def has_next(self) -> bool:
        """True if another record can be read."""
        ...

    def next(self) -> str:
        """
        Return the next raw record.

        Raises:
            RecordsExhausted: When no record is left
        """
        ...

    def close(self) -> None:
        """Release the underlying file. Safe to call repeatedly."""
        ...

    def current_position(self) -> int:
        """Number of records returned so far."""
        ...

    def source_name(self) -> str:
        """Filename of the archive being read."""
        ...


# Builds an unopened cursor for a local file and boundary marker
CursorFactory = Callable[[Path, str], RecordCursor]
