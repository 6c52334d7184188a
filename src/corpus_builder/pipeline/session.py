"""
Archive Session - State of the One Archive in Flight.

A session is acquired for exactly one drain-loop iteration and released by
its context manager, so the record cursor is closed on every exit path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Iterator, Optional, Type

from corpus_builder.domain.entities import ArchiveReference
from corpus_builder.interfaces.downloader import Downloader
from corpus_builder.interfaces.record_cursor import (
    CursorFactory,
    RecordCursor,
    RecordsExhausted,
)

logger = logging.getLogger(__name__)


class ArchiveSession:
    """
    Reference, local file, open cursor and record index for one archive.

    Use ``ArchiveSession.open(...)`` and a ``with`` block; leaving the block
    closes the cursor whether reading finished, failed or stopped early.
    """

    def __init__(
        self,
        reference: ArchiveReference,
        local_path: Path,
        cursor: RecordCursor,
    ) -> None:
        self.reference = reference
        self.local_path = local_path
        self.cursor = cursor
        self.record_index = 0
        self._closed = False

    @classmethod
    def open(
        cls,
        reference: ArchiveReference,
        downloader: Downloader,
        cursor_factory: CursorFactory,
        boundary_marker: str,
    ) -> "ArchiveSession":
        """
        Fetch the archive and open a cursor over it.

        Raises:
            DownloadError: If the archive cannot be retrieved
            OSError: If the local file cannot be opened
        """
        local_path = downloader.fetch(reference)
        cursor = cursor_factory(local_path, boundary_marker)
        try:
            cursor.open()
        except BaseException:
            cursor.close()
            raise
        return cls(reference, local_path, cursor)

    @property
    def filename(self) -> str:
        return self.cursor.source_name() or self.reference.filename

    @property
    def closed(self) -> bool:
        return self._closed

    def next_record(self) -> Optional[str]:
        """
        Pull the next raw record, or None once the cursor is exhausted.

        A cursor that reports no more elements mid-stream ends the read the
        same way a clean exhaustion does.
        """
        if not self.cursor.has_next():
            return None
        try:
            record = self.cursor.next()
        except RecordsExhausted:
            logger.debug(f"Cursor exhausted mid-stream in {self.filename}")
            return None
        self.record_index += 1
        return record

    def records(self) -> Iterator[str]:
        while True:
            record = self.next_record()
            if record is None:
                return
            yield record

    def close(self) -> None:
        if not self._closed:
            self.cursor.close()
            self._closed = True

    def delete_local_file(self) -> None:
        """Remove the local archive copy. Missing files are ignored."""
        self.local_path.unlink(missing_ok=True)
        logger.debug(f"Deleted {self.local_path}")

    def __enter__(self) -> "ArchiveSession":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()
