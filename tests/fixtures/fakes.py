"""
In-memory collaborators for pipeline tests.

FakeArchiveStore plays both the Downloader and the cursor factory: archives
are named lists of record strings, and faults are injected per archive.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from corpus_builder.domain.entities import ArchiveReference, SelectionCriteria
from corpus_builder.interfaces.downloader import DownloadError
from corpus_builder.interfaces.match_evaluator import RecordParseError
from corpus_builder.interfaces.record_cursor import ArchiveOpenError, RecordsExhausted

BASE_URL = "https://bulk.example.org/fulltext/2014/"


def reference(filename: str) -> ArchiveReference:
    return ArchiveReference(url=BASE_URL + filename)


class ListCursor:
    """RecordCursor over a list of strings, with optional injected faults."""

    def __init__(
        self,
        name: str,
        records: Sequence[str],
        exhaust_at: Optional[int] = None,
        io_error_at: Optional[int] = None,
        fail_open: bool = False,
    ) -> None:
        self.name = name
        self.records = list(records)
        self.exhaust_at = exhaust_at
        self.io_error_at = io_error_at
        self.fail_open = fail_open
        self.position = 0
        self.opened = False
        self.close_calls = 0

    def open(self) -> None:
        if self.fail_open:
            raise ArchiveOpenError(f"Cannot open {self.name}")
        self.opened = True

    def has_next(self) -> bool:
        return self.position < len(self.records)

    def next(self) -> str:
        if self.exhaust_at is not None and self.position == self.exhaust_at:
            raise RecordsExhausted(f"{self.name} ended early")
        if self.io_error_at is not None and self.position == self.io_error_at:
            raise OSError(f"Read failure in {self.name}")
        record = self.records[self.position]
        self.position += 1
        return record

    def close(self) -> None:
        self.close_calls += 1

    def current_position(self) -> int:
        return self.position

    def source_name(self) -> str:
        return self.name

    @property
    def closed(self) -> bool:
        return self.close_calls > 0


class FakeArchiveStore:
    """
    Downloader and cursor factory over named in-memory archives.

    Args:
        archives: Filename -> records, in catalog order
        directory: When given, fetch() creates a real (empty) file there
    """

    def __init__(
        self,
        archives: Dict[str, List[str]],
        directory: Optional[Path] = None,
    ) -> None:
        self.archives = dict(archives)
        self.directory = directory
        self.missing: set = set()
        self.unreadable: set = set()
        self.exhaust_at: Dict[str, int] = {}
        self.io_error_at: Dict[str, int] = {}
        self.fetched: List[str] = []
        self.cursors: Dict[str, ListCursor] = {}

    # Downloader

    def discover(self, criteria: SelectionCriteria) -> List[ArchiveReference]:
        return [reference(name) for name in self.archives]

    def fetch(self, ref: ArchiveReference) -> Path:
        name = ref.filename
        self.fetched.append(name)
        if name in self.missing or name not in self.archives:
            raise DownloadError(f"HTTP 404 for {ref.url}", ref)
        if self.directory is None:
            return Path(name)
        path = self.directory / name
        path.write_bytes(b"PK")
        return path

    # Cursor factory

    def cursor(self, path: Path, boundary_marker: str) -> ListCursor:
        name = Path(path).name
        cursor = ListCursor(
            name,
            self.archives[name],
            exhaust_at=self.exhaust_at.get(name),
            io_error_at=self.io_error_at.get(name),
            fail_open=name in self.unreadable,
        )
        self.cursors[name] = cursor
        return cursor


class PredicateEvaluator:
    """
    MatchEvaluator driven by a predicate over the record text.

    Records containing ``BROKEN`` raise RecordParseError.
    """

    def __init__(self, predicate: Optional[Callable[[str], bool]] = None) -> None:
        self.predicate = predicate or (lambda record: "MATCH" in record)
        self.setup_calls = 0
        self.evaluated: List[str] = []
        self._last = ""

    def setup(self) -> None:
        self.setup_calls += 1

    def evaluate(self, record: str) -> bool:
        self.evaluated.append(record)
        if "BROKEN" in record:
            raise RecordParseError(f"Malformed record {record!r}")
        matched = self.predicate(record)
        self._last = record if matched else ""
        return matched

    def last_match_description(self) -> str:
        return self._last


class MemorySink:
    """OutputSink collecting written payloads in a list."""

    def __init__(self, fail_open: bool = False) -> None:
        self.records: List[bytes] = []
        self.fail_open = fail_open
        self.open_calls = 0
        self.close_calls = 0
        self._open = False

    def open(self) -> None:
        if self.fail_open:
            raise OSError("Output directory is read-only")
        self.open_calls += 1
        self._open = True

    def is_open(self) -> bool:
        return self._open

    def write(self, data: bytes) -> None:
        if not self._open:
            raise RuntimeError("Sink is not open")
        self.records.append(data)

    def close(self) -> None:
        self.close_calls += 1
        self._open = False

    @property
    def texts(self) -> List[str]:
        return [data.decode("utf-8") for data in self.records]
