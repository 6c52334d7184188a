"""
Corpus Pipeline - Main Orchestrator.

The CorpusPipeline owns the queue of pending archives and drains it one
archive at a time: fetch, read every record, evaluate, write the matches,
close. Failures below the run level are logged and skipped; only queue
exhaustion ends a run.

States:
    IDLE -> FETCHING -> READING -> CLOSING -> (FETCHING | DONE)
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from corpus_builder.adapters.dump_reader import DumpXmlReader
from corpus_builder.domain.entities import ArchiveReference, SelectionCriteria
from corpus_builder.domain.value_objects import (
    ArchiveFailure,
    RecordError,
    RunResult,
    RunStatistics,
)
from corpus_builder.interfaces.downloader import Downloader, DownloadError
from corpus_builder.interfaces.match_evaluator import MatchEvaluator, RecordParseError
from corpus_builder.interfaces.output_sink import OutputSink
from corpus_builder.interfaces.record_cursor import CursorFactory
from corpus_builder.pipeline.archive_queue import ArchiveQueue
from corpus_builder.pipeline.session import ArchiveSession

logger = logging.getLogger(__name__)

DEFAULT_BOUNDARY_MARKER = "us-patent"


class PipelineState(Enum):
    """Drain loop states."""
    IDLE = "idle"
    FETCHING = "fetching"
    READING = "reading"
    CLOSING = "closing"
    DONE = "done"


class CorpusPipeline:
    """Drives downloader, record cursor, evaluator and sink over a queue."""

    def __init__(
        self,
        downloader: Downloader,
        evaluator: MatchEvaluator,
        sink: OutputSink,
        cursor_factory: Optional[CursorFactory] = None,
        boundary_marker: str = DEFAULT_BOUNDARY_MARKER,
        delete_completed: bool = False,
    ) -> None:
        """
        Initialize pipeline with all dependencies.

        Args:
            downloader: Discovers archives and makes them local
            evaluator: Decides which records belong in the corpus
            sink: Receives the matching records
            cursor_factory: Builds a record cursor for a local archive
                            (defaults to DumpXmlReader)
            boundary_marker: Root tag that closes each record
            delete_completed: Remove each local archive once fully read
        """
        self.downloader = downloader
        self.evaluator = evaluator
        self.sink = sink
        self.cursor_factory = cursor_factory or DumpXmlReader
        self.boundary_marker = boundary_marker
        self.delete_completed = delete_completed

        self._queue = ArchiveQueue()
        self._state = PipelineState.IDLE
        self._evaluator_ready = False
        self._closed = False

        self._archive_count = 0
        self._write_count = 0
        self._failures: List[ArchiveFailure] = []
        self._record_errors: List[RecordError] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def setup(self) -> "CorpusPipeline":
        """
        Initialize the evaluator once and open the sink if needed.

        Raises:
            Whatever the evaluator or sink raise; both are fatal to the run.
        """
        if not self._evaluator_ready:
            self.evaluator.setup()
            self._evaluator_ready = True

        if not self.sink.is_open():
            self.sink.open()

        return self

    def close(self) -> None:
        """Close the sink. Further calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self.sink.close()
        logger.debug("Output sink closed")

    # ------------------------------------------------------------------
    # Queue shaping (before run only)
    # ------------------------------------------------------------------

    def enqueue(self, references: Iterable[ArchiveReference]) -> "CorpusPipeline":
        self._require_idle("enqueue")
        self._queue.enqueue(references)
        return self

    def enqueue_discovered(self, criteria: SelectionCriteria) -> "CorpusPipeline":
        """Enqueue the full catalog the downloader reports for a selection."""
        self._require_idle("enqueue")
        references = self.downloader.discover(criteria)
        logger.info(f"Discovered {len(references)} archives")
        self._queue.enqueue(references)
        return self

    def shrink_to_names(self, filenames: Iterable[str]) -> "CorpusPipeline":
        """
        Shrink the queue to archives with the given filenames.

        Meant to follow enqueue_discovered(), to keep only wanted archives.
        """
        self._require_idle("shrink_to_names")
        self._queue.shrink_to_names(filenames)
        return self

    def skip(self, count: int) -> "CorpusPipeline":
        """Discard ``count`` archives from the front of the queue."""
        self._require_idle("skip")
        self._queue.skip(count)
        return self

    def _require_idle(self, operation: str) -> None:
        if self._state is not PipelineState.IDLE:
            raise RuntimeError(
                f"{operation}() is only supported before the run starts "
                f"(state={self._state.value})"
            )

    # ------------------------------------------------------------------
    # Drain loop
    # ------------------------------------------------------------------

    def run(self) -> RunResult:
        """
        Process every queued archive in order.

        Returns:
            RunResult with statistics and every skip event

        Raises:
            RuntimeError: If setup() was not called
        """
        if not self._evaluator_ready or not self.sink.is_open():
            raise RuntimeError("setup() must be called before run()")

        start_time = time.perf_counter()
        run_id = str(uuid.uuid4())

        while not self._queue.is_empty:
            logger.info(f"Bulk File Queue:[{len(self._queue)}]")
            self._process_archive(self._queue.pop())

        self._state = PipelineState.DONE
        duration = time.perf_counter() - start_time

        logger.info(
            f"Run complete: archives={self._archive_count}, "
            f"written={self._write_count}, failed_archives={len(self._failures)}, "
            f"record_errors={len(self._record_errors)} ({duration:.1f}s)"
        )

        return RunResult(
            run_id=run_id,
            statistics=self.statistics,
            failed_archives=list(self._failures),
            record_errors=list(self._record_errors),
            duration_seconds=duration,
            metadata={
                "timestamp": datetime.now().isoformat(),
                "boundary_marker": self.boundary_marker,
                "delete_completed": self.delete_completed,
            },
        )

    def _process_archive(self, reference: ArchiveReference) -> None:
        """One iteration: fetch, read, close."""
        self._state = PipelineState.FETCHING
        try:
            session = ArchiveSession.open(
                reference, self.downloader, self.cursor_factory, self.boundary_marker
            )
        except (DownloadError, OSError) as e:
            logger.error(f"Exception during download of '{reference}': {e}")
            self._failures.append(
                ArchiveFailure(reference=reference, stage="fetch", message=str(e))
            )
            return

        logger.info(f"Bulk File:[{self._archive_count + 1}] '{session.local_path}'")

        completed = False
        try:
            with session:
                self._state = PipelineState.READING
                self._read_and_write(session)
                completed = True
                self._state = PipelineState.CLOSING
        except OSError as e:
            stage = "close" if completed else "read"
            logger.error(
                f"I/O failure ({stage}) in '{session.filename}' "
                f"after record {session.record_index}: {e}"
            )
            self._failures.append(
                ArchiveFailure(reference=reference, stage=stage, message=str(e))
            )

        self._state = PipelineState.CLOSING
        if completed and self.delete_completed:
            try:
                session.delete_local_file()
            except OSError as e:
                logger.warning(f"Could not delete '{session.local_path}': {e}")

        self._archive_count += 1

    def _read_and_write(self, session: ArchiveSession) -> None:
        """Evaluate each record of the session, writing the matches."""
        for record in session.records():
            try:
                matched = self.evaluator.evaluate(record)
            except RecordParseError as e:
                logger.error(
                    f"Error reading Patent {session.filename}:{session.record_index}: {e}"
                )
                self._record_errors.append(
                    RecordError(
                        archive=session.filename,
                        position=session.record_index,
                        message=str(e),
                    )
                )
                continue

            if matched:
                logger.info(
                    f"Found matching:[{self._write_count + 1}] at "
                    f"{session.filename}:{session.record_index} ; "
                    f"matched: {self.evaluator.last_match_description()}"
                )
                self._write(record)

    def _write(self, record: str) -> None:
        self.sink.write(record.encode("utf-8"))
        self._write_count += 1

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def archive_count(self) -> int:
        """Archives whose session was opened and closed."""
        return self._archive_count

    @property
    def write_count(self) -> int:
        """Records written to the sink."""
        return self._write_count

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    @property
    def queued(self) -> List[ArchiveReference]:
        """Snapshot of the pending references, head first."""
        return list(self._queue)

    @property
    def statistics(self) -> RunStatistics:
        return RunStatistics(
            archives_processed=self._archive_count,
            records_written=self._write_count,
        )
