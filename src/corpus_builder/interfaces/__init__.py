"""
Interfaces Layer - Abstract Protocols for Collaborators.

This package defines the abstract interfaces (using typing.Protocol) for the
collaborators the pipeline drives. High-level modules depend on these
abstractions, not on concrete implementations.

Protocols:
    - Downloader: archive discovery and retrieval
    - RecordCursor: sequential record extraction from one archive
    - MatchEvaluator: record match strategy
    - OutputSink: append-only corpus destination

Boundary exceptions live beside the protocol that raises them.
"""

from corpus_builder.interfaces.downloader import Downloader, DownloadError
from corpus_builder.interfaces.match_evaluator import MatchEvaluator, RecordParseError
from corpus_builder.interfaces.output_sink import OutputSink
from corpus_builder.interfaces.record_cursor import (
    ArchiveOpenError,
    CursorFactory,
    RecordCursor,
    RecordsExhausted,
)

__all__ = [
    "ArchiveOpenError",
    "CursorFactory",
    "DownloadError",
    "Downloader",
    "MatchEvaluator",
    "OutputSink",
    "RecordCursor",
    "RecordParseError",
    "RecordsExhausted",
]
