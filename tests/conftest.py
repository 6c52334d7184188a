"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from corpus_builder.config.models import CorpusConfig, DownloadConfig
from corpus_builder.domain.entities import DocumentType, SelectionCriteria
from corpus_builder.pipeline import CorpusPipeline
from corpus_builder.resilience import ErrorHandler, RetryConfig
from tests.fixtures.fakes import FakeArchiveStore, MemorySink, PredicateEvaluator


@pytest.fixture
def archive_store() -> FakeArchiveStore:
    """Three archives, two matching records each."""
    return FakeArchiveStore(
        {
            "ipg140107.zip": ["a1", "a2 MATCH", "a3", "a4 MATCH"],
            "ipg140114.zip": ["b1 MATCH", "b2", "b3 MATCH"],
            "ipg140121.zip": ["c1", "c2 MATCH", "c3 MATCH", "c4"],
        }
    )


@pytest.fixture
def evaluator() -> PredicateEvaluator:
    """Evaluator matching records that contain MATCH."""
    return PredicateEvaluator()


@pytest.fixture
def memory_sink() -> MemorySink:
    """Create in-memory output sink."""
    return MemorySink()


@pytest.fixture
def pipeline(
    archive_store: FakeArchiveStore,
    evaluator: PredicateEvaluator,
    memory_sink: MemorySink,
) -> CorpusPipeline:
    """Pipeline wired to the in-memory collaborators."""
    return CorpusPipeline(
        downloader=archive_store,
        evaluator=evaluator,
        sink=memory_sink,
        cursor_factory=archive_store.cursor,
    )


@pytest.fixture
def grant_criteria() -> SelectionCriteria:
    """Grants published in 2014."""
    return SelectionCriteria(document_type=DocumentType.GRANT, years=[2014])


@pytest.fixture
def no_wait_handler() -> ErrorHandler:
    """Retry handler that never sleeps."""
    return ErrorHandler(
        RetryConfig(max_attempts=3, base_delay_seconds=0.0),
        sleep=lambda _: None,
    )


@pytest.fixture
def download_config(tmp_path: Path) -> DownloadConfig:
    """Download settings pointing at a test host and tmp directory."""
    return DownloadConfig(
        base_url="https://bulk.example.org/data/patent",
        download_dir=tmp_path / "download",
    )


@pytest.fixture
def default_config() -> CorpusConfig:
    """Create default corpus configuration."""
    return CorpusConfig()


@pytest.fixture
def today() -> date:
    """Fixed reference date for year validation."""
    return date(2024, 6, 1)
