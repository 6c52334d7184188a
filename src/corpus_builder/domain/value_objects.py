"""
Value Objects for Domain Layer.

Value objects are immutable snapshots describing a run: its counters and the
individual skip events that happened along the way.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from corpus_builder.domain.entities import ArchiveReference


class RunStatistics(BaseModel):
    """Progress counters of a pipeline run."""

    archives_processed: int = Field(default=0, ge=0)
    records_written: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class RecordError(BaseModel):
    """A single record that could not be evaluated and was skipped."""

    archive: str = Field(..., description="Archive filename")
    position: int = Field(..., ge=0, description="Record position in archive")
    message: str

    model_config = {"frozen": True}


class ArchiveFailure(BaseModel):
    """An archive that could not be fetched, opened or fully read."""

    reference: ArchiveReference
    stage: str = Field(..., description="fetch or read")
    message: str

    model_config = {"frozen": True}


class RunResult(BaseModel):
    """Complete report of a drain-loop run."""

    run_id: str
    statistics: RunStatistics
    failed_archives: List[ArchiveFailure] = Field(default_factory=list)
    record_errors: List[RecordError] = Field(default_factory=list)
    duration_seconds: float = Field(default=0.0, ge=0)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def failed_filenames(self) -> List[str]:
        """Filenames to feed back through the whitelist for a re-run."""
        return [f.reference.filename for f in self.failed_archives]
