"""
Domain Layer - Core Entities and Value Objects.

This package contains the core domain model for the Corpus Builder.
Everything here is plain Pydantic with no infrastructure dependencies.

Entities:
    - ArchiveReference: Fetchable location of one bulk archive
    - DocumentType: Grant or application full-text product
    - SelectionCriteria: Document type and years to discover

Classification:
    - CpcClassification / UspcClassification: tagged by ``kind``
    - classification_matches: dispatch on taxonomy kind

Value Objects:
    - RunStatistics: archives processed, records written
    - RunResult: statistics plus every skip event of a run
"""

from corpus_builder.domain.classification import (
    Classification,
    CpcClassification,
    UspcClassification,
    classification_matches,
)
from corpus_builder.domain.entities import (
    ArchiveReference,
    DocumentType,
    SelectionCriteria,
)
from corpus_builder.domain.value_objects import (
    ArchiveFailure,
    RecordError,
    RunResult,
    RunStatistics,
)

__all__ = [
    "ArchiveFailure",
    "ArchiveReference",
    "Classification",
    "CpcClassification",
    "DocumentType",
    "RecordError",
    "RunResult",
    "RunStatistics",
    "SelectionCriteria",
    "UspcClassification",
    "classification_matches",
]
