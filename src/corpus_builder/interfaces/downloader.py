"""
Downloader Protocol.

Defines the abstract interface for turning archive references into local
files. The downloader is responsible for:
    - Discovering the catalog of archives for a selection
    - Making a local copy of one archive available on demand

Design Notes:
    - Retries, HTTP semantics and rate limiting stay behind this seam
    - fetch() must be safe to repeat across separate runs
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from corpus_builder.domain.entities import ArchiveReference, SelectionCriteria


class DownloadError(Exception):
    """Raised when an archive cannot be retrieved."""

    def __init__(
        self, message: str, reference: Optional["ArchiveReference"] = None
    ) -> None:
        super().__init__(message)
        self.reference = reference
        self.message = message


@runtime_checkable
class Downloader(Protocol):
    """Abstract interface for archive discovery and retrieval."""

    def discover(self, criteria: "SelectionCriteria") -> List["ArchiveReference"]:
        """
        List every archive matching a selection, in catalog order.

        Args:
            criteria: Document type and years to select

        Returns:
            Archive references; the queue preserves this order
        """
        ...

    def fetch(self, reference: "ArchiveReference") -> Path:
        """
        Make the archive available as a local file.

        Args:
            reference: Archive to retrieve

        Returns:
            Path of the local copy

        Raises:
            DownloadError: If the archive cannot be retrieved
        """
        ...
