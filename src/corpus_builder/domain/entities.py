"""
Core Domain Entities.

This module defines the fundamental entities of the Corpus Builder domain:
the archives that get queued and the selection that produced them.
"""

from __future__ import annotations

from enum import Enum
from typing import List
from urllib.parse import unquote, urlparse

from pydantic import BaseModel, Field


class DocumentType(str, Enum):
    """Kind of bulk full-text product to draw archives from."""

    GRANT = "grant"
    APPLICATION = "application"

    @property
    def first_full_text_year(self) -> int:
        """First year of the weekly ipg/ipa XML archives; earlier years use other formats."""
        return 2005

    @property
    def archive_prefix(self) -> str:
        """Filename prefix of the weekly archives (ipg / ipa)."""
        if self is DocumentType.GRANT:
            return "ipg"
        return "ipa"


class ArchiveReference(BaseModel):
    """Fetchable location of one remote bulk archive."""

    url: str = Field(..., min_length=1, description="Location of the archive")

    model_config = {"frozen": True}

    @property
    def filename(self) -> str:
        """Final path segment, used as the whitelist key."""
        path = urlparse(self.url).path or self.url
        return unquote(path.rstrip("/").rsplit("/", 1)[-1])

    def __hash__(self) -> int:
        return hash(self.url)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArchiveReference):
            return NotImplemented
        return self.url == other.url

    def __str__(self) -> str:
        return self.url


class SelectionCriteria(BaseModel):
    """Caller-level selection of which bulk archives to discover."""

    document_type: DocumentType = Field(..., description="Grant or application")
    years: List[int] = Field(default_factory=list, description="Publication years")

    model_config = {"frozen": True}
