"""Parsing of command-line selection strings into domain values."""

from __future__ import annotations

from typing import List, Optional

from corpus_builder.domain.classification import (
    Classification,
    CpcClassification,
    UspcClassification,
)
from corpus_builder.domain.entities import DocumentType
from corpus_builder.validation.run_validator import ConfigurationError


def parse_codes(text: Optional[str]) -> List[str]:
    """Split a comma list, trimming items and dropping empty ones."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_document_type(text: str) -> DocumentType:
    try:
        return DocumentType(text.strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown document type: {text!r}", field="type"
        ) from None


def parse_years(text: str) -> List[int]:
    """
    Parse a year selection.

    Accepts a comma list (``2014,2016``) or an inclusive dash range
    (``2014-2016``).

    Raises:
        ConfigurationError: If the text holds no valid years
    """
    text = (text or "").strip()
    if not text:
        raise ConfigurationError("Years are required", field="years")

    try:
        if "-" in text:
            bounds = [part.strip() for part in text.split("-") if part.strip()]
            if len(bounds) != 2:
                raise ValueError(text)
            start, end = int(bounds[0]), int(bounds[1])
            if start > end:
                raise ConfigurationError(
                    f"Year range {text!r} is reversed", field="years"
                )
            return list(range(start, end + 1))
        return [int(item) for item in parse_codes(text)]
    except ValueError:
        raise ConfigurationError(f"Invalid years: {text!r}", field="years") from None


def parse_classifications(
    cpc: Optional[str] = None,
    uspc: Optional[str] = None,
) -> List[Classification]:
    """
    Parse comma lists of CPC and USPC codes into classification values.

    Raises:
        ConfigurationError: If any code is malformed
    """
    wanted: List[Classification] = []
    try:
        wanted.extend(CpcClassification.from_text(code) for code in parse_codes(cpc))
        wanted.extend(UspcClassification.from_text(code) for code in parse_codes(uspc))
    except ValueError as e:
        raise ConfigurationError(str(e), field="classification") from e
    return wanted
