"""
Run Validator - Validate Run Selection Before Any Queue Work.

Validates:
    - Document type is supported
    - Years are present, not in the future, not before the product existed
    - At least one classification filter is requested
    - Skip count is not negative

Design Notes:
    - Fail-fast principle: every problem is collected, then raised once
    - ConfigurationError is fatal; the CLI exits non-zero on it
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence, Set

from corpus_builder.domain.classification import Classification
from corpus_builder.domain.entities import DocumentType, SelectionCriteria

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when run selection inputs are missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class RunValidator:
    """
    Validates run selection before the pipeline is populated.

    Validates:
        - Years fall inside the full-text range of the document type
        - Classification filters are present
        - Skip count is usable
    """

    def __init__(
        self,
        supported_types: Optional[Set[DocumentType]] = None,
        today: Optional[date] = None,
    ) -> None:
        """
        Initialize run validator.

        Args:
            supported_types: Document types this deployment can process.
                             Defaults to all DocumentType values.
            today: Reference date for the future-year check
        """
        self.supported_types = supported_types or set(DocumentType)
        self._today = today

    def validate(
        self,
        criteria: SelectionCriteria,
        classifications: Sequence[Classification],
        skip: int = 0,
    ) -> None:
        """
        Validate a run selection.

        Args:
            criteria: Document type and years
            classifications: Wanted classification codes
            skip: Number of archives to drop from the queue front

        Raises:
            ConfigurationError: If validation fails
        """
        errors: List[str] = []

        if criteria.document_type not in self.supported_types:
            supported = ", ".join(sorted(t.value for t in self.supported_types))
            errors.append(
                f"Document type {criteria.document_type.value} not supported. "
                f"Supported: {supported}"
            )

        errors.extend(self._validate_years(criteria))

        if not classifications:
            errors.append("At least one CPC or USPC classification is required")

        if skip < 0:
            errors.append(f"Skip count must be >= 0, got {skip}")

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Run validation failed: {error_message}")
            raise ConfigurationError(error_message)

        logger.debug(
            f"Run validated: type={criteria.document_type.value}, "
            f"years={criteria.years}, filters={len(classifications)}"
        )

    def _validate_years(self, criteria: SelectionCriteria) -> List[str]:
        """Validate years against the product's published range."""
        if not criteria.years:
            return ["At least one year is required"]

        errors: List[str] = []
        current_year = (self._today or date.today()).year
        first_year = criteria.document_type.first_full_text_year

        for year in criteria.years:
            if year > current_year:
                errors.append(f"Year {year} is in the future")
            elif year < first_year:
                errors.append(
                    f"Year {year} is before the first {criteria.document_type.value} "
                    f"full-text year {first_year}"
                )
        return errors
