"""
Validation Package - Run Selection Parsing and Validation.

This package provides:
    - selection_parser: years, document type, classification lists
    - RunValidator: fail-fast checks before any queue work

Design Principles:
    - Fail fast on invalid input
    - Clear, actionable error messages
"""

from corpus_builder.validation.run_validator import ConfigurationError, RunValidator
from corpus_builder.validation.selection_parser import (
    parse_classifications,
    parse_codes,
    parse_document_type,
    parse_years,
)

__all__ = [
    "ConfigurationError",
    "RunValidator",
    "parse_classifications",
    "parse_codes",
    "parse_document_type",
    "parse_years",
]
