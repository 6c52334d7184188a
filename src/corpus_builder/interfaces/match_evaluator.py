"""
Match Evaluator Protocol.

Defines the capability every match strategy offers: decide whether one raw
record belongs in the corpus, and describe what caused the last match.

Design Notes:
    - Strategies are interchangeable values chosen at construction time
    - setup() may do expensive precomputation, evaluate() amortizes it
    - Evaluators own their last-match state, the pipeline only reads it
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


class RecordParseError(Exception):
    """Raised when a single record is malformed and cannot be evaluated."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


@runtime_checkable
class MatchEvaluator(Protocol):
    """Abstract interface for record match strategies."""

    def setup(self) -> None:
        """Prepare lookup structures. Called once before any evaluate()."""
        ...

    def evaluate(self, record: str) -> bool:
        """
        Decide whether a raw record matches.

        Args:
            record: Raw record text as produced by the cursor

        Returns:
            True if the record matches

        Raises:
            RecordParseError: If the record is malformed
        """
        ...

    def last_match_description(self) -> str:
        """Describe the criterion behind the most recent positive match."""
        ...
