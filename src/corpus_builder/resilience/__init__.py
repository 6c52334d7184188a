"""
Resilience Package - Retry for Transient Failures.

Design Principles:
    - Fail fast for permanent errors
    - Retry with backoff for transient network errors
    - Per-archive and per-record failures are handled by the pipeline, not here
"""

from corpus_builder.resilience.error_handler import (
    ErrorHandler,
    RetryConfig,
    RetryExhausted,
)

__all__ = ["ErrorHandler", "RetryConfig", "RetryExhausted"]
