"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - CorpusConfig: Root configuration object
    - DownloadConfig: Bulk-data endpoint, local directory, retry policy
    - OutputConfig: Output format and name
    - RunConfig: Skip count, delete-on-complete, boundary marker, eval mode

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Command-line flags layered over YAML values
"""

from corpus_builder.config.loader import ConfigLoader, load_config
from corpus_builder.config.models import (
    CorpusConfig,
    DownloadConfig,
    EvalMode,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    RetryPolicyConfig,
    RunConfig,
)

__all__ = [
    "ConfigLoader",
    "CorpusConfig",
    "DownloadConfig",
    "EvalMode",
    "LoggingConfig",
    "OutputConfig",
    "OutputFormat",
    "RetryPolicyConfig",
    "RunConfig",
    "load_config",
]
