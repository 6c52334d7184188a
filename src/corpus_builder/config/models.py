"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Output sink flavor."""

    XML = "xml"
    ZIP = "zip"


class EvalMode(str, Enum):
    """Match strategy: XPath text lookup or full document model."""

    XML = "xml"
    PATENT = "patent"


class RetryPolicyConfig(BaseModel):
    """Retry settings for bulk-data HTTP calls."""

    max_attempts: int = Field(default=3, ge=1, le=20)
    base_delay_seconds: float = Field(default=2.0, ge=0)
    max_delay_seconds: float = Field(default=60.0, ge=0)


class DownloadConfig(BaseModel):
    """Configuration for the bulk-data downloader."""

    base_url: str = Field(default="https://bulkdata.uspto.gov/data/patent")
    download_dir: Path = Field(default=Path("download"))
    timeout_seconds: float = Field(default=60.0, gt=0)
    chunk_size: int = Field(default=1024 * 1024, ge=1024)
    user_agent: str = Field(default="corpus-builder/0.4")
    retry: RetryPolicyConfig = Field(default_factory=RetryPolicyConfig)


class OutputConfig(BaseModel):
    """Configuration for the corpus output."""

    format: OutputFormat = OutputFormat.XML
    name: str = Field(default="corpus", min_length=1)


class RunConfig(BaseModel):
    """Configuration for queue shaping and the drain loop."""

    skip: int = Field(default=0, ge=0)
    delete_completed: bool = True
    boundary_marker: str = Field(default="us-patent", min_length=1)
    eval_mode: EvalMode = EvalMode.XML


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(
        default="INFO", pattern=r"(?i)^(debug|info|warning|error|critical)$"
    )


class CorpusConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
