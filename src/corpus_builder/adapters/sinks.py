"""
Output Sinks - Destinations for Matching Records.

Two flavors:
    - SingleFileSink: all records concatenated in one file
    - ZipArchiveSink: one zip entry per record

Both are append-only, create their parent directory on open(), and close
idempotently.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import BinaryIO, Optional

from corpus_builder.config.models import OutputConfig, OutputFormat

logger = logging.getLogger(__name__)


class SingleFileSink:
    """Concatenates records into one file, one record after another."""

    def __init__(self, path: Path, separator: bytes = b"\n") -> None:
        """
        Initialize sink.

        Args:
            path: Output file, truncated on open()
            separator: Bytes appended after each record when it does not
                       already end with them
        """
        self.path = Path(path)
        self.separator = separator
        self._file: Optional[BinaryIO] = None
        self.record_count = 0

    def open(self) -> None:
        if self._file is not None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "wb")
        logger.info(f"Writing corpus to {self.path}")

    def is_open(self) -> bool:
        return self._file is not None

    def write(self, data: bytes) -> None:
        if self._file is None:
            raise RuntimeError(f"Sink {self.path} is not open")
        self._file.write(data)
        if self.separator and not data.endswith(self.separator):
            self._file.write(self.separator)
        self.record_count += 1

    def close(self) -> None:
        if self._file is None:
            return
        self._file.close()
        self._file = None
        logger.info(f"Closed {self.path} ({self.record_count} records)")


class ZipArchiveSink:
    """Stores each record as its own entry in a zip archive."""

    ENTRY_TEMPLATE = "record-{index:06d}.xml"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._zip: Optional[zipfile.ZipFile] = None
        self.record_count = 0

    def open(self) -> None:
        if self._zip is not None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._zip = zipfile.ZipFile(self.path, "w", compression=zipfile.ZIP_DEFLATED)
        logger.info(f"Writing corpus archive to {self.path}")

    def is_open(self) -> bool:
        return self._zip is not None

    def write(self, data: bytes) -> None:
        if self._zip is None:
            raise RuntimeError(f"Sink {self.path} is not open")
        self.record_count += 1
        self._zip.writestr(self.ENTRY_TEMPLATE.format(index=self.record_count), data)

    def close(self) -> None:
        if self._zip is None:
            return
        self._zip.close()
        self._zip = None
        logger.info(f"Closed {self.path} ({self.record_count} records)")


def create_output_sink(config: OutputConfig, directory: Path):
    """
    Factory function to create the configured sink.

    Args:
        config: Output format and name
        directory: Directory the output file is placed in

    Returns:
        SingleFileSink for xml, ZipArchiveSink for zip
    """
    if config.format == OutputFormat.ZIP:
        return ZipArchiveSink(Path(directory) / f"{config.name}.zip")
    return SingleFileSink(Path(directory) / f"{config.name}.xml")
