"""
Local Archive Downloader.

Serves archives that are already on disk, for offline reruns and testing.
Discovery lists a directory; fetching just resolves the filename.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from corpus_builder.domain.entities import ArchiveReference, SelectionCriteria
from corpus_builder.interfaces.downloader import DownloadError

# Weekly archive names: ipgYYMMDD / ipaYYMMDD
_BULK_NAME = re.compile(r"^(?P<prefix>ip[ga])(?P<yy>\d{2})\d{4}", re.IGNORECASE)


class LocalArchiveDownloader:
    """Downloader over a directory of previously fetched archives."""

    def __init__(self, directory: Path, pattern: str = "*.zip") -> None:
        """
        Initialize with the archive directory.

        Args:
            directory: Directory holding the archives
            pattern: Glob selecting archive files
        """
        self.directory = Path(directory)
        self.pattern = pattern

    def discover(self, criteria: SelectionCriteria) -> List[ArchiveReference]:
        """
        List archives in filename order.

        Files named like weekly bulk archives are filtered by document type
        and year; any other matching file is kept.
        """
        if not self.directory.is_dir():
            raise DownloadError(f"Archive directory does not exist: {self.directory}")

        return [
            ArchiveReference(url=path.resolve().as_uri())
            for path in sorted(self.directory.glob(self.pattern))
            if path.is_file() and self._matches(path.name, criteria)
        ]

    def _matches(self, filename: str, criteria: SelectionCriteria) -> bool:
        match = _BULK_NAME.match(filename)
        if match is None:
            return True
        if match.group("prefix").lower() != criteria.document_type.archive_prefix:
            return False
        return not criteria.years or 2000 + int(match.group("yy")) in criteria.years

    def fetch(self, reference: ArchiveReference) -> Path:
        path = self.directory / reference.filename
        if not path.is_file():
            raise DownloadError(f"Archive not found: {path}", reference)
        return path
