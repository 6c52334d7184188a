"""
Bulk Data Downloader - HTTP Access to Weekly Full-Text Archives.

Discovers the weekly archives of a document type by reading the yearly index
pages of the bulk-data site, and downloads them on demand into a local
directory.

Design Notes:
    - Index order is catalog order; duplicates on a page are dropped
    - Downloads stream to ``<name>.part`` and are renamed when complete
    - An existing non-empty local copy is reused, so reruns are cheap
    - Transient HTTP/IO failures go through ErrorHandler.retry
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import urljoin

import requests

from corpus_builder.config.models import DownloadConfig
from corpus_builder.domain.entities import ArchiveReference, DocumentType, SelectionCriteria
from corpus_builder.interfaces.downloader import DownloadError
from corpus_builder.resilience.error_handler import ErrorHandler, RetryConfig, RetryExhausted

logger = logging.getLogger(__name__)

_ZIP_LINK = re.compile(r"""href\s*=\s*["']([^"']+?\.zip)["']""", re.IGNORECASE)


class BulkDataDownloader:
    """Discovers and downloads weekly bulk full-text archives."""

    PRODUCT_PATHS: Dict[DocumentType, str] = {
        DocumentType.GRANT: "grant/redbook/fulltext",
        DocumentType.APPLICATION: "application/redbook/fulltext",
    }

    def __init__(
        self,
        config: DownloadConfig,
        session: Optional[requests.Session] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        """
        Initialize downloader.

        Args:
            config: Endpoint, local directory, timeout and retry policy
            session: HTTP session (a new one by default)
            error_handler: Retry policy runner (built from config by default)
        """
        self.config = config
        self.download_dir = Path(config.download_dir)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": config.user_agent})
        self.error_handler = error_handler or ErrorHandler(
            RetryConfig(
                max_attempts=config.retry.max_attempts,
                base_delay_seconds=config.retry.base_delay_seconds,
                max_delay_seconds=config.retry.max_delay_seconds,
                retryable_exceptions=(requests.RequestException, OSError),
            )
        )

    def index_url(self, document_type: DocumentType, year: int) -> str:
        base = self.config.base_url.rstrip("/")
        return f"{base}/{self.PRODUCT_PATHS[document_type]}/{year}/"

    def discover(self, criteria: SelectionCriteria) -> List[ArchiveReference]:
        """
        List the weekly archives for every selected year.

        Raises:
            DownloadError: If an index page cannot be retrieved
        """
        references: List[ArchiveReference] = []
        seen = set()
        prefix = criteria.document_type.archive_prefix

        for year in criteria.years:
            index_url = self.index_url(criteria.document_type, year)
            try:
                page = self.error_handler.retry(
                    lambda: self._get_text(index_url),
                    operation_name=f"index {index_url}",
                )
            except RetryExhausted as e:
                raise DownloadError(f"Cannot read index {index_url}: {e.__cause__}") from e

            found = 0
            for href in _ZIP_LINK.findall(page):
                url = urljoin(index_url, href)
                reference = ArchiveReference(url=url)
                if not reference.filename.lower().startswith(prefix) or url in seen:
                    continue
                seen.add(url)
                references.append(reference)
                found += 1
            logger.info(f"Year {year}: {found} {criteria.document_type.value} archives")

        return references

    def fetch(self, reference: ArchiveReference) -> Path:
        """
        Download an archive unless a local copy already exists.

        Raises:
            DownloadError: If the archive cannot be retrieved
        """
        target = self.download_dir / reference.filename
        if target.is_file() and target.stat().st_size > 0:
            logger.info(f"Using existing download {target}")
            return target

        try:
            self.error_handler.retry(
                lambda: self._download(reference, target),
                operation_name=f"download {reference.filename}",
            )
        except RetryExhausted as e:
            raise DownloadError(
                f"Download of {reference.url} failed: {e.__cause__}", reference
            ) from e
        return target

    def _get_text(self, url: str) -> str:
        response = self.session.get(url, timeout=self.config.timeout_seconds)
        self._check_status(response, url)
        return response.text

    def _download(self, reference: ArchiveReference, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        part = target.with_name(target.name + ".part")
        logger.info(f"Downloading {reference.url}")

        try:
            with self.session.get(
                reference.url, stream=True, timeout=self.config.timeout_seconds
            ) as response:
                self._check_status(response, reference.url, reference)
                with open(part, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                        if chunk:
                            f.write(chunk)
            part.replace(target)
        except BaseException:
            part.unlink(missing_ok=True)
            raise

        logger.info(f"Downloaded {target} ({target.stat().st_size} bytes)")

    def _check_status(
        self,
        response: requests.Response,
        url: str,
        reference: Optional[ArchiveReference] = None,
    ) -> None:
        """Client errors are permanent; server errors and 429 are retried."""
        status = response.status_code
        if 400 <= status < 500 and status != 429:
            raise DownloadError(f"HTTP {status} for {url}", reference)
        response.raise_for_status()
