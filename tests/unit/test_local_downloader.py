"""
Unit Tests for LocalArchiveDownloader.

Test Aspects Covered:
    ✅ Business Logic: Directory discovery filtered by type and year
    ✅ Error Handling: Missing directory, missing archive
"""

from __future__ import annotations

from pathlib import Path

import pytest

from corpus_builder.adapters import LocalArchiveDownloader
from corpus_builder.domain.entities import ArchiveReference, DocumentType, SelectionCriteria
from corpus_builder.interfaces.downloader import DownloadError


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    """Directory with grant and application archives of two years."""
    for name in ("ipg150106.zip", "ipg140114.zip", "ipg140107.zip", "ipa140102.zip", "notes.txt"):
        (tmp_path / name).write_bytes(b"PK")
    return tmp_path


class TestDiscover:
    """Test cases for directory discovery."""

    def test_sorted_and_filtered(self, archive_dir: Path, grant_criteria) -> None:
        """
        SCENARIO: Grants of 2014 requested from a mixed directory
        EXPECTED: Only 2014 grant archives, in filename order
        """
        # Act
        references = LocalArchiveDownloader(archive_dir).discover(grant_criteria)

        # Assert
        assert [ref.filename for ref in references] == ["ipg140107.zip", "ipg140114.zip"]
        assert references[0].url.startswith("file://")

    def test_applications(self, archive_dir: Path) -> None:
        criteria = SelectionCriteria(document_type=DocumentType.APPLICATION, years=[2014])

        references = LocalArchiveDownloader(archive_dir).discover(criteria)

        assert [ref.filename for ref in references] == ["ipa140102.zip"]

    def test_other_zip_names_kept(self, tmp_path: Path, grant_criteria) -> None:
        """
        SCENARIO: Archive not named like a weekly bulk file
        EXPECTED: Kept regardless of type and year
        """
        (tmp_path / "sample.zip").write_bytes(b"PK")

        references = LocalArchiveDownloader(tmp_path).discover(grant_criteria)

        assert [ref.filename for ref in references] == ["sample.zip"]

    def test_missing_directory(self, tmp_path: Path, grant_criteria) -> None:
        with pytest.raises(DownloadError):
            LocalArchiveDownloader(tmp_path / "absent").discover(grant_criteria)


class TestFetch:
    """Test cases for resolving local archives."""

    def test_returns_local_path(self, archive_dir: Path, grant_criteria) -> None:
        # Arrange
        downloader = LocalArchiveDownloader(archive_dir)
        reference = downloader.discover(grant_criteria)[0]

        # Act
        path = downloader.fetch(reference)

        # Assert
        assert path == archive_dir / "ipg140107.zip"

    def test_missing_archive(self, archive_dir: Path) -> None:
        reference = ArchiveReference(url="https://bulk.example.org/ipg990105.zip")

        with pytest.raises(DownloadError):
            LocalArchiveDownloader(archive_dir).fetch(reference)
