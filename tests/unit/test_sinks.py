"""
Unit Tests for Output Sinks.

Test Aspects Covered:
    ✅ Business Logic: Concatenated file, one zip entry per record
    ✅ Error Handling: Write when closed
    ✅ Edge Cases: Repeated open/close, missing parent directory
"""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from corpus_builder.adapters.sinks import SingleFileSink, ZipArchiveSink, create_output_sink
from corpus_builder.config.models import OutputConfig, OutputFormat


class TestSingleFileSink:
    """Test cases for SingleFileSink."""

    def test_concatenates_records(self, tmp_path: Path) -> None:
        """
        SCENARIO: Two records, one without trailing newline
        EXPECTED: Both in order, separated by exactly one newline
        """
        # Arrange
        sink = SingleFileSink(tmp_path / "out" / "corpus.xml")

        # Act
        sink.open()
        sink.write(b"<doc>1</doc>")
        sink.write(b"<doc>2</doc>\n")
        sink.close()

        # Assert
        assert (tmp_path / "out" / "corpus.xml").read_bytes() == b"<doc>1</doc>\n<doc>2</doc>\n"
        assert sink.record_count == 2

    def test_write_when_closed_raises(self, tmp_path: Path) -> None:
        sink = SingleFileSink(tmp_path / "corpus.xml")

        with pytest.raises(RuntimeError):
            sink.write(b"<doc/>")

    def test_open_and_close_are_idempotent(self, tmp_path: Path) -> None:
        """
        SCENARIO: open() and close() each called twice
        EXPECTED: File not truncated by the second open, no error on close
        """
        # Arrange
        sink = SingleFileSink(tmp_path / "corpus.xml")
        sink.open()
        sink.write(b"<doc/>")

        # Act
        sink.open()
        sink.close()
        sink.close()

        # Assert
        assert not sink.is_open()
        assert (tmp_path / "corpus.xml").read_bytes() == b"<doc/>\n"


class TestZipArchiveSink:
    """Test cases for ZipArchiveSink."""

    def test_one_entry_per_record(self, tmp_path: Path) -> None:
        """
        SCENARIO: Three records written
        EXPECTED: Three numbered entries holding the payloads
        """
        # Arrange
        path = tmp_path / "corpus.zip"
        sink = ZipArchiveSink(path)

        # Act
        sink.open()
        for i in range(3):
            sink.write(f"<doc>{i}</doc>".encode())
        sink.close()

        # Assert
        with zipfile.ZipFile(path) as archive:
            assert archive.namelist() == [
                "record-000001.xml", "record-000002.xml", "record-000003.xml",
            ]
            assert archive.read("record-000002.xml") == b"<doc>1</doc>"

    def test_write_when_closed_raises(self, tmp_path: Path) -> None:
        sink = ZipArchiveSink(tmp_path / "corpus.zip")
        sink.open()
        sink.close()

        with pytest.raises(RuntimeError):
            sink.write(b"<doc/>")


class TestCreateOutputSink:
    """Test cases for the sink factory."""

    def test_xml_format(self, tmp_path: Path) -> None:
        sink = create_output_sink(OutputConfig(format=OutputFormat.XML, name="tv"), tmp_path)

        assert isinstance(sink, SingleFileSink)
        assert sink.path == tmp_path / "tv.xml"

    def test_zip_format(self, tmp_path: Path) -> None:
        sink = create_output_sink(OutputConfig(format="zip", name="tv"), tmp_path)

        assert isinstance(sink, ZipArchiveSink)
        assert sink.path == tmp_path / "tv.zip"
