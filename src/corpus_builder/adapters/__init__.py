"""
Adapters Package - Infrastructure Implementations of the Interfaces.

Downloaders:
    - BulkDataDownloader: HTTP discovery and download of weekly archives
    - LocalArchiveDownloader: archives already on disk

Record cursor:
    - DumpXmlReader: concatenated-XML bulk files (zip or plain)

Output sinks:
    - SingleFileSink, ZipArchiveSink, create_output_sink
"""

from corpus_builder.adapters.bulk_downloader import BulkDataDownloader
from corpus_builder.adapters.dump_reader import DumpXmlReader
from corpus_builder.adapters.local_downloader import LocalArchiveDownloader
from corpus_builder.adapters.sinks import SingleFileSink, ZipArchiveSink, create_output_sink

__all__ = [
    "BulkDataDownloader",
    "DumpXmlReader",
    "LocalArchiveDownloader",
    "SingleFileSink",
    "ZipArchiveSink",
    "create_output_sink",
]
