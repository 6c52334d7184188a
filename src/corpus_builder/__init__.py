"""
Corpus Builder - Filtered Sub-Corpus Extraction from Bulk Archives.

Downloads bulk patent archives one at a time, streams the documents they
bundle, keeps the ones whose classifications match the requested codes, and
appends them to a single output collection.

Architecture:
    - Ports & Adapters: collaborators are typing.Protocol seams
    - Dependency Injection for testability
    - Strategy Pattern for the match evaluator (XPath vs. document model)
    - Configuration-driven behavior via YAML

Main Components:
    - domain: ArchiveReference, classification codes, run statistics
    - interfaces: Protocols for downloader, record cursor, evaluator, sink
    - pipeline: ArchiveQueue and the CorpusPipeline drain loop
    - adapters: Bulk data downloader, dump reader, output sinks
    - matching: Classification match strategies
    - config: Configuration models and loaders

Example:
    >>> from corpus_builder.pipeline import CorpusPipeline
    >>> pipeline = CorpusPipeline(downloader, evaluator, sink).setup()
    >>> pipeline.enqueue_discovered(criteria).skip(2)
    >>> result = pipeline.run()
    >>> pipeline.close()
    >>> print(f"Wrote {result.statistics.records_written} documents")

"""

import logging
from typing import Union

__version__ = "0.4.0"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Corpus Builder.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level or level name (default: INFO)
        format: Log message format

    Example:
        >>> import corpus_builder
        >>> corpus_builder.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("corpus_builder").setLevel(level)
