"""
Pipeline Package - Queue and Drain-Loop Orchestration.

Components:
    - ArchiveQueue: FIFO of pending archive references
    - ArchiveSession: the single archive in flight, released on every exit
    - CorpusPipeline: setup, queue shaping, drain loop, close

The pipeline is responsible for:
    - Processing archives strictly in queue order, one at a time
    - Writing matches in archive-then-record order
    - Skipping unusable archives and records without aborting the run
    - Keeping run statistics

Design Principles:
    - All collaborators injected via constructor
    - Single-threaded, synchronous
"""

from corpus_builder.pipeline.archive_queue import ArchiveQueue
from corpus_builder.pipeline.corpus_pipeline import CorpusPipeline, PipelineState
from corpus_builder.pipeline.session import ArchiveSession

__all__ = ["ArchiveQueue", "ArchiveSession", "CorpusPipeline", "PipelineState"]
