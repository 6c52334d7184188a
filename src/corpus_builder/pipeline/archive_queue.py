"""
Archive Queue - Ordered FIFO of Pending Archives.

Processing order equals arrival order; nothing reorders or deduplicates.
Shaping operations (enqueue, shrink, skip) are meant to compose in that order
before the drain loop starts.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Iterator

from corpus_builder.domain.entities import ArchiveReference

logger = logging.getLogger(__name__)


class ArchiveQueue:
    """FIFO of archive references awaiting processing."""

    def __init__(self, references: Iterable[ArchiveReference] = ()) -> None:
        self._items: Deque[ArchiveReference] = deque(references)

    def enqueue(self, references: Iterable[ArchiveReference]) -> int:
        """
        Append references to the tail, preserving their order.

        Returns:
            Number of references appended
        """
        before = len(self._items)
        self._items.extend(references)
        added = len(self._items) - before
        logger.debug(f"Enqueued {added} archives, queue size {len(self._items)}")
        return added

    def shrink_to_names(self, allowed_filenames: Iterable[str]) -> int:
        """
        Keep only references whose filename is in the allowed collection.

        Survivors keep their relative order.

        Returns:
            Number of references removed
        """
        allowed = set(allowed_filenames)
        before = len(self._items)
        self._items = deque(ref for ref in self._items if ref.filename in allowed)
        removed = before - len(self._items)
        logger.info(
            f"Queue shrunk to {len(self._items)} archives ({removed} not in whitelist)"
        )
        return removed

    def skip(self, count: int) -> int:
        """
        Discard up to ``count`` references from the front.

        Returns:
            Number of references discarded

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Skip count must be >= 0, got {count}")
        skipped = min(count, len(self._items))
        for _ in range(skipped):
            self._items.popleft()
        if skipped:
            logger.info(f"Skipped {skipped} archives, queue size {len(self._items)}")
        return skipped

    def pop(self) -> ArchiveReference:
        """
        Remove and return the head of the queue.

        Raises:
            IndexError: If the queue is empty
        """
        return self._items.popleft()

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ArchiveReference]:
        return iter(list(self._items))
