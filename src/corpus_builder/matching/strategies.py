"""
Match Strategies - Classification-Based Record Selection.

Provides interchangeable implementations of the MatchEvaluator protocol:
    - XPathClassificationMatch: pulls classification elements straight out
      of the parsed XML and checks them against a precomputed index
    - DocumentModelMatch: builds the full PatentDocument first, then checks
      its classifications

Design Notes:
    - Chosen at pipeline construction via create_match_evaluator()
    - Each keeps the wanted code behind its most recent match for logging
    - Malformed records surface as RecordParseError
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from corpus_builder.config.models import EvalMode
from corpus_builder.domain.classification import Classification, classification_matches
from corpus_builder.matching.patent_reader import (
    PatentDocumentReader,
    iter_cpc,
    iter_uspc,
    parse_xml,
)

logger = logging.getLogger(__name__)


def _index_key(code: Classification) -> Tuple[str, ...]:
    """Coarse bucket for a code: CPC section, USPC main class."""
    if code.kind == "cpc":
        return ("cpc", code.section)
    return ("uspc", code.main_class)


def _describe(wanted: Classification, found: Classification) -> str:
    text = f"{wanted.kind.upper()} {wanted.describe()}"
    if found.describe() != wanted.describe():
        text += f" ({found.describe()})"
    return text


class XPathClassificationMatch:
    """Match on classification elements read directly from the XML tree."""

    def __init__(self, wanted: Sequence[Classification]) -> None:
        """
        Initialize with the wanted codes.

        Args:
            wanted: Codes a record must intersect with to match
        """
        self.wanted = list(wanted)
        self._index: Dict[Tuple[str, ...], List[Classification]] = {}
        self._extractors: List[Callable] = []
        self._last_match = ""

    def setup(self) -> None:
        """Bucket the wanted codes and pick the extractors that can hit."""
        index: Dict[Tuple[str, ...], List[Classification]] = defaultdict(list)
        for code in self.wanted:
            index[_index_key(code)].append(code)
        self._index = dict(index)

        kinds = {code.kind for code in self.wanted}
        self._extractors = []
        if "cpc" in kinds:
            self._extractors.append(iter_cpc)
        if "uspc" in kinds:
            self._extractors.append(iter_uspc)

        logger.debug(
            f"XPath match ready: {len(self.wanted)} codes in {len(self._index)} buckets"
        )

    def evaluate(self, record: str) -> bool:
        root = parse_xml(record)
        for extract in self._extractors:
            for found in extract(root):
                for wanted in self._index.get(_index_key(found), ()):
                    if classification_matches(wanted, found):
                        self._last_match = _describe(wanted, found)
                        return True
        self._last_match = ""
        return False

    def last_match_description(self) -> str:
        return self._last_match


class DocumentModelMatch:
    """Match on the classifications of a fully parsed PatentDocument."""

    def __init__(
        self,
        wanted: Sequence[Classification],
        reader: Optional[PatentDocumentReader] = None,
    ) -> None:
        self.wanted = list(wanted)
        self.reader = reader or PatentDocumentReader()
        self._last_match = ""

    def setup(self) -> None:
        logger.debug(f"Document model match ready: {len(self.wanted)} codes")

    def evaluate(self, record: str) -> bool:
        document = self.reader.read(record)
        for wanted in self.wanted:
            for found in document.classifications:
                if classification_matches(wanted, found):
                    self._last_match = f"{_describe(wanted, found)} in {document.doc_id}"
                    return True
        self._last_match = ""
        return False

    def last_match_description(self) -> str:
        return self._last_match


def create_match_evaluator(mode: EvalMode, wanted: Iterable[Classification]):
    """
    Factory function to create the evaluator for an eval mode.

    Args:
        mode: EvalMode.XML or EvalMode.PATENT
        wanted: Classification codes to select

    Returns:
        XPathClassificationMatch or DocumentModelMatch
    """
    wanted = list(wanted)
    if mode == EvalMode.PATENT:
        return DocumentModelMatch(wanted)
    return XPathClassificationMatch(wanted)
