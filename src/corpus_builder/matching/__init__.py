"""
Matching Package - Record Match Strategies.

Each strategy implements the MatchEvaluator protocol and decides whether a
patent document belongs in the corpus based on its classification codes.

Strategies:
    - XPathClassificationMatch: classification elements read from the XML
    - DocumentModelMatch: full PatentDocument parse, then classification check

Design Principles:
    - Strategies are interchangeable values, not a class hierarchy
    - Wanted codes injected via constructor
    - Precomputation in setup(), per-record work in evaluate()
"""

from corpus_builder.matching.patent_reader import PatentDocument, PatentDocumentReader
from corpus_builder.matching.strategies import (
    DocumentModelMatch,
    XPathClassificationMatch,
    create_match_evaluator,
)

__all__ = [
    "DocumentModelMatch",
    "PatentDocument",
    "PatentDocumentReader",
    "XPathClassificationMatch",
    "create_match_evaluator",
]
