"""
Patent Document Reader - Full-Text XML to Document Model.

Parses one grant or application document of the bulk full-text format into
a PatentDocument. Only the bibliographic fields corpus selection and logging
need are modeled.

Element paths used (grant shown, application is analogous):
    us-patent-grant/us-bibliographic-data-grant/
        publication-reference/document-id/{country,doc-number,kind,date}
        invention-title
        classification-national/{main-classification,further-classification}
        classifications-cpc/{main-cpc,further-cpc}/classification-cpc/
            {section,class,subclass,main-group,subgroup}

All paths are anchored at the bibliographic block ('./*/'), so classes
listed under us-references-cited or us-field-of-classification-search are
not taken as the document's own.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from corpus_builder.domain.classification import (
    Classification,
    CpcClassification,
    UspcClassification,
)
from corpus_builder.domain.entities import DocumentType
from corpus_builder.interfaces.match_evaluator import RecordParseError

logger = logging.getLogger(__name__)

CPC_PATH = "./*/classifications-cpc/*/classification-cpc"
USPC_PATHS = (
    "./*/classification-national/main-classification",
    "./*/classification-national/further-classification",
)
DOC_ID_PATH = "./*/publication-reference/document-id"
TITLE_PATH = "./*/invention-title"

_ROOT_TYPES = {
    "us-patent-grant": DocumentType.GRANT,
    "us-patent-application": DocumentType.APPLICATION,
}


def parse_xml(record: str) -> ET.Element:
    """
    Parse raw record text into its root element.

    Raises:
        RecordParseError: If the XML is malformed
    """
    try:
        return ET.fromstring(record)
    except ET.ParseError as e:
        raise RecordParseError(f"Malformed XML: {e}", cause=e) from e


def iter_cpc(root: ET.Element) -> Iterator[CpcClassification]:
    """Yield the CPC codes of a document; unparsable entries are skipped."""
    for element in root.iterfind(CPC_PATH):
        try:
            yield CpcClassification.from_parts(
                section=element.findtext("section"),
                main_class=element.findtext("class"),
                subclass=element.findtext("subclass"),
                main_group=element.findtext("main-group"),
                subgroup=element.findtext("subgroup"),
            )
        except ValueError as e:
            logger.debug(f"Skipping CPC entry: {e}")


def iter_uspc(root: ET.Element) -> Iterator[UspcClassification]:
    """Yield the USPC codes of a document; unparsable entries are skipped."""
    for path in USPC_PATHS:
        for element in root.iterfind(path):
            if not element.text or not element.text.strip():
                continue
            try:
                yield UspcClassification.from_text(element.text)
            except ValueError as e:
                logger.debug(f"Skipping USPC entry: {e}")


class PatentDocument(BaseModel):
    """Bibliographic view of one patent document."""

    document_type: DocumentType
    country: str = ""
    doc_number: str
    kind: str = ""
    date: str = ""
    title: str = ""
    classifications: List[Classification] = Field(default_factory=list)

    @property
    def doc_id(self) -> str:
        return f"{self.country}{self.doc_number}{self.kind}"


class PatentDocumentReader:
    """Builds PatentDocument values from full-text XML records."""

    def read(self, record: str) -> PatentDocument:
        """
        Parse a record into a document.

        Raises:
            RecordParseError: If the XML is malformed or not a patent document
        """
        root = parse_xml(record)
        document_type = _ROOT_TYPES.get(root.tag)
        if document_type is None:
            raise RecordParseError(f"Unexpected root element <{root.tag}>")

        doc_id = root.find(DOC_ID_PATH)
        doc_number = self._text(doc_id, "doc-number")
        if not doc_number:
            raise RecordParseError(f"<{root.tag}> has no publication doc-number")

        classifications: List[Classification] = [*iter_cpc(root), *iter_uspc(root)]
        return PatentDocument(
            document_type=document_type,
            country=self._text(doc_id, "country"),
            doc_number=doc_number,
            kind=self._text(doc_id, "kind"),
            date=self._text(doc_id, "date"),
            title=self._title(root),
            classifications=classifications,
        )

    @staticmethod
    def _title(root: ET.Element) -> str:
        element = root.find(TITLE_PATH)
        if element is None:
            return ""
        return " ".join("".join(element.itertext()).split())

    @staticmethod
    def _text(parent: Optional[ET.Element], tag: str) -> str:
        if parent is None:
            return ""
        return (parent.findtext(tag) or "").strip()
