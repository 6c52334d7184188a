"""
Classification Codes - Tagged Union over Taxonomy Kind.

Patent documents carry codes from more than one taxonomy. Each taxonomy is a
separate pydantic model tagged by its ``kind`` literal; matching dispatches on
that tag rather than on shared behavior.

Supported taxonomies:
    - CPC: Cooperative Patent Classification (e.g. ``H04N21/00``)
    - USPC: US Patent Classification (e.g. ``725/61`` or ``725``)
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

_CPC_PATTERN = re.compile(
    r"^(?P<section>[A-HY])"
    r"(?:(?P<main_class>\d{2})"
    r"(?:(?P<subclass>[A-Z])"
    r"(?:\s*(?P<main_group>\d{1,4})"
    r"(?:\s*/\s*(?P<subgroup>\d{1,6}))?)?)?)?$"
)

_USPC_CLASS_PATTERN = re.compile(r"^[A-Z0-9]{1,3}$")
_USPC_SUBCLASS_PATTERN = re.compile(r"^[A-Z0-9.]*$")


def _strip_zeros(value: Optional[str]) -> str:
    """Normalize a numeric code segment ("021" -> "21", "00" -> "")."""
    if not value:
        return ""
    return value.strip().lstrip("0")


class CpcClassification(BaseModel):
    """A CPC code, as precise as the source text allows."""

    kind: Literal["cpc"] = "cpc"
    section: str
    main_class: str = ""
    subclass: str = ""
    main_group: str = ""
    subgroup: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_text(cls, text: str) -> "CpcClassification":
        """
        Parse CPC text such as ``H04N21/00``, ``H04N 21/44`` or ``H04N``.

        Raises:
            ValueError: If the text is not a CPC code
        """
        match = _CPC_PATTERN.match(text.strip().upper())
        if match is None:
            raise ValueError(f"Invalid CPC classification: {text!r}")
        return cls.from_parts(**match.groupdict())

    @classmethod
    def from_parts(
        cls,
        section: Optional[str],
        main_class: Optional[str] = None,
        subclass: Optional[str] = None,
        main_group: Optional[str] = None,
        subgroup: Optional[str] = None,
    ) -> "CpcClassification":
        """Build from individual segments, as found in the XML elements."""
        if not section or not section.strip():
            raise ValueError("CPC classification requires a section")
        return cls(
            section=section.strip().upper(),
            main_class=(main_class or "").strip(),
            subclass=(subclass or "").strip().upper(),
            main_group=_strip_zeros(main_group),
            subgroup=_strip_zeros(subgroup),
        )

    def describe(self) -> str:
        text = f"{self.section}{self.main_class}{self.subclass}"
        if self.main_group:
            text += f"{self.main_group}/{self.subgroup or '00'}"
        return text

    def contains(self, other: "CpcClassification") -> bool:
        """True if ``other`` is this code or falls below it."""
        for mine, theirs in (
            (self.section, other.section),
            (self.main_class, other.main_class),
            (self.subclass, other.subclass),
            (self.main_group, other.main_group),
        ):
            if not mine:
                return True
            if mine != theirs:
                return False
        # Subgroup "00" covers the whole main group
        return not self.subgroup or self.subgroup == other.subgroup


class UspcClassification(BaseModel):
    """A USPC main class with optional subclass."""

    kind: Literal["uspc"] = "uspc"
    main_class: str
    subclass: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_text(cls, text: str) -> "UspcClassification":
        """
        Parse USPC text: ``725``, ``725/61`` or fixed-width ``725 61``.

        The fixed-width form is the one used in the XML, where the first three
        characters hold the main class and the rest the subclass.

        Raises:
            ValueError: If the text is not a USPC code
        """
        raw = text.rstrip().upper()
        if "/" in raw:
            main_class, _, subclass = raw.partition("/")
        elif len(raw.strip()) > 3:
            main_class, subclass = raw[:3], raw[3:]
        else:
            main_class, subclass = raw, ""

        main_class = main_class.strip()
        subclass = subclass.strip().replace(" ", "")
        if not _USPC_CLASS_PATTERN.match(main_class) or not _USPC_SUBCLASS_PATTERN.match(
            subclass
        ):
            raise ValueError(f"Invalid USPC classification: {text!r}")

        return cls(
            main_class=main_class.lstrip("0") or "0",
            subclass=_strip_zeros(subclass),
        )

    def describe(self) -> str:
        if self.subclass:
            return f"{self.main_class}/{self.subclass}"
        return self.main_class

    def contains(self, other: "UspcClassification") -> bool:
        """True if ``other`` is this code or, without subclass, in this class."""
        if self.main_class != other.main_class:
            return False
        return not self.subclass or self.subclass == other.subclass


Classification = Annotated[
    Union[CpcClassification, UspcClassification],
    Field(discriminator="kind"),
]


def classification_matches(wanted: Classification, candidate: Classification) -> bool:
    """
    Check whether a document classification satisfies a wanted code.

    Codes of different taxonomies never match each other.
    """
    if wanted.kind == "cpc" and candidate.kind == "cpc":
        return wanted.contains(candidate)
    if wanted.kind == "uspc" and candidate.kind == "uspc":
        return wanted.contains(candidate)
    return False
