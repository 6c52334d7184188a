"""
Unit Tests for RunValidator and selection parsing.

Test Aspects Covered:
    ✅ Business Logic: Years, document type, classification lists
    ✅ Edge Cases: Year ranges, boundary years, blank list items
    ✅ Error Handling: Every problem reported in one ConfigurationError
"""

from __future__ import annotations

from datetime import date

import pytest

from corpus_builder.domain.classification import CpcClassification, UspcClassification
from corpus_builder.domain.entities import DocumentType, SelectionCriteria
from corpus_builder.validation import (
    ConfigurationError,
    RunValidator,
    parse_classifications,
    parse_codes,
    parse_document_type,
    parse_years,
)


@pytest.fixture
def validator(today: date) -> RunValidator:
    """Create run validator pinned to a fixed date."""
    return RunValidator(today=today)


def create_criteria(years, document_type: DocumentType = DocumentType.GRANT) -> SelectionCriteria:
    """Helper to create selection criteria."""
    return SelectionCriteria(document_type=document_type, years=years)


WANTED = [CpcClassification.from_text("H04N21/00")]


class TestParseYears:
    """Test cases for year selection parsing."""

    def test_comma_list(self) -> None:
        assert parse_years("2014, 2016") == [2014, 2016]

    def test_inclusive_range(self) -> None:
        assert parse_years("2014-2016") == [2014, 2015, 2016]

    def test_single_year(self) -> None:
        assert parse_years("2014") == [2014]

    @pytest.mark.parametrize("text", ["", "20x4", "2014-", "2014-2015-2016"])
    def test_invalid(self, text: str) -> None:
        """
        SCENARIO: Empty or malformed year text
        EXPECTED: ConfigurationError on the years field
        """
        with pytest.raises(ConfigurationError) as exc_info:
            parse_years(text)
        assert exc_info.value.field == "years"

    def test_reversed_range(self) -> None:
        with pytest.raises(ConfigurationError, match="reversed"):
            parse_years("2016-2014")


class TestParseSelection:
    """Test cases for codes and document type."""

    def test_parse_codes_drops_blanks(self) -> None:
        assert parse_codes(" H04N21/00, ,G06F,") == ["H04N21/00", "G06F"]
        assert parse_codes(None) == []

    def test_document_type_case_insensitive(self) -> None:
        assert parse_document_type("Grant") is DocumentType.GRANT
        assert parse_document_type("application") is DocumentType.APPLICATION

    def test_unknown_document_type(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_document_type("trademark")
        assert exc_info.value.field == "type"

    def test_classifications_from_both_lists(self) -> None:
        # Act
        wanted = parse_classifications(cpc="H04N21/00,G06F", uspc="725/61")

        # Assert
        assert [code.kind for code in wanted] == ["cpc", "cpc", "uspc"]
        assert wanted[2] == UspcClassification(main_class="725", subclass="61")

    def test_malformed_classification(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_classifications(cpc="H04N21/00,notacode")
        assert exc_info.value.field == "classification"


class TestRunValidator:
    """Test cases for RunValidator."""

    def test_valid_selection(self, validator: RunValidator) -> None:
        """
        SCENARIO: Past years, one classification, no skip
        EXPECTED: Validation passes
        """
        validator.validate(create_criteria([2014, 2015]), WANTED)

    def test_future_year(self, validator: RunValidator) -> None:
        with pytest.raises(ConfigurationError, match="future"):
            validator.validate(create_criteria([2025]), WANTED)

    def test_before_first_full_text_year(self, validator: RunValidator) -> None:
        """
        SCENARIO: Grant 1995 and application 2003, before the weekly XML archives
        EXPECTED: ConfigurationError naming 2005 for either type; 2005 itself passes
        """
        with pytest.raises(ConfigurationError, match="2005"):
            validator.validate(create_criteria([1995], DocumentType.GRANT), WANTED)
        with pytest.raises(ConfigurationError, match="2005"):
            validator.validate(create_criteria([2003], DocumentType.APPLICATION), WANTED)

        validator.validate(create_criteria([2005], DocumentType.GRANT), WANTED)
        validator.validate(create_criteria([2005, 2006], DocumentType.APPLICATION), WANTED)

    def test_unsupported_type(self, today: date) -> None:
        validator = RunValidator(supported_types={DocumentType.GRANT}, today=today)

        with pytest.raises(ConfigurationError, match="not supported"):
            validator.validate(create_criteria([2014], DocumentType.APPLICATION), WANTED)

    def test_collects_every_problem(self, validator: RunValidator) -> None:
        """
        SCENARIO: No years, no classifications, negative skip
        EXPECTED: One ConfigurationError naming all three problems
        """
        # Act
        with pytest.raises(ConfigurationError) as exc_info:
            validator.validate(create_criteria([]), [], skip=-2)

        # Assert
        message = str(exc_info.value)
        assert "year" in message
        assert "classification" in message
        assert "Skip" in message
