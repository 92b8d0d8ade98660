"""
Snippet Form Validator Unit Tests
"""

import pytest

from cortexcache.common.validator import (
    BLANK_MESSAGE,
    EXPIRES_MESSAGE,
    TITLE_TOO_LONG_MESSAGE,
    max_chars,
    not_blank,
    parse_integer,
    permitted_value,
    validate_snippet_form,
)


class TestChecks:
    """Tests for the individual checks."""

    def test_not_blank(self):
        assert not_blank("hello") is True
        assert not_blank("") is False
        assert not_blank("   \t\n") is False

    def test_max_chars_counts_characters_not_bytes(self):
        """Multi-byte characters count once each."""
        assert max_chars("é" * 100, 100) is True
        assert max_chars("é" * 101, 100) is False
        assert max_chars("😀" * 100, 100) is True

    def test_permitted_value(self):
        assert permitted_value(7, (1, 7, 365)) is True
        assert permitted_value(30, (1, 7, 365)) is False


class TestParseInteger:
    """Tests for parse_integer."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("7", 7), ("365", 365), ("0", 0), ("-1", -1), ("+12", 12), ("007", 7)],
    )
    def test_plain_decimal(self, raw, expected):
        assert parse_integer(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", " 7", "7 ", "\t7", "7\n", "0_7", "1_000", "7.0", "1e3", "abc", "-", "\uff17", "\u0667"],
    )
    def test_rejects_anything_else(self, raw):
        with pytest.raises(ValueError):
            parse_integer(raw)


class TestValidateSnippetForm:
    """Tests for validate_snippet_form."""

    def test_valid_form_has_no_errors(self):
        assert validate_snippet_form("Title", "Content", 7) == {}

    def test_blank_title(self):
        errors = validate_snippet_form("   ", "Content", 1)
        assert errors == {"title": BLANK_MESSAGE}

    def test_title_exactly_100_characters_is_allowed(self):
        assert validate_snippet_form("a" * 100, "Content", 1) == {}

    def test_title_over_100_characters(self):
        errors = validate_snippet_form("a" * 101, "Content", 1)
        assert errors == {"title": TITLE_TOO_LONG_MESSAGE}

    def test_long_title_rejected_even_with_other_errors(self):
        """A long title is reported whatever the other fields hold."""
        errors = validate_snippet_form("a" * 101, "", 2)
        assert errors["title"] == TITLE_TOO_LONG_MESSAGE

    def test_blank_title_reports_only_first_rule(self):
        errors = validate_snippet_form("", "Content", 1)
        assert errors["title"] == BLANK_MESSAGE

    def test_blank_content(self):
        errors = validate_snippet_form("Title", "\n\n", 1)
        assert errors == {"content": BLANK_MESSAGE}

    @pytest.mark.parametrize("expires", [0, 2, 30, -1, 366])
    def test_expires_not_permitted(self, expires):
        errors = validate_snippet_form("Title", "Content", expires)
        assert errors == {"expires": EXPIRES_MESSAGE}

    def test_multiple_errors_coexist(self):
        errors = validate_snippet_form("", "", 5)
        assert set(errors) == {"title", "content", "expires"}

    def test_messages(self):
        assert BLANK_MESSAGE == "This field cannot be blank"
        assert TITLE_TOO_LONG_MESSAGE == "This field cannot be more than 100 characters long"
        assert EXPIRES_MESSAGE == "This field must equal 1, 7 or 365"
