"""
Form Validator

Checks submitted snippet forms before anything is persisted.
Each field reports only the first rule it violates.
"""

import re
from typing import Iterable

TITLE_MAX_CHARS = 100
PERMITTED_EXPIRES = (1, 7, 365)

BLANK_MESSAGE = "This field cannot be blank"
TITLE_TOO_LONG_MESSAGE = f"This field cannot be more than {TITLE_MAX_CHARS} characters long"
EXPIRES_MESSAGE = "This field must equal 1, 7 or 365"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def not_blank(value: str) -> bool:
    """True if the value contains something other than whitespace."""
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    """True if the value holds at most n characters (code points, not bytes)."""
    return len(value) <= n


def permitted_value(value: int, permitted: Iterable[int]) -> bool:
    return value in permitted


def parse_integer(raw: str) -> int:
    """
    Parse a decimal integer from a URL segment or form field

    Only an optional sign followed by ASCII digits is accepted: no
    surrounding whitespace, no "_" separators, no non-ASCII digits.

    Raises:
        ValueError: The value is not a plain decimal integer
    """
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueError(f"invalid integer: {raw!r}")
    return int(raw)


def validate_snippet_form(title: str, content: str, expires: int) -> dict[str, str]:
    """
    Validate a snippet submission

    Args:
        title: Raw title value
        content: Raw content value
        expires: Expiry in days

    Returns:
        dict: Field name -> error message, empty when the form is valid
    """
    field_errors: dict[str, str] = {}

    if not not_blank(title):
        field_errors["title"] = BLANK_MESSAGE
    elif not max_chars(title, TITLE_MAX_CHARS):
        field_errors["title"] = TITLE_TOO_LONG_MESSAGE

    if not not_blank(content):
        field_errors["content"] = BLANK_MESSAGE

    if not permitted_value(expires, PERMITTED_EXPIRES):
        field_errors["expires"] = EXPIRES_MESSAGE

    return field_errors
