"""
Helpers that turn raw argument strings into validated domain values.

Every helper trims its input first. Domain constructors raise ValueError;
these helpers re-raise it as InvalidFieldContentException so that all parse
failures share the ParseException root.
"""

import re
from datetime import date, datetime

from .exceptions import InvalidFieldContentException
from .index import Index
from .nric import Nric
from .patient import FIELD_CONSTRAINTS, NO_ENTRY, is_valid_field

MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."
MESSAGE_INVALID_DATE = "Dates must be given as YYYY-MM-DD, got {!r}."

_UNSIGNED_INT = re.compile(r"^[0-9]+$")
DATE_FORMAT = "%Y-%m-%d"


def parse_index(one_based_index: str) -> Index:
    """
    Parses a 1-based index such as "3" into an Index.
    Zero, negatives and anything non-numeric are rejected.
    """
    trimmed = one_based_index.strip()
    if not _UNSIGNED_INT.match(trimmed) or int(trimmed) == 0:
        raise InvalidFieldContentException(MESSAGE_INVALID_INDEX)
    return Index.from_one_based(int(trimmed))


def parse_nric(nric: str) -> Nric:
    # case is not significant on input: s1234567a == S1234567A
    try:
        return Nric(nric.strip().upper())
    except ValueError as e:
        raise InvalidFieldContentException(str(e)) from e


def parse_field(value: str | None) -> str:
    """Trimmed free-text field, or "None" when the field was not supplied."""
    return NO_ENTRY if value is None else value.strip()


def parse_required_field(value: str) -> str:
    trimmed = value.strip()
    if not is_valid_field(trimmed):
        raise InvalidFieldContentException(FIELD_CONSTRAINTS)
    return trimmed


def parse_date(value: str) -> date:
    trimmed = value.strip()
    try:
        return datetime.strptime(trimmed, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidFieldContentException(MESSAGE_INVALID_DATE.format(trimmed)) from e
