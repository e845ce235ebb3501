"""
Field validation for the add-record wizard.
Each validator returns the inline error message, or None when the value is OK.
"""
import re
from typing import Iterable, List, Optional

from models.converters import split_co_owners


RECORD_ID_RE = re.compile(r"^f\d{5}$")
PERSON_ID_RE = re.compile(r"^\d{6}$")

ID_ERROR = "ID must follow the format 'f' followed by 5 digits"
OWNER_ERROR = "Owner must be 6 digits"
CO_OWNER_ERROR = "Each co-owner must be 6 digits"


def validate_record_id(value: Optional[str]) -> Optional[str]:
    """
    Record ids are 'f' + 5 digits.

    >>> validate_record_id("f12345") is None
    True
    >>> validate_record_id("f1234")
    "ID must follow the format 'f' followed by 5 digits"
    """
    if not RECORD_ID_RE.fullmatch(value or ""):
        return ID_ERROR
    return None


def validate_owner(value: Optional[str]) -> Optional[str]:
    if not PERSON_ID_RE.fullmatch(value or ""):
        return OWNER_ERROR
    return None


def validate_co_owners(values: Iterable[str]) -> Optional[str]:
    """Every co-owner must be 6 digits. An empty list is valid."""
    if any(not PERSON_ID_RE.fullmatch(v or "") for v in values):
        return CO_OWNER_ERROR
    return None


def parse_co_owners_input(raw: Optional[str]) -> List[str]:
    """
    Parse the free-text co-owners field ("123456, 654321").
    Same splitting rule as the sheet cell.
    """
    return split_co_owners(raw)
