from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from .record_store import RecordStore


POSTAL_CODE_LENGTH = 8
_NON_DIGITS = re.compile(r"\D")


class ValidationFailure(str, Enum):
    MISSING_FIELD = "missing required field"
    DUPLICATE_EMAIL = "duplicate email"
    INVALID_POSTAL_CODE = "invalid postal code"


def normalize_postal_code(raw: str) -> str:
    return _NON_DIGITS.sub("", raw or "")


def is_valid_postal_code(raw: str) -> bool:
    return len(normalize_postal_code(raw)) == POSTAL_CODE_LENGTH


def validate(
    name: str,
    email: str,
    postal_code: str,
    store: RecordStore,
) -> Optional[ValidationFailure]:
    """Check a submission; the first failing rule wins, None means it passed."""
    fields = [(value or "").strip() for value in (name, email, postal_code)]
    if not all(fields):
        return ValidationFailure.MISSING_FIELD

    if store.email_exists(email):
        return ValidationFailure.DUPLICATE_EMAIL

    if not is_valid_postal_code(postal_code):
        return ValidationFailure.INVALID_POSTAL_CODE

    return None
