"""
Validation gate for loan applications.
Runs before any store call so every backend enforces the same rules.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from schemas.application import ApplicationStatus, NewApplication
from services.errors import InvalidAmount, InvalidStatus, MissingField

REQUIRED_FIELDS = ("applicantName", "email", "loanAmount", "loanPurpose")
TEXT_FIELDS = ("applicantName", "email", "loanPurpose")


def _is_blank(value: Any) -> bool:
    # None, "", 0 and False; empty lists/objects are values, not blanks
    if isinstance(value, (list, dict)):
        return False
    return not value


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass but never a loan amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        if not math.isfinite(float(value)):
            return False
    except OverflowError:
        # JSON integers are unbounded; reject those beyond float range
        return False
    return value > 0


def validate_create(payload: Any) -> NewApplication:
    """
    Check a creation payload (camelCase keys, as sent by clients) and build the record to store.
    Raises MissingField if a required field is absent or falsy, InvalidAmount if loanAmount
    is not a positive number. Client-supplied status/submittedAt/id are ignored.
    """
    if not isinstance(payload, dict):
        raise MissingField()
    if any(_is_blank(payload.get(field)) for field in REQUIRED_FIELDS):
        raise MissingField()
    # A non-text value (number, list, object) does not count as providing the field
    if any(not isinstance(payload[field], str) for field in TEXT_FIELDS):
        raise MissingField()
    amount = payload["loanAmount"]
    if not _is_positive_number(amount):
        raise InvalidAmount()
    return NewApplication(
        applicant_name=payload["applicantName"],
        email=payload["email"],
        loan_amount=amount,
        loan_purpose=payload["loanPurpose"],
        status=ApplicationStatus.PENDING,
        submitted_at=datetime.now(timezone.utc),
    )


def validate_status(value: Any) -> ApplicationStatus:
    """Return the matching status; exact, case-sensitive match only."""
    if isinstance(value, str):
        for status in ApplicationStatus:
            if status.value == value:
                return status
    raise InvalidStatus()
