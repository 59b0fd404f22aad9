from __future__ import annotations

from dataclasses import dataclass

from ..errors import ValidationRejected
from ..submissions.models import HONEYPOT_FIELDS, Submission


@dataclass(slots=True)
class ValidationResult:
    submission: Submission
    is_valid: bool
    errors: list[str]


def validate_submission(submission: Submission) -> ValidationResult:
    errors: list[str] = []

    for field_name in HONEYPOT_FIELDS:
        if field_name in submission:
            errors.append(f"Honeypot field '{field_name}' was submitted.")

    return ValidationResult(submission=submission, is_valid=not errors, errors=errors)


def ensure_human(submission: Submission) -> None:
    result = validate_submission(submission)
    if not result.is_valid:
        raise ValidationRejected("It's a trap! " + " ".join(result.errors))
