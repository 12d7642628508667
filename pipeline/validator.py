"""
Validation of input records before they reach the database.
"""

from typing import Dict
from dataclasses import dataclass, field

from .models import RawQuestion

MIN_OPTIONS = 2


@dataclass
class ValidationResult:
    """Result of validation check."""
    is_valid: bool
    message: str
    details: Dict = field(default_factory=dict)


def validate_question(question: RawQuestion) -> ValidationResult:
    """
    Check that a record can be stored.

    A question needs non-blank text and at least two options, every one of
    which has text.
    """
    if not question.text.strip():
        return ValidationResult(
            is_valid=False,
            message=f"Question {question.display_id} has no text",
        )

    if question.malformed_options:
        return ValidationResult(
            is_valid=False,
            message=(
                f"Question {question.display_id} has options without text "
                f"at positions {question.malformed_options}"
            ),
            details={"malformed": list(question.malformed_options)},
        )

    if len(question.options) < MIN_OPTIONS:
        return ValidationResult(
            is_valid=False,
            message=(
                f"Question {question.display_id} has {len(question.options)} options, "
                f"expected at least {MIN_OPTIONS}"
            ),
            details={"options": len(question.options)},
        )

    return ValidationResult(is_valid=True, message="OK")
