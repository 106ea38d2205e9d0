"""Validation utilities for Bracket Forge.

This module provides reusable validation functions with consistent error handling.
"""

import math
from typing import Any, Iterable, Optional

from bracketforge.exceptions import InvalidParticipantDataException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Rating Validation ==========


def validate_rating(rating: Any) -> ValidationResult:
    """Validate a rating value.

    Ratings must be finite, non-negative numbers. Numeric strings are
    accepted and converted.

    Args:
        rating: Rating value to validate

    Returns:
        ValidationResult with the rating as a float
    """
    if rating is None or isinstance(rating, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Invalid rating: {rating!r}"
        )

    try:
        value = float(rating)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False, error_message=f"Rating must be numeric: {rating!r}"
        )

    if math.isnan(value) or math.isinf(value):
        return ValidationResult(
            is_valid=False, error_message=f"Rating must be finite: {rating!r}"
        )
    if value < 0:
        return ValidationResult(
            is_valid=False, error_message=f"Rating cannot be negative: {rating!r}"
        )

    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_rating_strict(rating: Any) -> float:
    """Validate a rating and raise if invalid.

    Raises:
        InvalidParticipantDataException: If the rating is invalid
    """
    result = validate_rating(rating)
    if not result.is_valid:
        raise InvalidParticipantDataException(result.error_message)
    return result.sanitized_value


# ========== Identifier Validation ==========


def validate_identifier(value: Any, field_name: str = "id") -> ValidationResult:
    """Validate a participant id or name (non-empty string once stripped)."""
    if value is None:
        return ValidationResult(
            is_valid=False, error_message=f"Participant {field_name} is required"
        )

    text = str(value).strip()
    if not text:
        return ValidationResult(
            is_valid=False, error_message=f"Participant {field_name} cannot be empty"
        )
    return ValidationResult(is_valid=True, sanitized_value=text)


def find_duplicate_ids(ids: Iterable[str]) -> list:
    """Return ids that appear more than once, in first-seen order."""
    seen = set()
    duplicates = []
    for participant_id in ids:
        if participant_id in seen and participant_id not in duplicates:
            duplicates.append(participant_id)
        seen.add(participant_id)
    return duplicates
