"""
Shared validators for form input.

Functions raise ValueError with a user-facing message; callers turn that into
an inline validation error.
"""

import re
from typing import Optional

from shared.config.constants import GOOGLE_REVIEW_URL, Limits

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PLACE_ID_PATTERN = re.compile(r"placeid=(.+)$")
PHONE_STRIP_PATTERN = re.compile(r"[\s\-().]")


def validate_email(email: Optional[str]) -> str:
    """Return the trimmed email or raise ValueError."""
    email = (email or "").strip()
    if not email:
        raise ValueError("Email is required")
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Email address is not valid")
    return email


def validate_password(password: Optional[str], confirmation: Optional[str] = None) -> str:
    """
    Check password strength and, when given, its confirmation.

    Raises:
        ValueError: If the password is missing, too short or not confirmed
    """
    if not password:
        raise ValueError("Password is required")
    if confirmation is not None and password != confirmation:
        raise ValueError("Passwords do not match")
    if len(password) < Limits.MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {Limits.MIN_PASSWORD_LENGTH} characters")
    return password


def normalize_phone(phone: Optional[str]) -> str:
    """Strip spaces, dashes, dots and brackets so numbers compare equal."""
    if not phone:
        return ""
    return PHONE_STRIP_PATTERN.sub("", phone.strip())


def parse_table_numbers(raw: Optional[str]) -> list[int]:
    """
    Parse a comma-separated list of table numbers.

    Entries that are not positive integers are ignored, so "1, 2, x, -3, 4"
    gives [1, 2, 4].
    """
    if not raw:
        return []

    numbers: list[int] = []
    for part in str(raw).split(","):
        part = part.strip()
        if not part:
            continue
        try:
            number = int(part)
        except ValueError:
            continue
        if number > 0:
            numbers.append(number)
    return numbers


def extract_place_id(review_link: Optional[str]) -> str:
    """Extract the Google place id from a review link ("" when absent)."""
    if not review_link:
        return ""
    match = PLACE_ID_PATTERN.search(review_link)
    return match.group(1) if match else ""


def build_review_link(place_id: Optional[str]) -> str:
    """Google review link for a place id ("" when no place id)."""
    if not place_id:
        return ""
    return GOOGLE_REVIEW_URL.format(place_id=place_id.strip())


def sanitize_search_term(term: str, max_length: int = 100) -> str:
    """
    Sanitize search term before forwarding it to the backend.

    Args:
        term: The search term to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized search term
    """
    if not term:
        return ""

    term = term.strip()

    if len(term) > max_length:
        term = term[:max_length]

    # Remove null bytes and other control characters
    term = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)

    return term
