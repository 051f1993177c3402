"""Data normalization utilities for consistent data quality."""

import re
from typing import Optional


URL_PATTERN = re.compile(r"^https?://.+", re.IGNORECASE)
CURRENCY_PATTERN = re.compile(r"^[A-Za-z]{3}$")


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Normalize email to its canonical form (trimmed, lowercase).

    Args:
        email: Raw email input

    Returns:
        Lowercased email or None if empty
    """
    if not email:
        return None
    cleaned = email.strip().lower()
    return cleaned or None


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Trim a free-text value; empty strings become None."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def normalize_website(url: Optional[str]) -> Optional[str]:
    """
    Validate an http(s) URL. Empty input is allowed and stored as None.

    Raises:
        ValueError: If the value is non-empty and not http(s)://...
    """
    cleaned = blank_to_none(url)
    if cleaned is None:
        return None
    if not URL_PATTERN.match(cleaned):
        raise ValueError("Must be a valid URL starting with http:// or https://")
    return cleaned


def normalize_currency(code: str) -> str:
    """Uppercase ISO-4217 style three letter code."""
    cleaned = code.strip()
    if not CURRENCY_PATTERN.match(cleaned):
        raise ValueError("Currency must be 3 characters")
    return cleaned.upper()


def normalize_tags(tags: Optional[list[str]]) -> list[str]:
    """Trim tags and drop empty entries, keeping order."""
    if not tags:
        return []
    return [t.strip() for t in tags if t and t.strip()]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (escape char: \\)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
