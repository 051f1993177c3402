"""Utility modules."""

from app.utils.normalization import (
    blank_to_none,
    escape_like,
    normalize_currency,
    normalize_email,
    normalize_tags,
    normalize_website,
)

__all__ = [
    # Normalization
    "blank_to_none",
    "escape_like",
    "normalize_currency",
    "normalize_email",
    "normalize_tags",
    "normalize_website",
]
