"""Helpers shared by the record services (payload mapping, search filters)."""

from enum import Enum

from sqlalchemy import or_

from app.utils.normalization import escape_like, normalize_tags


# JSON columns holding a nested record; unset parts are not stored
NESTED_FIELDS = {"address", "social_profiles", "social_media"}


def column_values(data: dict) -> dict:
    """
    Map a dumped request model onto ORM column values.

    Enums become their string value, nested records drop empty parts
    (null clears the whole record) and tags are trimmed.
    """
    values = {}
    for field, value in data.items():
        if isinstance(value, Enum):
            value = value.value
        elif field in NESTED_FIELDS:
            value = {k: v for k, v in (value or {}).items() if v is not None}
        elif field == "tags":
            value = normalize_tags(value)
        elif field == "custom_fields" and value is None:
            value = {}
        values[field] = value
    return values


def search_filter(columns, search: str | None):
    """
    Case-insensitive substring match ORed across columns.

    LIKE wildcards in the input match literally. Returns None for an empty
    search so callers can skip the filter.
    """
    if not search or not search.strip():
        return None
    pattern = f"%{escape_like(search.strip())}%"
    return or_(*[column.ilike(pattern, escape="\\") for column in columns])
