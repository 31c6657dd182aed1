"""Data models for Project Launcher."""

from .schemas import (
    EDIT_FIELDS,
    FIELD_LABELS,
    UNCATEGORIZED,
    Record,
)

__all__ = [
    "EDIT_FIELDS",
    "FIELD_LABELS",
    "UNCATEGORIZED",
    "Record",
]
