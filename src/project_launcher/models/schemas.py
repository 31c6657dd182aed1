"""Pydantic schemas for Project Launcher catalog records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


# Edit ordinal -> record attribute
EDIT_FIELDS: tuple[str, ...] = ("name", "path", "command", "link", "category")

FIELD_LABELS: tuple[str, ...] = ("Name", "Path", "Command", "Link", "Category")

# Display label for records without a category
UNCATEGORIZED = "N/A"


class Record(BaseModel):
    """One managed project: where it lives and how to start it."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    name: str = ""
    path: str = ""
    command: str = ""
    link: str = ""  # Optional URL opened with `o`
    category: str = ""  # Empty displays as "N/A" but is stored empty

    @field_validator("name", "path", "command", "link", "category", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        """Treat JSON null the same as an absent key."""
        if value is None:
            return ""
        return value

    @property
    def display_category(self) -> str:
        """Category label used for grouping; empty maps to N/A."""
        if not self.category.strip():
            return UNCATEGORIZED
        return self.category

    @property
    def identity(self) -> tuple[str, str, str]:
        """Matching key used to find a sorted copy back in the catalog."""
        return (self.name, self.path, self.command)

    def get_field(self, ordinal: int) -> str:
        """Read a field by its edit ordinal (0=name .. 4=category)."""
        if not 0 <= ordinal < len(EDIT_FIELDS):
            raise IndexError(f"field ordinal out of range: {ordinal}")
        return getattr(self, EDIT_FIELDS[ordinal])

    def set_field(self, ordinal: int, value: str) -> None:
        """Write a field by its edit ordinal."""
        if not 0 <= ordinal < len(EDIT_FIELDS):
            raise IndexError(f"field ordinal out of range: {ordinal}")
        setattr(self, EDIT_FIELDS[ordinal], value)
