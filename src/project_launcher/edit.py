"""Inline edit session for one catalog record.

States: idle -> editing(index, field, buffer) -> idle. Moving between
fields commits the buffer first, so typed input is never lost.
"""

from typing import Optional

from project_launcher.display import DisplayModel
from project_launcher.models import EDIT_FIELDS, FIELD_LABELS


FIELD_COUNT = len(EDIT_FIELDS)


class EditSession:
    """Tracks which record and field is being edited, plus the text buffer."""

    def __init__(self, model: DisplayModel) -> None:
        self.model = model
        self.original_index: Optional[int] = None
        self.field_ordinal: Optional[int] = None
        self.buffer: str = ""

    @property
    def active(self) -> bool:
        return self.original_index is not None

    @property
    def field_label(self) -> str:
        if self.field_ordinal is None:
            return ""
        return FIELD_LABELS[self.field_ordinal]

    def start(self, display_row: int) -> bool:
        """Begin editing the record at ``display_row`` on its name field.

        Returns False, staying idle, for an empty catalog or a header or
        out-of-range row.
        """
        if not self.model.records:
            return False
        index = self.model.original_index_for_display_row(display_row)
        if index is None:
            return False
        return self.start_index(index)

    def start_index(self, index: int) -> bool:
        """Begin editing catalog entry ``index`` directly."""
        if not 0 <= index < len(self.model.records):
            return False
        self.original_index = index
        self._load_field(0)
        return True

    def _load_field(self, ordinal: int) -> None:
        self.field_ordinal = ordinal
        self.buffer = self.model.records[self.original_index].get_field(ordinal)

    def _write_buffer(self) -> bool:
        if not self.active:
            return False
        return self.model.set_field(self.original_index, self.field_ordinal, self.buffer)

    def advance(self) -> str:
        """Commit the buffer and move to the next field; returns its value."""
        return self._move(1)

    def retreat(self) -> str:
        """Commit the buffer and move to the previous field; returns its value."""
        return self._move(-1)

    def _move(self, step: int) -> str:
        if not self.active:
            return ""
        if not self._write_buffer():
            self.cancel()
            return ""
        self._load_field((self.field_ordinal + step) % FIELD_COUNT)
        return self.buffer

    def commit(self) -> bool:
        """Write the buffer to the catalog and return to idle."""
        if not self.active:
            return False
        written = self._write_buffer()
        self.cancel()
        return written

    def cancel(self) -> None:
        """Discard the buffer and return to idle."""
        self.original_index = None
        self.field_ordinal = None
        self.buffer = ""
