"""Display model for the project table.

The table shows a sorted, category-grouped view of the catalog with a
synthetic header row in front of each category. Rows the user sees are
therefore not catalog positions: every row-addressed operation resolves
through ``index_map``, which holds each row's position in the sorted copy
or ``HEADER_ROW`` for headers. The projection is rebuilt wholesale after
every mutation, scroll or resize and never patched in place.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from project_launcher.catalog_file import CatalogStore, CatalogWriteError
from project_launcher.layout import Viewport, compute_viewport
from project_launcher.models import UNCATEGORIZED, Record


logger = logging.getLogger(__name__)

HEADER_ROW = -1  # index_map sentinel: no backing record
HEADER_ICON = "📂"


def sort_key(record: Record) -> tuple[bool, str, str, str]:
    """Category (uncategorized last), then name; both case-insensitive."""
    category = record.display_category
    return (
        category.casefold() == UNCATEGORIZED.casefold(),
        category.casefold(),
        category,  # keeps case variants of one category contiguous
        record.name.casefold(),
    )


def sort_records(records: list[Record]) -> list[Record]:
    """Return a stably sorted copy of the catalog."""
    return sorted(records, key=sort_key)


@dataclass(frozen=True)
class DisplayRow:
    """One rendered table row, already cut to the visible columns."""

    cells: tuple[str, ...]
    category: str
    is_header: bool = False


class DisplayModel:
    """Owns the catalog and its grouped, sorted, scrolled projection."""

    def __init__(
        self,
        store: CatalogStore,
        records: Optional[list[Record]] = None,
        width: int = 100,
        height: int = 24,
        scroll_offset: int = 0,
    ) -> None:
        self.store = store
        self.records: list[Record] = store.load() if records is None else list(records)
        self.viewport: Viewport = compute_viewport(width, height, scroll_offset)
        self.rows: list[DisplayRow] = []
        self.index_map: list[int] = []
        self.save_error: Optional[str] = None
        self.rebuild_projection()

    # -- projection ---------------------------------------------------------

    def sorted_records(self) -> list[Record]:
        return sort_records(self.records)

    def rebuild_projection(self) -> None:
        """Recompute rows and index map from the catalog and viewport."""
        rows: list[DisplayRow] = []
        index_map: list[int] = []
        width = self.viewport.visible_count
        last_category: Optional[str] = None
        # Counts record rows only; headers do not consume a position
        sorted_index = 0

        for record in self.sorted_records():
            category = record.display_category
            if category != last_category:
                label = f"{HEADER_ICON} {category}"
                cells = (label,) + ("",) * (width - 1)
                rows.append(DisplayRow(cells=cells, category=category, is_header=True))
                index_map.append(HEADER_ROW)
                last_category = category

            full_row = (record.name, record.path, record.command, category, record.link)
            rows.append(DisplayRow(cells=self.viewport.slice(full_row), category=category))
            index_map.append(sorted_index)
            sorted_index += 1

        self.rows = rows
        self.index_map = index_map

    # -- row resolution -----------------------------------------------------

    def _sorted_record_for_row(self, row: int) -> Optional[Record]:
        if row < 0 or row >= len(self.index_map):
            return None
        sorted_index = self.index_map[row]
        if sorted_index == HEADER_ROW:
            return None
        # Same comparator as rebuild_projection
        ordered = self.sorted_records()
        if sorted_index >= len(ordered):
            return None
        return ordered[sorted_index]

    def original_index_for_display_row(self, row: int) -> Optional[int]:
        """Catalog index of the record shown at ``row``.

        Returns None for header rows and out-of-range rows. The sorted copy
        is matched back to the catalog on (name, path, command), so records
        sharing all three resolve to the first such catalog entry.
        """
        target = self._sorted_record_for_row(row)
        if target is None:
            return None
        return self._catalog_index_of(target)

    def _catalog_index_of(self, target: Record) -> Optional[int]:
        for index, record in enumerate(self.records):
            if record.identity == target.identity:
                return index
        return None

    def record_for_display_row(self, row: int) -> Optional[Record]:
        """Catalog record shown at ``row``, or None."""
        index = self.original_index_for_display_row(row)
        if index is None:
            return None
        return self.records[index]

    def display_row_for_original_index(self, index: int) -> Optional[int]:
        """Inverse lookup: the table row showing catalog entry ``index``."""
        if index is None or not 0 <= index < len(self.records):
            return None
        # First catalog position per identity, matching original_index_for_display_row
        first_index: dict[tuple[str, str, str], int] = {}
        for position, record in enumerate(self.records):
            first_index.setdefault(record.identity, position)
        ordered = self.sorted_records()
        for row, sorted_index in enumerate(self.index_map):
            if sorted_index == HEADER_ROW or sorted_index >= len(ordered):
                continue
            if first_index.get(ordered[sorted_index].identity) == index:
                return row
        return None

    def display_row_for_name(self, name: str) -> Optional[int]:
        for index, record in enumerate(self.records):
            if record.name == name:
                return self.display_row_for_original_index(index)
        return None

    # -- mutations ----------------------------------------------------------

    def _persist(self) -> bool:
        try:
            self.store.save(self.records)
        except CatalogWriteError as e:
            logger.warning("Catalog not saved: %s", e)
            self.save_error = str(e)
            return False
        self.save_error = None
        return True

    def add_record(self, record: Record) -> int:
        """Append a record; returns its catalog index."""
        self.records.append(record)
        self._persist()
        self.rebuild_projection()
        return len(self.records) - 1

    def delete_record(self, index: int) -> Optional[Record]:
        """Remove the catalog entry at ``index``.

        Returns the removed record, or None (and changes nothing) for an
        invalid index.
        """
        if index is None or not 0 <= index < len(self.records):
            return None
        removed = self.records.pop(index)
        self._persist()
        self.rebuild_projection()
        return removed

    def set_field(self, index: int, ordinal: int, value: str) -> bool:
        """Write one field of a catalog entry by edit ordinal."""
        if not 0 <= index < len(self.records):
            return False
        self.records[index].set_field(ordinal, value)
        self._persist()
        self.rebuild_projection()
        return True

    def reload(self) -> None:
        """Replace the catalog with what is on disk."""
        self.records = self.store.load()
        self.save_error = None
        self.rebuild_projection()

    # -- viewport -----------------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        self.viewport = compute_viewport(width, height, self.viewport.offset)
        self.rebuild_projection()

    def scroll_columns(self, delta: int) -> bool:
        """Shift the column window; returns False when already at the edge."""
        viewport = self.viewport
        if delta < 0 and not viewport.can_scroll_left:
            return False
        if delta > 0 and not viewport.can_scroll_right:
            return False
        self.viewport = compute_viewport(viewport.width, viewport.height, viewport.offset + delta)
        self.rebuild_projection()
        return True
