"""Horizontal column window for the project table.

The table has five columns with fixed nominal widths. Only the columns
that fit the pane are shown; the rest are reached by scrolling left/right.
"""

from dataclasses import dataclass, replace


# Width taken by table borders and padding
CHROME_WIDTH = 6
CHROME_HEIGHT = 6
MIN_TABLE_HEIGHT = 5


@dataclass(frozen=True)
class Column:
    """A table column and its nominal width in cells."""

    title: str
    width: int


# Grid order; values come from (name, path, command, category, link)
ALL_COLUMNS: tuple[Column, ...] = (
    Column("Name", 30),
    Column("Path", 35),
    Column("Command", 35),
    Column("Category", 15),
    Column("Link", 30),
)


@dataclass(frozen=True)
class Viewport:
    """Visible column window plus pane dimensions."""

    offset: int
    columns: tuple[Column, ...]
    total_columns: int
    width: int
    height: int

    @property
    def visible_count(self) -> int:
        return len(self.columns)

    @property
    def table_height(self) -> int:
        return max(self.height - CHROME_HEIGHT, MIN_TABLE_HEIGHT)

    @property
    def can_scroll_left(self) -> bool:
        return self.offset > 0

    @property
    def can_scroll_right(self) -> bool:
        return self.offset + self.visible_count < self.total_columns

    def slice(self, cells: tuple[str, ...]) -> tuple[str, ...]:
        """Cut a full five-cell row down to the visible window."""
        return tuple(cells[self.offset:self.offset + self.visible_count])


def compute_viewport(
    width: int,
    height: int,
    offset: int = 0,
    columns: tuple[Column, ...] = ALL_COLUMNS,
) -> Viewport:
    """Select the columns that fit a pane of the given size.

    Starting at ``offset``, takes as many consecutive columns as fit in the
    available width. At least one column is always shown; if even that one
    does not fit it is shrunk to the available width. When the window
    reaches the last column the offset slides back while earlier columns
    still fit, so the window never overruns the column count. Leftover
    width goes to the last visible column.
    """
    total = len(columns)
    available = max(width - CHROME_WIDTH, 1)
    offset = max(0, min(offset, total - 1))

    visible: list[Column] = []
    used = 0
    for col in columns[offset:]:
        if used + col.width > available:
            break
        visible.append(col)
        used += col.width

    if not visible:
        # Ensure we show at least one column
        visible = [replace(columns[offset], width=available)]
        used = available

    while offset > 0 and offset + len(visible) == total:
        previous = columns[offset - 1]
        if used + previous.width > available:
            break
        offset -= 1
        visible.insert(0, previous)
        used += previous.width

    extra = available - used
    if extra > 0:
        visible[-1] = replace(visible[-1], width=visible[-1].width + extra)

    return Viewport(
        offset=offset,
        columns=tuple(visible),
        total_columns=total,
        width=width,
        height=height,
    )
