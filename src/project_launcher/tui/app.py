"""Main Project Launcher TUI application."""

import logging
import subprocess
from typing import Callable, Optional

from rich.text import Text
from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import DataTable, Footer, Header, Input, Label, Static

from project_launcher.catalog_file import CatalogStore
from project_launcher.config import LauncherConfig
from project_launcher.display import DisplayModel
from project_launcher.edit import EditSession
from project_launcher.launcher import launch, open_link
from project_launcher.models import Record
from project_launcher.status import StatusMessage


logger = logging.getLogger(__name__)

# Actions that only make sense outside / inside an edit session
NORMAL_ACTIONS = {"launch", "edit", "add", "delete", "reload", "open_link", "scroll_columns"}
EDIT_ACTIONS = {"next_field", "previous_field", "cancel_edit"}

SEVERITY_STYLES = {
    "information": "green",
    "warning": "yellow",
    "error": "bold red",
}

EMPTY_MESSAGE = "No projects configured yet.\n\nPress 'n' to add your first project!"


class StatusLine(Widget):
    """One-line status message that fades out after a few seconds."""

    DEFAULT_CSS = """
    StatusLine {
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(self, status: StatusMessage, **kwargs) -> None:
        super().__init__(**kwargs)
        self.status = status

    def on_mount(self) -> None:
        # Expiry is evaluated in render(); this only repaints
        self.set_interval(0.5, self.refresh)

    def render(self) -> Text:
        message = self.status.current()
        if not message:
            return Text("")
        style = SEVERITY_STYLES.get(self.status.severity, "green")
        return Text.assemble(" > ", (message, style))


class LauncherApp(App):
    """Grouped project table with launch, edit and link actions."""

    TITLE = "Project Launcher"
    SUB_TITLE = "🚀 Launch your projects"

    CSS = """
    #projects-table {
        height: 1fr;
    }

    #empty-state {
        height: 1fr;
        padding: 1 2;
        color: $text-muted;
    }

    #edit-bar {
        height: 3;
        padding: 0 1;
        background: $surface;
    }

    #edit-label {
        width: auto;
        padding: 1 1 0 0;
        color: $accent;
    }

    #edit-input {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("enter", "launch", "Launch", priority=True),
        Binding("space", "launch", "Launch", show=False),
        Binding("e", "edit", "Edit"),
        Binding("n", "add", "Add"),
        Binding("a", "add", "Add", show=False),
        Binding("d", "delete", "Delete"),
        Binding("delete", "delete", "Delete", show=False),
        Binding("r", "reload", "Refresh"),
        Binding("o", "open_link", "Open Link"),
        Binding("left", "scroll_columns(-1)", "Scroll Left", show=False, priority=True),
        Binding("right", "scroll_columns(1)", "Scroll Columns", priority=True),
        Binding("tab", "next_field", "Next Field", priority=True),
        Binding("shift+tab", "previous_field", "Prev Field", priority=True),
        Binding("escape", "cancel_edit", "Cancel", priority=True),
    ]

    def __init__(
        self,
        config: Optional[LauncherConfig] = None,
        store: Optional[CatalogStore] = None,
        spawn: Callable[..., object] = subprocess.Popen,
    ):
        super().__init__()
        self._config = config or LauncherConfig.load()
        self.theme = self._config.theme
        self._spawn = spawn
        self._layout_ready = False

        store = store or CatalogStore(self._config.resolve_catalog_path())
        view_state = self._config.view_state
        self.model = DisplayModel(
            store,
            scroll_offset=view_state.scroll_offset if view_state else 0,
        )
        self.session = EditSession(self.model)
        self.status = StatusMessage(duration=self._config.status_duration)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="projects-table", cursor_type="row", zebra_stripes=True)
        yield Static(EMPTY_MESSAGE, id="empty-state")
        with Horizontal(id="edit-bar"):
            yield Label("", id="edit-label")
            yield Input(id="edit-input")
        yield StatusLine(self.status, id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#edit-bar").display = False
        self.model.resize(self.size.width, self.size.height)
        self._layout_ready = True

        cursor_row = None
        view_state = self._config.view_state
        if view_state and view_state.last_project:
            cursor_row = self.model.display_row_for_name(view_state.last_project)
        self._render_table(cursor_row=cursor_row)
        self._table.focus()

    def on_resize(self, event: events.Resize) -> None:
        if not self._layout_ready:
            return
        self.model.resize(event.size.width, event.size.height)
        self._render_table()

    # -- helpers ------------------------------------------------------------

    @property
    def _table(self) -> DataTable:
        return self.query_one("#projects-table", DataTable)

    @property
    def _input(self) -> Input:
        return self.query_one("#edit-input", Input)

    def _cursor_row(self) -> int:
        return self._table.cursor_row

    def _render_table(self, cursor_row: Optional[int] = None) -> None:
        """Push the current projection into the DataTable."""
        table = self._table
        row = table.cursor_row if cursor_row is None else cursor_row

        table.clear(columns=True)
        for column in self.model.viewport.columns:
            table.add_column(column.title, width=column.width)
        for display_row in self.model.rows:
            if display_row.is_header:
                table.add_row(*(Text(cell, style="bold") for cell in display_row.cells))
            else:
                table.add_row(*display_row.cells)
        table.styles.height = self.model.viewport.table_height

        if table.row_count:
            table.move_cursor(row=max(0, min(row, table.row_count - 1)))

        empty = not self.model.records
        table.display = not empty
        self.query_one("#empty-state").display = empty
        self.refresh_bindings()

    def show_status(self, message: str, severity: str = "information") -> None:
        self.status.show(message, severity)
        self.query_one("#status-line", StatusLine).refresh()

    def _report_save_error(self) -> bool:
        if self.model.save_error:
            self.show_status(f"⚠️ Could not save catalog: {self.model.save_error}", "warning")
            return True
        return False

    def check_action(self, action: str, parameters: tuple[object, ...]) -> Optional[bool]:
        editing = self.session.active
        if action in NORMAL_ACTIONS and editing:
            return False
        if action in EDIT_ACTIONS and not editing:
            return False
        if action == "scroll_columns":
            delta = parameters[0] if parameters else 0
            viewport = self.model.viewport
            if delta < 0 and not viewport.can_scroll_left:
                return False
            if delta > 0 and not viewport.can_scroll_right:
                return False
        return True

    # -- normal mode --------------------------------------------------------

    def action_launch(self) -> None:
        """Launch the highlighted project."""
        record = self.model.record_for_display_row(self._cursor_row())
        if record is None:
            return
        outcome = launch(
            record,
            mount_root=self._config.mount_root,
            native_shell=self._config.native_shell,
            foreign_shell=self._config.foreign_shell,
            spawn=self._spawn,
        )
        self.show_status(outcome.message, outcome.severity)

    def action_open_link(self) -> None:
        """Open the highlighted project's link in the browser."""
        record = self.model.record_for_display_row(self._cursor_row())
        if record is None:
            return
        outcome = open_link(record, foreign_cmd=self._config.foreign_cmd, spawn=self._spawn)
        self.show_status(outcome.message, outcome.severity)

    def action_edit(self) -> None:
        """Start editing the highlighted project."""
        if self.session.start(self._cursor_row()):
            self._enter_edit_mode()

    def action_add(self) -> None:
        """Append a placeholder project and start editing it."""
        index = self.model.add_record(
            Record(name="New Project", path="/path/to/project", command="command")
        )
        self._render_table(cursor_row=self.model.display_row_for_original_index(index))
        if not self._report_save_error():
            self.show_status("➕ New project added")
        if self.session.start_index(index):
            self._enter_edit_mode()

    def action_delete(self) -> None:
        """Delete the highlighted project."""
        row = self._cursor_row()
        index = self.model.original_index_for_display_row(row)
        if index is None:
            return
        removed = self.model.delete_record(index)
        if removed is None:
            return
        self._render_table(cursor_row=row)
        if not self._report_save_error():
            self.show_status(f"🗑️ Deleted {removed.name}")

    def action_reload(self) -> None:
        """Reload the catalog from disk."""
        self.model.reload()
        self._render_table()
        self.show_status("🔄 Refreshed")

    def action_scroll_columns(self, delta: int) -> None:
        """Scroll the visible column window."""
        if self.model.scroll_columns(delta):
            self._render_table()

    def action_quit(self) -> None:
        """Quit the application, saving view state."""
        self._save_view_state()
        self.exit()

    def _save_view_state(self) -> None:
        record = None
        if self._layout_ready and self.model.records:
            record = self.model.record_for_display_row(self._cursor_row())
        try:
            self._config.save_view_state(
                last_project=record.name if record else None,
                scroll_offset=self.model.viewport.offset,
            )
        except OSError as e:
            logger.warning("Could not save view state: %s", e)

    # -- edit mode ----------------------------------------------------------

    def _enter_edit_mode(self) -> None:
        self.query_one("#edit-bar").display = True
        self._load_input(self.session.buffer)
        self._input.focus()
        self.refresh_bindings()

    def _leave_edit_mode(self) -> None:
        edit_input = self._input
        edit_input.value = ""
        edit_input.blur()
        self.query_one("#edit-bar").display = False
        self._table.focus()
        self.refresh_bindings()

    def _load_input(self, value: str) -> None:
        self.query_one("#edit-label", Label).update(f"Editing {self.session.field_label}:")
        edit_input = self._input
        edit_input.value = value
        edit_input.cursor_position = len(value)

    def _move_field(self, step: int) -> None:
        index = self.session.original_index
        self.session.buffer = self._input.value
        value = self.session.advance() if step > 0 else self.session.retreat()
        self._render_table(cursor_row=self.model.display_row_for_original_index(index))
        self._report_save_error()
        if not self.session.active:
            self._leave_edit_mode()
            return
        self._load_input(value)

    def action_next_field(self) -> None:
        """Save the field and move to the next one."""
        self._move_field(1)

    def action_previous_field(self) -> None:
        """Save the field and move to the previous one."""
        self._move_field(-1)

    def action_cancel_edit(self) -> None:
        """Discard the field being edited."""
        self.session.cancel()
        self._leave_edit_mode()

    @on(Input.Submitted, "#edit-input")
    def on_edit_submitted(self, event: Input.Submitted) -> None:
        self._commit_edit(event.value)

    def _commit_edit(self, value: str) -> None:
        if not self.session.active:
            return
        index = self.session.original_index
        self.session.buffer = value
        self.session.commit()
        self._leave_edit_mode()
        self._render_table(cursor_row=self.model.display_row_for_original_index(index))
        if not self._report_save_error():
            self.show_status("✅ Project updated")


def run_tui(config: Optional[LauncherConfig] = None, store: Optional[CatalogStore] = None) -> None:
    """Run the Project Launcher TUI application."""
    app = LauncherApp(config=config, store=store)
    app.run()


if __name__ == "__main__":
    run_tui()
