"""apptimer - interactive process browser."""

from enum import Enum

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static
from textual.worker import Worker, WorkerState

from apptimer.directory import ProcessDirectory
from apptimer.models import ProcessRecord


class SortKey(Enum):
    """Sort keys for the process table."""

    PID = "pid"
    NAME = "name"


class ProcessTable(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._current_pids: set[int] = set()
        self._sort_key: SortKey = SortKey.PID

    @property
    def sort_key(self) -> SortKey:
        """Get current sort key."""
        return self._sort_key

    def cycle_sort(self) -> SortKey:
        """Cycle to the next sort key, re-sort and return it."""
        keys = list(SortKey)
        next_index = (keys.index(self._sort_key) + 1) % len(keys)
        self._sort_key = keys[next_index]
        self._apply_sort()
        return self._sort_key

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"
        table.add_column("PID", key="pid", width=8)
        table.add_column("Name", key="name")

    def update_processes(self, processes: list[ProcessRecord]) -> None:
        """
        Update the process table with new data.

        Existing rows are updated in place; rows of processes that are gone
        are removed.
        """
        table = self.query_one("#process-table", DataTable)
        new_pids = {proc.pid for proc in processes}

        for pid in self._current_pids - new_pids:
            table.remove_row(str(pid))

        for proc in processes:
            row_key = str(proc.pid)
            if proc.pid in self._current_pids:
                table.update_cell(row_key, "name", proc.name)
            else:
                table.add_row(str(proc.pid), proc.name, key=row_key)

        self._current_pids = new_pids
        self._apply_sort()

    def _apply_sort(self) -> None:
        table = self.query_one("#process-table", DataTable)
        if self._sort_key is SortKey.PID:
            table.sort("pid", key=int)
        else:
            table.sort("name", key=str.lower)


class ProcessBrowserApp(App):
    """Read-only list of running processes, for picking a target name."""

    TITLE = "apptimer"
    SUB_TITLE = "Running processes"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("f6", "sort", "Sort"),
    ]

    def __init__(self, directory: ProcessDirectory | None = None, refresh_rate: float = 2.0) -> None:
        """
        Initialize the ProcessBrowserApp.

        Args:
            directory: Source of the process list.
            refresh_rate: Seconds between refreshes of the list.
        """
        super().__init__()
        self._directory = directory if directory is not None else ProcessDirectory()
        self._refresh_rate = refresh_rate

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Static("Loading processes...", id="summary")
        yield ProcessTable()
        yield Footer()

    def on_mount(self) -> None:
        """Load the process list and keep it fresh."""
        # Columns are added when the table mounts
        self.call_after_refresh(self.refresh_processes)
        self.set_interval(self._refresh_rate, self.refresh_processes)

    def refresh_processes(self) -> None:
        """Reload the process list in a background thread."""
        self.run_worker(
            self._directory.list_processes,
            name="refresh",
            group="refresh",
            exclusive=True,
            thread=True,
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Show the process list once a refresh finishes."""
        if event.worker.name == "refresh" and event.state is WorkerState.SUCCESS:
            self.show_processes(event.worker.result)

    def show_processes(self, processes: list[ProcessRecord]) -> None:
        """Put a process list into the table."""
        self.query_one(ProcessTable).update_processes(processes)
        self.query_one("#summary", Static).update(f"{len(processes)} processes")

    def action_sort(self) -> None:
        """Handle sort action - cycle through sort keys."""
        new_sort_key = self.query_one(ProcessTable).cycle_sort()
        self.notify(f"Sort: {new_sort_key.value.upper()}")
