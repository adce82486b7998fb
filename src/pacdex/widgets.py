import logging as log
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Resize
from textual.widgets import Input, Static

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .formatters import format_package_details
from .models import PackageRecord
from .navigation import ColumnView, ViewSnapshot

if TYPE_CHECKING:
    from .main import pacdex


HELP: Tuple[Tuple[str, str], ...] = (
    ("left, right", "move between lists"),
    ("up, down, PgUp, PgDown", "move in list"),
    ("Home, End / 1, 0", "move to start/end of list"),
    ("Enter", "focus center list on selected entry"),
    ("s", "toggle sorting between alphabetical-asc and size-desc"),
    ("e", "toggle showing only explicitly installed packages in main view"),
    ("/", "start entering search term, enter to search, esc to cancel"),
    ("n", "go to next search match downwards"),
    ("N", "go to next search match upwards"),
    ("?", "toggle help"),
    ("q", "quit"),
)


def visible_window(total: int, selected: Optional[int], height: int) -> range:
    """Rows of a list that fit in ``height`` lines with ``selected`` in view."""
    height = max(height, 1)
    if selected is None or total <= height:
        return range(0, min(total, height))
    top = max(0, min(selected - height // 2, total - height))
    return range(top, top + height)


def render_package_list(
    records: Sequence[PackageRecord],
    selected: Optional[int],
    height: int,
    active: bool,
) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    if not records:
        text.append("(empty)", style="dim italic")
        return text
    rows = visible_window(len(records), selected, height)
    for index in rows:
        record = records[index]
        style = ""
        if index == selected:
            style = "bold reverse" if active else "bold"
        elif not record.explicitly_installed:
            style = "dim"
        text.append(record.name, style=style)
        if index != rows[-1]:
            text.append("\n")
    return text


class PackageColumn(Vertical):
    """One of the three package lists with a details block underneath."""

    if TYPE_CHECKING:
        app: pacdex

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.column: Optional[ColumnView] = None

    def compose(self) -> ComposeResult:
        yield Static(classes="package-list")
        yield Static(classes="package-details")

    def update_column(self, column: ColumnView) -> None:
        self.column = column
        position = column.selected + 1 if column.selected is not None else 0
        self.border_title = f"{column.title} {position}/{len(column.records)}"
        self.set_class(column.active, "active")

        package_list = self.query_one(".package-list", Static)
        height = package_list.size.height or 20
        package_list.update(
            render_package_list(column.records, column.selected, height, column.active)
        )
        self.query_one(".package-details", Static).update(
            format_package_details(column.selected_record, self.app.graph)
        )

    def on_resize(self, event: Resize) -> None:
        if self.column is not None:
            # redraw from the current state, not the stored column
            self.call_after_refresh(self.app.refresh_view)


class HelpPanel(Static):
    def on_mount(self) -> None:
        table = Table(
            title="Help", show_edge=True, expand=True, header_style="bold"
        )
        table.add_column("Key", no_wrap=True)
        table.add_column("Action")
        for key, action in HELP:
            table.add_row(key, action)
        self.update(table)


class StatusLine(Static):
    def show_snapshot(self, snapshot: ViewSnapshot) -> None:
        parts = [
            f"[b $accent]sort:[/] {snapshot.sort_mode.label}",
            f"[b $accent]view:[/] {'explicit only' if snapshot.filter_explicit_only else 'all packages'}",
        ]
        if snapshot.search_query:
            parts.append(f"[b $accent]search:[/] {escape(repr(snapshot.search_query))}")
        if snapshot.search_status:
            parts.append(f"[b $warning]{escape(snapshot.search_status)}[/]")
        self.update("  ".join(parts))


class SearchInput(Input):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def action_cancel(self) -> None:
        log.debug("search cancelled")
        self.app.action_search_cancel()
