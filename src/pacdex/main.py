import logging as log
from typing import Optional, Any

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.logging import TextualHandler
from textual.widgets import Footer, Input

from .config import Settings
from .graph import PackageGraph
from .models import Action
from .navigation import NavigationState
from .widgets import HelpPanel, PackageColumn, SearchInput, StatusLine

log.root.handlers.clear()
log.basicConfig(level=log.DEBUG, handlers=[TextualHandler()], force=True)


class pacdex(App):
    """Three-pane browser for installed packages and their dependencies"""

    CSS_PATH = "tcss/main.tcss"
    TITLE = "pacdex"
    AUTO_FOCUS = None
    BINDINGS = [
        Binding("q", "nav('quit')", "Quit", show=True),
        Binding("ctrl+c", "nav('quit')", "Quit", show=False),
        Binding("left,h", "nav('move_left')", "Left", show=False),
        Binding("right,l", "nav('move_right')", "Right", show=False),
        Binding("up,k", "nav('move_up')", "Up", show=False),
        Binding("down,j", "nav('move_down')", "Down", show=False),
        Binding("pageup", "nav('page_up')", "Page Up", show=False),
        Binding("pagedown", "nav('page_down')", "Page Down", show=False),
        Binding("home,1", "nav('home')", "Top", show=False),
        Binding("end,0", "nav('end')", "Bottom", show=False),
        Binding("enter", "nav('enter')", "Focus", show=True),
        Binding("s", "nav('toggle_sort')", "Sort", show=True),
        Binding("e", "nav('toggle_filter')", "Explicit", show=True),
        Binding("slash", "search", "Search", show=True),
        Binding("n", "nav('search_next')", "Next", show=True),
        Binding("N", "nav('search_prev')", "Previous", show=True),
        Binding("question_mark", "toggle_help_table", "Help", show=True),
    ]

    def __init__(
        self,
        graph: PackageGraph,
        settings: Optional[Settings] = None,
        state: Optional[NavigationState] = None,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.graph = graph
        self.settings = settings or Settings()
        self.state = state or NavigationState(
            graph,
            sort_mode=self.settings.sort_mode,
            filter_explicit_only=self.settings.explicit_only,
            page_size=self.settings.page_size,
        )
        self.show_help = self.settings.show_help

    def compose(self) -> ComposeResult:
        yield HelpPanel(id="help")
        with Horizontal(id="columns"):
            yield PackageColumn(id="dependents", classes="column")
            yield PackageColumn(id="main", classes="column")
            yield PackageColumn(id="dependencies", classes="column")
        with Container(id="bottom"):
            yield StatusLine(id="status")
            yield SearchInput(placeholder="search package names", id="search-input")
        yield Footer()

    def on_mount(self) -> None:
        if self.settings.theme in self.available_themes:
            self.theme = self.settings.theme
        else:
            log.warning(f"Unknown theme {self.settings.theme!r}, keeping default")
        # keys go to the app bindings until the search prompt is opened
        self.query_one("#search-input").display = False
        self.set_focus(None)
        self.refresh_view()

    def refresh_view(self) -> None:
        snapshot = self.state.snapshot()
        for column in snapshot.columns:
            self.query_one(f"#{column.pane.name.lower()}", PackageColumn).update_column(
                column
            )
        self.query_one("#help").display = self.show_help
        self.query_one("#status", StatusLine).show_snapshot(snapshot)
        self.sub_title = snapshot.main_package

    def action_nav(self, name: str) -> None:
        if self.state.dispatch(Action(name)):
            self.exit()
            return
        self.refresh_view()

    def action_toggle_help_table(self) -> None:
        self.show_help = not self.show_help
        self.refresh_view()

    def action_search(self) -> None:
        self.state.dispatch(Action.ENTER_SEARCH)
        search_input = self.query_one("#search-input", SearchInput)
        search_input.value = ""
        search_input.display = True
        search_input.focus()
        self.refresh_view()

    def action_search_cancel(self) -> None:
        self.state.dispatch(Action.SEARCH_CANCEL)
        self._close_search()

    def _close_search(self) -> None:
        search_input = self.query_one("#search-input", SearchInput)
        search_input.display = False
        self.set_focus(None)
        self.refresh_view()

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.state.update_search(event.value)

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self.state.update_search(event.value)
        self.state.dispatch(Action.SEARCH_CONFIRM)
        log.debug(f"search confirmed: {self.state.search_query!r}")
        self._close_search()
