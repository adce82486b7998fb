"""
pacdex.navigation – focus / selection state for the three-pane browser

One ``NavigationState`` exists per session. It is created after the graph has
been built, mutated by every user action and thrown away on exit.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .graph import PackageGraph, PackageNotFoundError
from .models import Action, Pane, PackageRecord, SearchDirection, SortMode
from .search import find_next
from .viewmodel import PaneLists, derive

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class ColumnView:
    pane: Pane
    title: str
    records: Tuple[PackageRecord, ...]
    selected: Optional[int]
    active: bool

    @property
    def selected_record(self) -> Optional[PackageRecord]:
        if self.selected is None:
            return None
        return self.records[self.selected]


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything a renderer needs to redraw without touching the graph."""

    columns: Tuple[ColumnView, ColumnView, ColumnView]
    active_pane: Pane
    main_package: str
    sort_mode: SortMode
    filter_explicit_only: bool
    searching: bool
    search_draft: str
    search_query: Optional[str]
    search_direction: SearchDirection
    search_status: Optional[str]


class NavigationState:
    def __init__(
        self,
        graph: PackageGraph,
        sort_mode: SortMode = SortMode.ALPHABETICAL,
        filter_explicit_only: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.graph = graph
        self.sort_mode = sort_mode
        self.filter_explicit_only = filter_explicit_only
        self.page_size = max(1, page_size)

        self.active_pane = Pane.MAIN
        self._selection: Dict[Pane, int] = {pane: 0 for pane in Pane}

        self.search_query: Optional[str] = None
        self.search_direction = SearchDirection.FORWARD
        self.searching = False
        self.search_draft = ""
        self.search_status: Optional[str] = None

        self.main_package = ""
        self.lists = PaneLists.empty()
        self._recompute()
        if self.lists.main:
            self.main_package = self.lists.main[0].name
            self._recompute()

        self._handlers: Dict[Action, Callable[[], None]] = {
            Action.MOVE_LEFT: self.move_left,
            Action.MOVE_RIGHT: self.move_right,
            Action.MOVE_UP: self.move_up,
            Action.MOVE_DOWN: self.move_down,
            Action.PAGE_UP: self.page_up,
            Action.PAGE_DOWN: self.page_down,
            Action.HOME: self.home,
            Action.END: self.end,
            Action.ENTER: self.enter,
            Action.TOGGLE_SORT: self.toggle_sort,
            Action.TOGGLE_FILTER: self.toggle_filter,
            Action.ENTER_SEARCH: self.begin_search,
            Action.SEARCH_CONFIRM: self.confirm_search,
            Action.SEARCH_CANCEL: self.cancel_search,
            Action.SEARCH_NEXT: self.search_next,
            Action.SEARCH_PREV: self.search_previous,
        }

    # ------------------------------------------------------------------ #
    # queries                                                            #
    # ------------------------------------------------------------------ #

    def list_for(self, pane: Pane) -> Tuple[PackageRecord, ...]:
        return self.lists.for_pane(pane)

    def selected_index(self, pane: Pane) -> Optional[int]:
        """Selection of ``pane`` clamped to its list, ``None`` when empty."""
        records = self.list_for(pane)
        if not records:
            return None
        return min(max(self._selection[pane], 0), len(records) - 1)

    def selected_record(self, pane: Optional[Pane] = None) -> Optional[PackageRecord]:
        pane = self.active_pane if pane is None else pane
        index = self.selected_index(pane)
        if index is None:
            return None
        return self.list_for(pane)[index]

    def snapshot(self) -> ViewSnapshot:
        main_title = "Explicit" if self.filter_explicit_only else "All"
        titles = {
            Pane.DEPENDENTS: "Dependents",
            Pane.MAIN: main_title,
            Pane.DEPENDENCIES: "Dependencies",
        }
        columns = tuple(
            ColumnView(
                pane=pane,
                title=titles[pane],
                records=self.list_for(pane),
                selected=self.selected_index(pane),
                active=pane is self.active_pane,
            )
            for pane in Pane
        )
        return ViewSnapshot(
            columns=columns,  # type: ignore[arg-type]
            active_pane=self.active_pane,
            main_package=self.main_package,
            sort_mode=self.sort_mode,
            filter_explicit_only=self.filter_explicit_only,
            searching=self.searching,
            search_draft=self.search_draft,
            search_query=self.search_query,
            search_direction=self.search_direction,
            search_status=self.search_status,
        )

    # ------------------------------------------------------------------ #
    # dispatch                                                           #
    # ------------------------------------------------------------------ #

    def dispatch(self, action: Action) -> bool:
        """Apply one action. Returns ``True`` when the session should end."""
        if action is Action.QUIT:
            return True
        handler = self._handlers.get(action)
        if handler is None:
            # help toggling belongs to the presentation layer
            return False
        self.search_status = None
        handler()
        return False

    # ------------------------------------------------------------------ #
    # pane / list movement                                               #
    # ------------------------------------------------------------------ #

    def move_left(self) -> None:
        self.active_pane = self.active_pane.left()

    def move_right(self) -> None:
        self.active_pane = self.active_pane.right()

    def move_up(self) -> None:
        self._move_by(-1)

    def move_down(self) -> None:
        self._move_by(1)

    def page_up(self) -> None:
        self._move_by(-self.page_size)

    def page_down(self) -> None:
        self._move_by(self.page_size)

    def home(self) -> None:
        if self.list_for(self.active_pane):
            self._select(self.active_pane, 0)

    def end(self) -> None:
        records = self.list_for(self.active_pane)
        if records:
            self._select(self.active_pane, len(records) - 1)

    def _move_by(self, distance: int) -> None:
        current = self.selected_index(self.active_pane)
        if current is None:
            return
        self._select(self.active_pane, current + distance)

    def _select(self, pane: Pane, index: int) -> None:
        records = self.list_for(pane)
        if not records:
            return
        index = min(max(index, 0), len(records) - 1)
        self._selection[pane] = index
        if pane is Pane.MAIN:
            self._set_main(records[index].name)

    # ------------------------------------------------------------------ #
    # focus                                                              #
    # ------------------------------------------------------------------ #

    def enter(self) -> None:
        if self.active_pane is Pane.MAIN:
            return
        target = self.selected_record(self.active_pane)
        if target is None:
            return
        origin = self.active_pane
        previous = self.main_package
        self._focus(target)
        # keep the package we came from selected on the side it now appears
        opposite = origin.opposite()
        for index, record in enumerate(self.list_for(opposite)):
            if record.name == previous:
                self._selection[opposite] = index
                break

    def focus_package(self, name: str) -> None:
        """Make ``name`` the main package, as if it had been entered."""
        self._focus(self.graph.get(name))

    def _focus(self, target: PackageRecord) -> None:
        if self.filter_explicit_only and not target.explicitly_installed:
            LOGGER.debug(f"{target.name} is not explicit, disabling explicit filter")
            self.filter_explicit_only = False
            self._recompute()
        self.active_pane = Pane.MAIN
        self._set_main(target.name)
        for index, record in enumerate(self.lists.main):
            if record.name == target.name:
                self._selection[Pane.MAIN] = index
                break

    def _set_main(self, name: str) -> None:
        if name == self.main_package:
            return
        self.main_package = name
        self._selection[Pane.DEPENDENTS] = 0
        self._selection[Pane.DEPENDENCIES] = 0
        self._recompute()

    def _recompute(self) -> None:
        try:
            self.lists = derive(
                self.graph, self.main_package, self.sort_mode, self.filter_explicit_only
            )
        except PackageNotFoundError as e:
            LOGGER.warning(f"{e}; falling back to first package")
            self.lists = derive(self.graph, "", self.sort_mode, self.filter_explicit_only)
            self.main_package = self.lists.main[0].name if self.lists.main else ""
            self._selection = {pane: 0 for pane in Pane}
            if self.main_package:
                self.lists = derive(
                    self.graph,
                    self.main_package,
                    self.sort_mode,
                    self.filter_explicit_only,
                )

    # ------------------------------------------------------------------ #
    # toggles                                                            #
    # ------------------------------------------------------------------ #

    def toggle_sort(self) -> None:
        selected: Dict[Pane, Optional[str]] = {}
        for pane in (Pane.DEPENDENTS, Pane.DEPENDENCIES):
            record = self.selected_record(pane)
            selected[pane] = record.name if record else None
        self.sort_mode = self.sort_mode.toggled()
        self._recompute()
        # the Main selection always tracks the main package
        selected[Pane.MAIN] = self.main_package
        for pane in Pane:
            name = selected[pane]
            for index, record in enumerate(self.list_for(pane)):
                if record.name == name:
                    self._selection[pane] = index
                    break
        LOGGER.debug(f"Sort mode is now {self.sort_mode.value}")

    def toggle_filter(self) -> None:
        # only the Main list changes, the main package and side panes stay put
        self.filter_explicit_only = not self.filter_explicit_only
        self._recompute()
        records = self.lists.main
        if not records:
            self._selection[Pane.MAIN] = 0
            return
        for index, record in enumerate(records):
            if record.name == self.main_package:
                self._selection[Pane.MAIN] = index
                return
        self._selection[Pane.MAIN] = min(self._selection[Pane.MAIN], len(records) - 1)
        if not self.main_package:
            # nothing was focused while the filter hid every package
            self._set_main(records[self._selection[Pane.MAIN]].name)

    # ------------------------------------------------------------------ #
    # search                                                             #
    # ------------------------------------------------------------------ #

    def begin_search(self) -> None:
        self.searching = True
        self.search_draft = ""

    def update_search(self, text: str) -> None:
        if self.searching:
            self.search_draft = text

    def confirm_search(self) -> None:
        if not self.searching:
            return
        self.searching = False
        self.search_query = self.search_draft or None
        self.search_draft = ""
        self.search_direction = SearchDirection.FORWARD
        if self.search_query:
            self._search(SearchDirection.FORWARD)

    def cancel_search(self) -> None:
        self.searching = False
        self.search_draft = ""

    def search_next(self) -> None:
        self._search(SearchDirection.FORWARD)

    def search_previous(self) -> None:
        self._search(SearchDirection.BACKWARD)

    def _search(self, direction: SearchDirection) -> None:
        self.search_direction = direction
        if not self.search_query:
            self.search_status = "no search term"
            return
        pane = self.active_pane
        current = self.selected_index(pane)
        index = None
        if current is not None:
            index = find_next(self.list_for(pane), current, direction, self.search_query)
        if index is None:
            self.search_status = f"no other match for {self.search_query!r}"
            return
        self._select(pane, index)
