"""
pacdex.models – package records and the small enums shared by every layer
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple


class Reason(str, Enum):
    EXPLICIT = "explicit"
    DEPENDENCY = "dependency"


class SortMode(str, Enum):
    """Ordering applied identically to all three panes."""

    ALPHABETICAL = "name"
    SIZE_DESCENDING = "size"

    def toggled(self) -> "SortMode":
        if self is SortMode.ALPHABETICAL:
            return SortMode.SIZE_DESCENDING
        return SortMode.ALPHABETICAL

    def key(self, record: "PackageRecord") -> Tuple:
        if self is SortMode.SIZE_DESCENDING:
            return (-record.installed_size, record.name)
        return (record.name,)

    @property
    def label(self) -> str:
        return "name ↑" if self is SortMode.ALPHABETICAL else "size ↓"


class Pane(int, Enum):
    DEPENDENTS = 0
    MAIN = 1
    DEPENDENCIES = 2

    def left(self) -> "Pane":
        return Pane(max(self.value - 1, Pane.DEPENDENTS.value))

    def right(self) -> "Pane":
        return Pane(min(self.value + 1, Pane.DEPENDENCIES.value))

    def opposite(self) -> "Pane":
        if self is Pane.DEPENDENTS:
            return Pane.DEPENDENCIES
        if self is Pane.DEPENDENCIES:
            return Pane.DEPENDENTS
        return self


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def step(self) -> int:
        return 1 if self is SearchDirection.FORWARD else -1


class Action(str, Enum):
    """Logical input actions delivered to the navigation state."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    TOGGLE_SORT = "toggle_sort"
    TOGGLE_FILTER = "toggle_filter"
    ENTER_SEARCH = "enter_search"
    SEARCH_CONFIRM = "search_confirm"
    SEARCH_CANCEL = "search_cancel"
    SEARCH_NEXT = "search_next"
    SEARCH_PREV = "search_prev"
    TOGGLE_HELP = "toggle_help"
    QUIT = "quit"


@dataclass(frozen=True)
class OptionalDependency:
    name: str
    description: Optional[str] = None

    @classmethod
    def parse(cls, line: str) -> "OptionalDependency":
        """Parse an ``name: reason`` line; the reason part is optional."""
        name, sep, description = line.partition(": ")
        return cls(name=name.strip(), description=description.strip() if sep else None)


@dataclass(frozen=True)
class PackageRecord:
    """Immutable snapshot of one installed package."""

    name: str
    version: str
    installed_size: int = 0
    explicitly_installed: bool = True
    dependency_names: FrozenSet[str] = frozenset()
    description: str = ""
    url: str = ""
    provides: FrozenSet[str] = frozenset()
    optional_dependencies: Tuple[OptionalDependency, ...] = field(default=())

    @property
    def reason(self) -> Reason:
        return Reason.EXPLICIT if self.explicitly_installed else Reason.DEPENDENCY

    @property
    def optional_dependency_names(self) -> FrozenSet[str]:
        return frozenset(dep.name for dep in self.optional_dependencies)


def sort_records(
    records: Iterable[PackageRecord], sort_mode: SortMode
) -> List[PackageRecord]:
    return sorted(records, key=sort_mode.key)
