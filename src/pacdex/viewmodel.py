"""
pacdex.viewmodel – the three pane lists derived from graph + focus
"""

from dataclasses import dataclass
from typing import Tuple

from .graph import PackageGraph
from .models import Pane, PackageRecord, SortMode, sort_records

__all__ = ["PaneLists", "derive", "sort_records"]


@dataclass(frozen=True)
class PaneLists:
    dependents: Tuple[PackageRecord, ...]
    main: Tuple[PackageRecord, ...]
    dependencies: Tuple[PackageRecord, ...]

    @classmethod
    def empty(cls) -> "PaneLists":
        return cls((), (), ())

    def for_pane(self, pane: Pane) -> Tuple[PackageRecord, ...]:
        if pane is Pane.DEPENDENTS:
            return self.dependents
        if pane is Pane.DEPENDENCIES:
            return self.dependencies
        return self.main


def derive(
    graph: PackageGraph,
    main_package: str,
    sort_mode: SortMode,
    filter_explicit_only: bool,
) -> PaneLists:
    """Compute the Dependents / Main / Dependencies lists.

    Pure: nothing is cached between calls. An empty ``main_package`` yields
    empty side lists; an unknown one raises ``PackageNotFoundError``.
    """
    main = graph.all(sort_mode)
    if filter_explicit_only:
        main = [record for record in main if record.explicitly_installed]

    if not main_package:
        return PaneLists((), tuple(main), ())

    return PaneLists(
        dependents=tuple(graph.dependents_of(main_package, sort_mode)),
        main=tuple(main),
        dependencies=tuple(graph.dependencies_of(main_package, sort_mode)),
    )
