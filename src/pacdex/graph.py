"""
pacdex.graph – dependency / dependant adjacency over installed packages
"""

import logging
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Set

from .models import PackageRecord, SortMode, sort_records

LOGGER = logging.getLogger(__name__)


class GraphError(Exception):
    """Base class for package graph failures."""


class EmptyGraphError(GraphError):
    def __init__(self) -> None:
        super().__init__("no packages supplied")


class PackageNotFoundError(GraphError):
    def __init__(self, name: str) -> None:
        super().__init__(f"package not found: {name!r}")
        self.name = name


class PackageGraph:
    """Read-only package table with name-keyed adjacency.

    Packages reference each other by name only, so dependency cycles are just
    entries that point back at each other through the table.
    """

    def __init__(
        self,
        records: Mapping[str, PackageRecord],
        dependencies: Mapping[str, FrozenSet[str]],
        dependents: Mapping[str, FrozenSet[str]],
        dangling: Optional[Mapping[str, FrozenSet[str]]] = None,
    ) -> None:
        self._records = dict(records)
        self._dependencies = dict(dependencies)
        self._dependents = dict(dependents)
        self.dangling: Dict[str, FrozenSet[str]] = dict(dangling or {})

    @classmethod
    def build(
        cls, records: Mapping[str, PackageRecord], include_optional: bool = True
    ) -> "PackageGraph":
        if not records:
            raise EmptyGraphError()

        # first provider in name order wins
        providers: Dict[str, str] = {}
        for name in sorted(records):
            for provided in records[name].provides:
                if provided not in records:
                    providers.setdefault(provided, name)

        dependencies: Dict[str, Set[str]] = {name: set() for name in records}
        dependents: Dict[str, Set[str]] = {name: set() for name in records}
        dangling: Dict[str, Set[str]] = {}

        for name, record in records.items():
            wanted = set(record.dependency_names)
            if include_optional:
                wanted |= record.optional_dependency_names
            for dep in wanted:
                target = dep if dep in records else providers.get(dep)
                if target is None:
                    dangling.setdefault(name, set()).add(dep)
                    continue
                if target == name:
                    continue
                dependencies[name].add(target)
                dependents[target].add(name)

        if dangling:
            LOGGER.info(
                f"{sum(len(v) for v in dangling.values())} dependency names could not be resolved"
            )
        LOGGER.debug(f"Built package graph with {len(records)} packages")
        return cls(
            records,
            {name: frozenset(deps) for name, deps in dependencies.items()},
            {name: frozenset(deps) for name, deps in dependents.items()},
            {name: frozenset(deps) for name, deps in dangling.items()},
        )

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def get(self, name: str) -> PackageRecord:
        try:
            return self._records[name]
        except KeyError:
            raise PackageNotFoundError(name) from None

    def dependency_names_of(self, name: str) -> FrozenSet[str]:
        self.get(name)
        return self._dependencies[name]

    def dependent_names_of(self, name: str) -> FrozenSet[str]:
        self.get(name)
        return self._dependents[name]

    def dependencies_of(
        self, name: str, sort_mode: SortMode = SortMode.ALPHABETICAL
    ) -> List[PackageRecord]:
        return sort_records(
            (self._records[dep] for dep in self.dependency_names_of(name)), sort_mode
        )

    def dependents_of(
        self, name: str, sort_mode: SortMode = SortMode.ALPHABETICAL
    ) -> List[PackageRecord]:
        return sort_records(
            (self._records[dep] for dep in self.dependent_names_of(name)), sort_mode
        )

    def all(self, sort_mode: SortMode = SortMode.ALPHABETICAL) -> List[PackageRecord]:
        return sort_records(self._records.values(), sort_mode)
