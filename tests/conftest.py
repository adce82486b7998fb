"""Shared fixtures: a small installed-package set with a cycle, a provide and
a dependency that is not installed.

    alpha  (explicit, 100)   -> glibc, sh (provided by bash)
    bash   (explicit, 500)   -> glibc, readline
    filesystem (dep, 50)     -> glibc
    glibc  (dep, 1000)       -> filesystem          (cycle with filesystem)
    ncurses (dep, 300)       -> glibc
    readline (dep, 300)      -> glibc, ncurses
    vim    (explicit, 2000)  -> gpm (not installed); optional: bash
"""

from typing import Dict, Iterable

import pytest

from pacdex.graph import PackageGraph
from pacdex.models import OptionalDependency, PackageRecord


def make_record(
    name: str,
    size: int = 0,
    explicit: bool = False,
    deps: Iterable[str] = (),
    optional: Iterable[str] = (),
    provides: Iterable[str] = (),
) -> PackageRecord:
    return PackageRecord(
        name=name,
        version="1.0-1",
        installed_size=size,
        explicitly_installed=explicit,
        dependency_names=frozenset(deps),
        optional_dependencies=tuple(OptionalDependency(dep) for dep in optional),
        provides=frozenset(provides),
    )


@pytest.fixture
def records() -> Dict[str, PackageRecord]:
    pkgs = [
        make_record("alpha", 100, True, deps=["glibc", "sh"]),
        make_record("bash", 500, True, deps=["glibc", "readline"], provides=["sh"]),
        make_record("filesystem", 50, deps=["glibc"]),
        make_record("glibc", 1000, deps=["filesystem"]),
        make_record("ncurses", 300, deps=["glibc"]),
        make_record("readline", 300, deps=["glibc", "ncurses"]),
        make_record("vim", 2000, True, deps=["gpm"], optional=["bash"]),
    ]
    return {pkg.name: pkg for pkg in pkgs}


@pytest.fixture
def graph(records) -> PackageGraph:
    return PackageGraph.build(records)
