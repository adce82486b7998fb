"""
pacdex.localdb – read pacman's local package database

Each installed package lives in ``<dbpath>/<name>-<version>/desc``, a file of
``%SECTION%`` headers each followed by one value per line and separated by
blank lines.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Union

from .models import OptionalDependency, PackageRecord

LOGGER = logging.getLogger(__name__)

LOCAL_DB_PATH = Path("/var/lib/pacman/local")


class LocalDBError(Exception):
    """The local package database could not be read."""


class DescParseError(LocalDBError):
    pass


def strip_constraint(spec: str) -> str:
    """``glibc>=2.38`` -> ``glibc``; ``libfoo.so=1-64`` -> ``libfoo.so``."""
    return re.split(r"[<>=]", spec, maxsplit=1)[0].strip()


def _sections(text: str) -> Iterator[List[str]]:
    for chunk in text.split("\n\n"):
        lines = [line for line in chunk.split("\n") if line]
        if not lines:
            continue
        if len(lines) < 2:
            raise DescParseError(f"section {lines[0]!r} has no content")
        yield lines


def parse_desc(text: str) -> PackageRecord:
    fields: Dict[str, object] = {
        "name": "",
        "version": "",
        "description": "",
        "url": "",
        "installed_size": 0,
        "explicitly_installed": True,
    }
    depends: List[str] = []
    optdepends: List[OptionalDependency] = []
    provides: List[str] = []

    for header, *body in _sections(text):
        first = body[0]
        if header == "%NAME%":
            fields["name"] = first
        elif header == "%VERSION%":
            fields["version"] = first
        elif header == "%DESC%":
            fields["description"] = first
        elif header == "%URL%":
            fields["url"] = first
        elif header == "%REASON%":
            if first == "1":
                fields["explicitly_installed"] = False
            elif first != "0":
                raise DescParseError(f"unexpected reason {first!r}")
        elif header == "%SIZE%":
            try:
                fields["installed_size"] = int(first)
            except ValueError:
                raise DescParseError(f"could not parse size {first!r}") from None
        elif header == "%DEPENDS%":
            depends.extend(strip_constraint(line) for line in body)
        elif header == "%OPTDEPENDS%":
            for line in body:
                dep = OptionalDependency.parse(line)
                optdepends.append(
                    OptionalDependency(strip_constraint(dep.name), dep.description)
                )
        elif header == "%PROVIDES%":
            provides.extend(strip_constraint(line) for line in body)

    if not fields["name"]:
        raise DescParseError("missing %NAME%")
    if not fields["version"]:
        raise DescParseError(f"missing %VERSION% for {fields['name']}")

    return PackageRecord(
        dependency_names=frozenset(depends),
        optional_dependencies=tuple(optdepends),
        provides=frozenset(provides),
        **fields,  # type: ignore[arg-type]
    )


def load_local_db(path: Union[str, Path] = LOCAL_DB_PATH) -> Dict[str, PackageRecord]:
    """Parse every ``desc`` file below ``path`` into a name -> record map."""
    path = Path(path)
    try:
        entries = sorted(path.iterdir())
    except OSError as e:
        raise LocalDBError(f"failed to read {path}: {e}") from e

    packages: Dict[str, PackageRecord] = {}
    for entry in entries:
        if not entry.is_dir():
            continue
        desc = entry / "desc"
        try:
            contents = desc.read_text(encoding="utf-8")
        except OSError as e:
            raise LocalDBError(f"failed to read {desc}: {e}") from e
        try:
            record = parse_desc(contents)
        except DescParseError as e:
            raise DescParseError(f"{desc}: {e}") from e
        if record.name in packages:
            LOGGER.warning(f"Duplicate package {record.name} in {entry}, keeping first")
            continue
        packages[record.name] = record

    LOGGER.info(f"Loaded {len(packages)} packages from {path}")
    return packages
