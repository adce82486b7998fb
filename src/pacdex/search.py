from typing import Optional, Sequence

from .models import PackageRecord, SearchDirection


def matches(record: PackageRecord, query: str) -> bool:
    """Case-insensitive substring match on the package name."""
    return bool(query) and query.casefold() in record.name.casefold()


def find_next(
    records: Sequence[PackageRecord],
    start_index: int,
    direction: SearchDirection,
    query: Optional[str],
) -> Optional[int]:
    """Index of the next match after ``start_index``, wrapping around once.

    ``start_index`` itself is never returned, so a list whose only match is the
    current entry yields ``None``.
    """
    if not query or not records:
        return None
    count = len(records)
    for offset in range(1, count):
        index = (start_index + direction.step * offset) % count
        if matches(records[index], query):
            return index
    return None
