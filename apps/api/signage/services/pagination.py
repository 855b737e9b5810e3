"""Search and pagination over in-memory record lists."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

RecordT = TypeVar("RecordT")


def filter_by_name(records: Sequence[RecordT], search: str | None, *, name_of: Callable[[RecordT], str]) -> list[RecordT]:
    """Case-insensitive substring match on the record name; empty search keeps everything."""
    if not search:
        return list(records)
    needle = search.lower()
    return [record for record in records if needle in name_of(record).lower()]


def paginate(records: Sequence[RecordT], *, page: int, limit: int) -> list[RecordT]:
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be >= 1")
    start = (page - 1) * limit
    return list(records[start : start + limit])
