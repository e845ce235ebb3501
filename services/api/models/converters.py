from __future__ import annotations

from typing import Any, List, Sequence

from . import Record


# Column order of the inventory tab (A..G)
ROW_HEADERS = ["id", "dateAdded", "owner", "coOwners", "series", "model", "brokenParts"]


def _cell(row: Sequence[Any], idx: int) -> str:
    """Sheets drops trailing empty cells, so short rows are padded with ''."""
    if idx >= len(row) or row[idx] is None:
        return ""
    return str(row[idx])


def split_co_owners(raw: str | None) -> List[str]:
    """
    "654321, 234567" -> ["654321", "234567"]
    Blank parts are dropped, so an empty cell gives [].
    """
    if not raw:
        return []
    return [part.strip() for part in str(raw).split(",") if part.strip()]


def join_co_owners(co_owners: List[str]) -> str:
    return ", ".join(co_owners)


def record_from_row(row: Sequence[Any]) -> Record:
    """Convert one positional sheet row (A..G) into a Record."""
    return Record(
        id=_cell(row, 0),
        date_added=_cell(row, 1),
        owner=_cell(row, 2),
        co_owners=split_co_owners(_cell(row, 3)),
        series=_cell(row, 4),
        model=_cell(row, 5),
        broken_parts=_cell(row, 6),
    )


def record_to_row(record: Record) -> List[str]:
    return [
        record.id,
        record.date_added,
        record.owner,
        join_co_owners(record.co_owners),
        record.series,
        record.model,
        record.broken_parts,
    ]
