"""
Search / sort state for the inventory table.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from models import Record


# JSON column name -> Record attribute
SORTABLE_COLUMNS = {
    "id": "id",
    "dateAdded": "date_added",
    "owner": "owner",
    "coOwners": "co_owners",
    "series": "series",
    "model": "model",
    "brokenParts": "broken_parts",
}

ASC = "asc"
DESC = "desc"


def filter_records(records: List[Record], term: Optional[str]) -> List[Record]:
    """Case-insensitive substring match on id OR owner. Empty term keeps everything."""
    needle = (term or "").lower()
    if not needle:
        return list(records)
    return [
        r for r in records
        if needle in r.id.lower() or needle in r.owner.lower()
    ]


def sort_records(records: List[Record], column: str, direction: str = ASC) -> List[Record]:
    """
    Stable single-column sort using the values' natural ordering
    (strings lexicographic, co-owner lists element by element).
    Equal keys keep their input order in both directions.
    """
    attr = SORTABLE_COLUMNS.get(column)
    if attr is None:
        raise ValueError(f"Unknown sort column: {column}")
    return sorted(records, key=lambda r: getattr(r, attr), reverse=(direction == DESC))


@dataclass
class TableState:
    """
    The table part of one inventory view: the record list plus
    the current search term and sort settings.
    """
    records: List[Record] = field(default_factory=list)
    search_term: str = ""
    sort_column: str = "id"
    sort_direction: str = ASC

    def set_search(self, term: Optional[str]) -> None:
        self.search_term = term or ""

    def toggle_sort(self, column: str) -> None:
        """Same column flips the direction; a new column starts ascending."""
        if column not in SORTABLE_COLUMNS:
            raise ValueError(f"Unknown sort column: {column}")
        if column == self.sort_column:
            self.sort_direction = DESC if self.sort_direction == ASC else ASC
        else:
            self.sort_column = column
            self.sort_direction = ASC

    def add(self, record: Record) -> None:
        self.records.append(record)

    def visible(self, term: Optional[str] = None) -> List[Record]:
        """
        Filtered then sorted view, recomputed from the current state on every call.
        `term` overrides the stored search term for this call only.
        """
        return sort_records(
            filter_records(self.records, self.search_term if term is None else term),
            self.sort_column,
            self.sort_direction,
        )
