"""
In-memory storage adapter for the inventory service.
Serves the built-in seed rows so the page works without Google credentials.
Not persistent: everything is lost when the process exits.
"""
from typing import Dict, List, Optional

from models import Record
from ..base import RecordStore


DEFAULT_SHEET_KEY = "local"

SEED_RECORDS = [
    Record(id="f12345", date_added="2024-07-01", owner="123456", co_owners=["654321", "234567"],
           series="A1", model="X100", broken_parts="None"),
    Record(id="f67890", date_added="2024-07-02", owner="789012", co_owners=["890123"],
           series="B2", model="Y200", broken_parts="Screen"),
    Record(id="f34567", date_added="2024-07-03", owner="345678", co_owners=[],
           series="C3", model="Z300", broken_parts="Keyboard"),
]


class MemoryAdapter(RecordStore):
    """
    One list of records per sheet id.
    A falsy sheet id means the default sheet, which starts with SEED_RECORDS.
    """

    def __init__(self, default_sheet_id: Optional[str] = None, seed: Optional[List[Record]] = None):
        self.default_sheet_id = default_sheet_id or DEFAULT_SHEET_KEY
        initial = SEED_RECORDS if seed is None else seed
        self._sheets: Dict[str, List[Record]] = {
            self.default_sheet_id: [r.model_copy(deep=True) for r in initial],
        }

    def _key(self, sheet_id: Optional[str]) -> str:
        return sheet_id or self.default_sheet_id

    def fetch_records(self, sheet_id: Optional[str] = None) -> List[Record]:
        rows = self._sheets.get(self._key(sheet_id), [])
        return [r.model_copy(deep=True) for r in rows]

    def update_records(self, sheet_id: Optional[str], records: List[Record]) -> None:
        self._sheets[self._key(sheet_id)] = [r.model_copy(deep=True) for r in records]

    def ping(self, sheet_id: Optional[str] = None) -> None:
        return None
