"""
Storage adapter interface for the inventory service.
Defines the contract that all record stores must implement.
"""

from typing import Protocol, List, Optional

from models import Record


class RecordStore(Protocol):
    """
    Protocol defining the interface for all storage adapters.

    This allows swapping between Google Sheets and the in-memory store
    without changing the router code.

    NOTE:
    - Every call takes the target sheet id; a falsy id means
      "the adapter's default sheet".
    - There is no per-row API: reads return the whole tab and writes
      overwrite the whole tab (last writer wins).
    """

    def fetch_records(self, sheet_id: Optional[str] = None) -> List[Record]:
        """
        Return every record of the sheet, header excluded.

        Never raises: on any failure the error is logged and an
        empty list is returned.
        """
        ...

    def update_records(self, sheet_id: Optional[str], records: List[Record]) -> None:
        """
        Overwrite the sheet's data rows with `records`.

        Raises on failure (the caller decides how to report it).
        """
        ...

    def ping(self, sheet_id: Optional[str] = None) -> None:
        """
        Cheap connectivity check used by the readiness endpoint.
        Raises if the backend cannot be reached.
        """
        ...
