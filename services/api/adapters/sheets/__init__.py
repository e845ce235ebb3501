# services/api/adapters/sheets/__init__.py
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials

from models import Record
from models.converters import ROW_HEADERS, record_from_row, record_to_row

from ..base import RecordStore

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# A..G
LAST_COLUMN = chr(ord("A") + len(ROW_HEADERS) - 1)


def _sa_client_from_json_or_path(google_sa_json: str) -> gspread.Client:
    """
    Accepts either:
      - absolute/relative path to a service-account JSON file, OR
      - a literal JSON string.
    Returns an authorized gspread Client.
    """
    if not google_sa_json:
        raise ValueError("GOOGLE_SA_JSON is required (path to file or inline JSON).")

    # Try to treat as inline JSON first
    try:
        parsed = json.loads(google_sa_json)
        creds = Credentials.from_service_account_info(parsed, scopes=SCOPES)
        return gspread.authorize(creds)
    except json.JSONDecodeError:
        # Not JSON; treat as file path
        creds = Credentials.from_service_account_file(google_sa_json, scopes=SCOPES)
        return gspread.authorize(creds)


class SheetsAdapter(RecordStore):
    """
    Google Sheets record store.

    One tab (default "Sheet1") holds the inventory:
    header in row 1, one record per row from row 2, columns A..G.
    No retries and no caching of values: every fetch reads the tab,
    every update rewrites it.
    """

    def __init__(
        self,
        google_sa_json: Optional[str],
        spreadsheet_id: Optional[str],
        tab_name: str = "Sheet1",
        client: Optional[gspread.Client] = None,
    ) -> None:
        if client is None:
            if not google_sa_json:
                raise ValueError("SheetsAdapter requires GOOGLE_SA_JSON")
            client = _sa_client_from_json_or_path(google_sa_json)

        self.gc = client
        self.default_sheet_id = spreadsheet_id or ""
        self.tab_name = tab_name

        # Spreadsheet handles by id (opening one costs an API call)
        self._spreadsheets: dict[str, gspread.Spreadsheet] = {}

    # ========== Worksheet helpers ==========

    def _resolve(self, sheet_id: Optional[str]) -> str:
        resolved = sheet_id or self.default_sheet_id
        if not resolved:
            raise ValueError("SHEET_ID_REQUIRED")
        return resolved

    def _spreadsheet(self, sheet_id: Optional[str]) -> gspread.Spreadsheet:
        key = self._resolve(sheet_id)
        ss = self._spreadsheets.get(key)
        if ss is None:
            ss = self.gc.open_by_key(key)
            self._spreadsheets[key] = ss
        return ss

    def _worksheet(self, sheet_id: Optional[str]) -> gspread.Worksheet:
        return self._spreadsheet(sheet_id).worksheet(self.tab_name)

    # ========== RecordStore API ==========

    def fetch_records(self, sheet_id: Optional[str] = None) -> list[Record]:
        """
        Read the whole tab and map rows 2.. to Records.
        Any failure (auth, missing tab, empty sheet) is logged and yields [].
        """
        try:
            rows = self._worksheet(sheet_id).get_all_values()
            if not rows:
                raise ValueError("No data found")
            return [record_from_row(r) for r in rows[1:]]
        except Exception as e:
            logger.error(f"Error fetching data from Google Sheets: {e}")
            return []

    def update_records(self, sheet_id: Optional[str], records: list[Record]) -> None:
        """
        Overwrite the data rows (A2:G...) with `records` and clear whatever
        was left below them. Errors are logged and re-raised.
        """
        try:
            ws = self._worksheet(sheet_id)
            rows = [record_to_row(r) for r in records]
            if rows:
                ws.update(
                    range_name=f"A2:{LAST_COLUMN}{len(rows) + 1}",
                    values=rows,
                    value_input_option="USER_ENTERED",
                )
            # Drop stale rows from a previous, longer write
            ws.batch_clear([f"A{len(rows) + 2}:{LAST_COLUMN}"])
        except Exception as e:
            logger.error(f"Error updating data in Google Sheets: {e}")
            raise

    def ping(self, sheet_id: Optional[str] = None) -> None:
        self._worksheet(sheet_id).acell("A1")

    # ========== Setup ==========

    def ensure_sheet(self, sheet_id: Optional[str] = None) -> dict[str, Any]:
        """
        Make sure the inventory tab exists and row 1 holds ROW_HEADERS.

        Returns a small summary: {"created": bool, "headers_updated": bool}.
        """
        ss = self._spreadsheet(sheet_id)
        created = False
        try:
            ws = ss.worksheet(self.tab_name)
        except gspread.WorksheetNotFound:
            logger.info(f"Creating tab '{self.tab_name}'")
            ws = ss.add_worksheet(title=self.tab_name, rows=1000, cols=len(ROW_HEADERS))
            created = True

        existing = ws.row_values(1)
        headers_updated = False
        if existing != ROW_HEADERS:
            ws.update(range_name=f"A1:{LAST_COLUMN}1", values=[ROW_HEADERS])
            headers_updated = True

        return {"created": created, "headers_updated": headers_updated}
