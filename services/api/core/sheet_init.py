"""
Prepare a Google Sheet for the inventory service.
Creates the inventory tab if missing and writes the header row.

Run:
python -m core.sheet_init [SHEET_ID]
"""
import sys
from typing import List, Optional

from adapters.sheets import SheetsAdapter
from models.converters import ROW_HEADERS
from settings import get_settings


def main(argv: Optional[List[str]] = None, adapter: Optional[SheetsAdapter] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    sheet_id = args[0] if args else settings.sheets_spreadsheet_id

    if not sheet_id:
        print("✗ No sheet id: pass one as an argument or set SHEETS_SPREADSHEET_ID")
        return 2

    print(f"📄 Spreadsheet ID: {sheet_id}")
    print(f"📑 Tab: {settings.sheets_tab_name}\n")

    try:
        if adapter is None:
            adapter = SheetsAdapter(
                google_sa_json=settings.resolved_google_sa_json(),
                spreadsheet_id=sheet_id,
                tab_name=settings.sheets_tab_name,
            )
        summary = adapter.ensure_sheet(sheet_id)
    except Exception as e:
        print(f"✗ Failed to prepare sheet: {e}")
        return 1

    if summary["created"]:
        print(f"✅ Created tab '{settings.sheets_tab_name}'")
    else:
        print(f"✓ Tab '{settings.sheets_tab_name}' exists")

    if summary["headers_updated"]:
        print(f"  ✓ Headers written: {', '.join(ROW_HEADERS)}")
    else:
        print("  ✓ Headers already up to date")

    print(f"\nView your sheet: https://docs.google.com/spreadsheets/d/{sheet_id}/edit")
    return 0


if __name__ == "__main__":
    sys.exit(main())
