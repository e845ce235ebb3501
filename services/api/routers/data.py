# services/api/routers/data.py
"""
Spreadsheet data endpoints: fetch everything / overwrite everything.
"""
from __future__ import annotations

from logging import getLogger
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from adapters.base import RecordStore
from models import Record
from schemas import ErrorOut, MessageOut, UpdateDataRequest
from settings import get_settings

logger = getLogger(__name__)
router = APIRouter(prefix="/api", tags=["data"])


def get_storage() -> RecordStore:
    """Dependency to get the storage adapter configured in main."""
    from main import get_storage_adapter
    return get_storage_adapter()


Storage = Annotated[RecordStore, Depends(get_storage)]


def _resolve_sheet_id(sheet_id: Optional[str]) -> str:
    return sheet_id or get_settings().sheets_spreadsheet_id


@router.get(
    "/fetchData",
    response_model=List[Record],
    responses={500: {"model": ErrorOut}},
)
def fetch_data(
    storage: Storage,
    sheet_id: Optional[str] = Query(None, alias="sheetId", description="Spreadsheet id; defaults to SHEETS_SPREADSHEET_ID"),
):
    """
    Return every record of the sheet.
    The adapter already turns read failures into an empty list.
    """
    try:
        return storage.fetch_records(_resolve_sheet_id(sheet_id))
    except Exception as e:
        logger.error(f"fetchData failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch data"},
        )


@router.post(
    "/updateData",
    response_model=MessageOut,
    responses={500: {"model": ErrorOut}},
)
def update_data(payload: UpdateDataRequest, storage: Storage):
    """Overwrite the sheet with `data` (last writer wins)."""
    sheet_id = _resolve_sheet_id(payload.sheet_id)
    try:
        storage.update_records(sheet_id, payload.data)
    except Exception as e:
        logger.error(f"updateData failed for sheet {sheet_id!r}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to update data"},
        )

    logger.info(f"updateData wrote {len(payload.data)} records to sheet {sheet_id!r}")
    return {"message": "Data updated successfully"}
