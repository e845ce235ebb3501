# services/api/schemas/record.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import Record


class UpdateDataRequest(BaseModel):
    """
    Body of POST /api/updateData.
    `sheetId` falls back to SHEETS_SPREADSHEET_ID when omitted.
    """
    model_config = ConfigDict(populate_by_name=True)

    sheet_id: Optional[str] = Field(None, alias="sheetId")
    data: List[Record] = Field(default_factory=list, description="Full record list; replaces the sheet contents")


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str
