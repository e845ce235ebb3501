# services/api/routers/inventory.py
"""
Inventory page: searchable/sortable table plus the add-record wizard.

State lives per browser session (cookie) in process memory, like the
page state of a single-page app: it is gone when the server restarts.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Annotated, List, Optional

from cachetools import TTLCache
from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from adapters.base import RecordStore
from core.table import SORTABLE_COLUMNS, TableState
from core.wizard import AddRecordWizard, WizardError, WizardStep
from models import MODEL_OPTIONS, SERIES_OPTIONS, Record
from settings import get_settings

logger = getLogger(__name__)
router = APIRouter(prefix="/inventory", tags=["inventory"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

COLUMN_LABELS = {
    "id": "ID",
    "dateAdded": "Date Added",
    "owner": "Owner",
    "coOwners": "Co-owners",
    "series": "Series",
    "model": "Model",
    "brokenParts": "Broken Parts",
}


def get_storage() -> RecordStore:
    from main import get_storage_adapter
    return get_storage_adapter()


Storage = Annotated[RecordStore, Depends(get_storage)]


@dataclass
class InventoryView:
    table: TableState
    wizard: AddRecordWizard = field(default_factory=AddRecordWizard)
    # one-shot banner shown on the next render
    notice: Optional[str] = None


# session id -> view; idle sessions expire, oldest are evicted past the cap
_VIEWS: TTLCache = TTLCache(
    maxsize=get_settings().session_max_views,
    ttl=get_settings().session_ttl_seconds,
)


def reset_views() -> None:
    _VIEWS.clear()


def _get_view(request: Request, storage: RecordStore) -> tuple[str, InventoryView]:
    cookie_name = get_settings().session_cookie_name
    session_id = request.cookies.get(cookie_name)
    view = _VIEWS.get(session_id) if session_id else None
    if view is None:
        session_id = uuid.uuid4().hex
        records = storage.fetch_records(get_settings().sheets_spreadsheet_id)
        logger.info(f"New inventory session {session_id[:8]} with {len(records)} records")
        view = InventoryView(table=TableState(records=records))
    # re-insert so the TTL counts from the last request
    _VIEWS[session_id] = view
    return session_id, view


def _with_cookie(response, session_id: str):
    response.set_cookie(get_settings().session_cookie_name, session_id, httponly=True, samesite="lax")
    return response


def _back_to_page(session_id: str) -> RedirectResponse:
    return _with_cookie(
        RedirectResponse(url="/inventory", status_code=status.HTTP_303_SEE_OTHER),
        session_id,
    )


def _persist(view: InventoryView, storage: RecordStore) -> None:
    sheet_id = get_settings().sheets_spreadsheet_id
    try:
        storage.update_records(sheet_id, view.table.records)
    except Exception as e:
        logger.error(f"Saving inventory to storage failed: {e}")
        view.notice = "Record added locally, but saving to the spreadsheet failed."


# ---------- Page ----------

@router.get("")
def inventory_page(
    request: Request,
    storage: Storage,
    q: Optional[str] = Query(None, description="Search on id or owner"),
):
    session_id, view = _get_view(request, storage)
    if q is not None:
        view.table.set_search(q)

    notice, view.notice = view.notice, None
    context = {
        "rows": view.table.visible(),
        "table": view.table,
        "columns": COLUMN_LABELS,
        "wizard": view.wizard,
        "steps": WizardStep,
        "series_options": SERIES_OPTIONS,
        "model_options": MODEL_OPTIONS,
        "notice": notice,
    }
    return _with_cookie(templates.TemplateResponse(request, "inventory.html", context), session_id)


@router.get("/records", response_model=List[Record])
def visible_records(
    request: Request,
    storage: Storage,
    q: Optional[str] = Query(None),
):
    """
    JSON of the rows the table shows (filtered + sorted).
    `q` filters this response only; the page's stored search term is left alone.
    """
    session_id, view = _get_view(request, storage)
    rows = [r.model_dump(by_alias=True) for r in view.table.visible(q)]
    return _with_cookie(JSONResponse(content=rows), session_id)


@router.post("/sort")
def sort_by(request: Request, storage: Storage, column: str = Form(...)):
    session_id, view = _get_view(request, storage)
    if column not in SORTABLE_COLUMNS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown sort column: {column}")
    view.table.toggle_sort(column)
    return _back_to_page(session_id)


# ---------- Wizard ----------

@router.post("/wizard/open")
def wizard_open(request: Request, storage: Storage):
    session_id, view = _get_view(request, storage)
    view.wizard.open()
    return _back_to_page(session_id)


@router.post("/wizard/next")
def wizard_next(request: Request, storage: Storage, value: str = Form("")):
    session_id, view = _get_view(request, storage)
    try:
        view.wizard.set_value(value)
        view.wizard.next()
    except WizardError as e:
        view.notice = str(e)
    return _back_to_page(session_id)


@router.post("/wizard/back")
def wizard_back(request: Request, storage: Storage, value: str = Form("")):
    session_id, view = _get_view(request, storage)
    try:
        # keep what was typed, like an input that updates on change
        view.wizard.set_value(value)
        view.wizard.back()
    except WizardError as e:
        view.notice = str(e)
    return _back_to_page(session_id)


@router.post("/wizard/skip")
def wizard_skip(request: Request, storage: Storage):
    session_id, view = _get_view(request, storage)
    try:
        view.wizard.skip()
    except WizardError as e:
        view.notice = str(e)
    return _back_to_page(session_id)


@router.post("/wizard/cancel")
def wizard_cancel(request: Request, storage: Storage):
    session_id, view = _get_view(request, storage)
    view.wizard.cancel()
    return _back_to_page(session_id)


@router.post("/wizard/save")
def wizard_save(request: Request, storage: Storage, value: str = Form("")):
    session_id, view = _get_view(request, storage)
    try:
        view.wizard.set_value(value)
        record = view.wizard.save()
    except WizardError as e:
        view.notice = str(e)
        return _back_to_page(session_id)

    view.table.add(record)
    logger.info(f"Added record {record.id} (session {session_id[:8]})")
    if get_settings().persist_on_save:
        _persist(view, storage)
    return _back_to_page(session_id)
