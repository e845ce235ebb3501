"""
Equipment Inventory - Backend API
FastAPI over a spreadsheet-as-database: Google Sheets or the in-memory seed store.

Install:
pip install -e .

Run server (from services/api):
uvicorn main:app --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import contextvars
import logging
import os
import time
import uuid
from typing import Optional

from adapters.base import RecordStore
from settings import Settings, get_settings

# ========== Request Context for Tracing ==========
request_id_var = contextvars.ContextVar('request_id', default=None)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================================
# BACKEND CONFIGURATION
# ============================================================================
settings = get_settings()

STORAGE_BACKEND = settings.storage_backend.lower()
SHEETS_SPREADSHEET_ID = settings.sheets_spreadsheet_id

logger.info(f"🔧 Storage Backend: {STORAGE_BACKEND.upper()}")

# ============================================================================
# STORAGE ADAPTER INITIALIZATION
# ============================================================================

def build_storage_adapter(cfg: Settings) -> RecordStore:
    backend = cfg.storage_backend.lower()

    if backend == "memory":
        from adapters.memory import MemoryAdapter
        return MemoryAdapter(default_sheet_id=cfg.sheets_spreadsheet_id)

    if backend == "sheets":
        from adapters.sheets import SheetsAdapter

        google_sa_json = cfg.resolved_google_sa_json()  # Uses base64 if available
        if not google_sa_json:
            raise ValueError("Google Sheets requires GOOGLE_SA_JSON or GOOGLE_SA_JSON_BASE64")
        try:
            logger.info("Initializing Google Sheets adapter...")
            adapter = SheetsAdapter(
                google_sa_json=google_sa_json,
                spreadsheet_id=cfg.sheets_spreadsheet_id,
                tab_name=cfg.sheets_tab_name,
            )
        except Exception as e:
            logger.error(f"✗ Failed to initialize Google Sheets: {e}")
            raise
        logger.info(f"✓ Google Sheets adapter initialized (tab '{cfg.sheets_tab_name}')")
        return adapter

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")


storage_adapter: Optional[RecordStore] = build_storage_adapter(settings)

# ---- DI helper (used by routers/*) ----
def get_storage_adapter(_=None) -> RecordStore:
    return storage_adapter

# ============================================================================
# FASTAPI APP
# ============================================================================

app = FastAPI(
    title="Equipment Inventory API",
    description="Inventory table backed by a spreadsheet (Google Sheets or in-memory)",
    version="1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# ========== Request Tracing Middleware ==========
@app.middleware("http")
async def request_tracing_middleware(request, call_next):
    """Add request_id and timing to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request_id_var.set(request_id)
    started = time.time()

    response = await call_next(request)

    latency = time.time() - started
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code}",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "latency_ms": round(latency * 1000, 2),
        }
    )

    response.headers["X-Request-ID"] = request_id
    return response


ALLOWED_ORIGINS = settings.get_origins_list()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )

# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": "Equipment Inventory API",
        "version": "1.0",
        "backend": STORAGE_BACKEND,
        "status": "running",
        "page": "/inventory",
        "docs": "/docs"
    }


@app.get("/healthz")
async def healthz():
    """
    Liveness check.
    Returns 200 as long as the process is up and serving.
    """
    return {
        "status": "ok",
        "timestamp": time.time(),
        "version": "1.0"
    }


@app.get("/readyz")
def readyz():
    """
    Readiness check.
    Pings the storage backend (reads A1 for Sheets). 503 if it fails.
    """
    try:
        get_storage_adapter().ping(SHEETS_SPREADSHEET_ID)
        return {
            "status": "ready",
            "backend": STORAGE_BACKEND,
            "timestamp": time.time()
        }
    except Exception as e:
        logger.error(f"Readiness check failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "backend": STORAGE_BACKEND,
                "error": str(e),
                "timestamp": time.time()
            }
        )


from routers import data as data_router
app.include_router(data_router.router)

from routers import inventory as inventory_router
app.include_router(inventory_router.router)


@app.on_event("startup")
async def startup_event():
    logger.info("Equipment Inventory API starting up...")
    logger.info(f"Storage Backend: {STORAGE_BACKEND.upper()}")
    if STORAGE_BACKEND == "sheets":
        logger.info(f"Default spreadsheet ID: {SHEETS_SPREADSHEET_ID or '(none)'}")
    logger.info(f"Allowed origins: {ALLOWED_ORIGINS}")
    logger.info(f"Persist wizard saves: {settings.persist_on_save}")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Equipment Inventory API shutting down...")

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")
