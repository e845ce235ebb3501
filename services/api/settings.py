# services/api/settings.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict, Field
import base64
from typing import List
from pathlib import Path

class Settings(BaseSettings):
    # Storage settings
    # "memory" serves the built-in seed rows; set STORAGE_BACKEND=sheets in .env for Google Sheets
    storage_backend: str = "memory"
    google_sa_json: str = ""
    google_sa_json_base64: str = ""

    # Default spreadsheet used when a request does not pass ?sheetId=
    sheets_spreadsheet_id: str = ""
    # Worksheet/tab holding the inventory rows (header in row 1)
    sheets_tab_name: str = "Sheet1"

    # CORS settings
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    # ---- Inventory page ----

    # If TRUE, saving a record from the add wizard also writes the whole list
    # back to storage via update_records. FALSE keeps additions in the session only.
    persist_on_save: bool = Field(
        default=False,
        description="Write the session's record list to storage after each wizard save",
    )
    session_cookie_name: str = "inventory_session"
    # Idle sessions are dropped after this many seconds; at most session_max_views are kept
    session_ttl_seconds: int = 1800
    session_max_views: int = 500

    model_config = ConfigDict(
        # Always load .env from the same folder as this settings.py
        env_file=str(Path(__file__).resolve().parent / ".env"),
        extra="ignore",
    )


    def resolved_google_sa_json(self) -> str:
        """
        Return the path to the service account JSON (or the inline JSON).
        If GOOGLE_SA_JSON_BASE64 is set, decode it to a temp file.
        Otherwise return GOOGLE_SA_JSON as-is.
        """
        if self.google_sa_json_base64:
            import tempfile

            decoded = base64.b64decode(self.google_sa_json_base64)
            temp_file = tempfile.NamedTemporaryFile(mode='w', delete=False, suffix='.json')
            temp_file.write(decoded.decode('utf-8'))
            temp_file.close()
            return temp_file.name

        return self.google_sa_json

    def get_origins_list(self) -> List[str]:
        """Parse comma-separated origins into a list."""
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


_settings_instance = None

def get_settings() -> Settings:
    """Singleton pattern for settings."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
