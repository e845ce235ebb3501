from __future__ import annotations

from typing import List
from pydantic import BaseModel, ConfigDict, Field


SERIES_OPTIONS = ["A1", "B2", "C3"]
MODEL_OPTIONS = ["X100", "Y200", "Z300"]


class Record(BaseModel):
    """
    Domain model for one inventory row (one line of the spreadsheet tab).

    JSON uses the camelCase names (dateAdded, coOwners, brokenParts);
    Python code uses the snake_case attributes.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    date_added: str = Field("", alias="dateAdded")
    owner: str = ""
    co_owners: List[str] = Field(default_factory=list, alias="coOwners")
    series: str = ""
    model: str = ""
    broken_parts: str = Field("", alias="brokenParts")
