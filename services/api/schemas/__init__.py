"""
Pydantic schemas for API request/response validation.
"""
from .record import ErrorOut, MessageOut, UpdateDataRequest

__all__ = ["ErrorOut", "MessageOut", "UpdateDataRequest"]
