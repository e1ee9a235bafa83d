"""Structured pipeline log entries (level, message, contextual data)."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field

LogLevel = Literal["info", "warning", "error"]


class AnalysisLogEntry(BaseModel):
    level: LogLevel
    message: str
    data: dict[str, Any] = {}
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
