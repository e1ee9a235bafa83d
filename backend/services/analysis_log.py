"""Per-run structured log of pipeline events."""

import logging
from typing import Any

from models.schemas.analysis_log import AnalysisLogEntry, LogLevel

logger = logging.getLogger(__name__)

_LEVELS: dict[str, int] = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class AnalysisLog:
    """Collects (level, message, data) entries and mirrors each to `logger`."""

    def __init__(self, logger: logging.Logger = logger) -> None:
        self._logger = logger
        self.entries: list[AnalysisLogEntry] = []

    def record(self, level: LogLevel, message: str, **data: Any) -> AnalysisLogEntry:
        entry = AnalysisLogEntry(level=level, message=message, data=data)
        self.entries.append(entry)
        if data:
            self._logger.log(_LEVELS[level], "%s %s", message, data)
        else:
            self._logger.log(_LEVELS[level], "%s", message)
        return entry

    def info(self, message: str, **data: Any) -> AnalysisLogEntry:
        return self.record("info", message, **data)

    def warning(self, message: str, **data: Any) -> AnalysisLogEntry:
        return self.record("warning", message, **data)

    def error(self, message: str, **data: Any) -> AnalysisLogEntry:
        return self.record("error", message, **data)

    def by_level(self, level: LogLevel) -> list[AnalysisLogEntry]:
        return [entry for entry in self.entries if entry.level == level]

    def __len__(self) -> int:
        return len(self.entries)
