"""Diagnostics for text pulled out of an uploaded document."""

from pydantic import BaseModel


class ExtractionReport(BaseModel):
    text: str = ""
    word_count: int = 0
    quality_score: int = 0  # 0-100
    issues: list[str] = []
    stats: dict[str, float | int | bool] = {}
