from pydantic import BaseModel, Field

from config import settings
from models.schemas.analysis import ApplicationInput


class QuickAnalyzeRequest(BaseModel):
    job_description: str = Field(
        ..., min_length=1, max_length=settings.max_job_description_chars, description="Job description text"
    )
    resume_text: str = Field("", max_length=50000, description="Plain text resume content")
    cover_letter_text: str = Field("", max_length=50000, description="Plain text cover letter content")
    ai_enabled: bool | None = Field(None, description="Override the configured AI service toggle")


class BatchAnalyzeRequest(BaseModel):
    items: list[ApplicationInput] = Field(..., min_length=1, max_length=20)
    ai_enabled: bool | None = None


class ParseJobRequest(BaseModel):
    job_description: str = Field(..., min_length=1, max_length=settings.max_job_description_chars)
