"""Structured fields parsed out of a free-text job description."""

from pydantic import BaseModel


class ParsedJobDescription(BaseModel):
    location: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    experience_required: str | None = None  # e.g. "3+ years"
    education_required: str | None = None
    industry: str | None = None
    hard_skills: list[str] = []
    soft_skills: list[str] = []
    languages_required: list[str] = []
    certifications_required: list[str] = []
