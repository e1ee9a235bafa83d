"""Job keyword sets and the keyword match/gap analysis."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from models.schemas.common import round_half_up

MAX_SUGGESTED_KEYWORDS = 10


def _unique_lower(values: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Lowercase and dedupe, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        cleaned = str(value).strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


class KeywordCategory(str, Enum):
    TECHNOLOGIES = "technologies"
    SKILLS = "skills"
    TOOLS = "tools"


class JobKeywordSet(BaseModel):
    """Keywords pulled out of one job description, per category.

    Each category behaves as a set (lowercase, no duplicates) but keeps the
    order of first appearance so flattening is stable.
    """
    model_config = ConfigDict(frozen=True)

    technologies: tuple[str, ...] = ()
    skills: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()

    @field_validator("technologies", "skills", "tools", mode="before")
    @classmethod
    def _normalize(cls, value):
        return _unique_lower(value or ())

    def by_category(self) -> dict[KeywordCategory, tuple[str, ...]]:
        return {category: getattr(self, category.value) for category in KeywordCategory}

    def flatten(self) -> list[str]:
        """All keywords, category by category in fixed order."""
        return [kw for category in KeywordCategory for kw in getattr(self, category.value)]

    @property
    def total(self) -> int:
        return len(self.flatten())

    @property
    def is_empty(self) -> bool:
        return self.total == 0


class KeywordAnalysisResult(BaseModel):
    matching: list[str] = []
    missing: list[str] = []
    suggested: list[str] = []

    @field_validator("matching", "missing", mode="before")
    @classmethod
    def _dedupe(cls, value):
        return list(_unique_lower(value or []))

    @field_validator("suggested", mode="before")
    @classmethod
    def _limit_suggested(cls, value):
        return list(_unique_lower(value or []))[:MAX_SUGGESTED_KEYWORDS]

    @computed_field
    @property
    def density(self) -> float:
        """Percentage of job keywords covered; always derived from the lists."""
        total = len(self.matching) + len(self.missing)
        if total == 0:
            return 0.0
        return round_half_up(len(self.matching) / total * 100, 1)
