"""Resume section identifiers and the per-section score set."""

from enum import Enum

from pydantic import BaseModel

from models.schemas.common import Score


class Section(str, Enum):
    """The six scored resume sections, in their fixed reporting order."""
    CONTACT_INFO = "contact_info"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    ACHIEVEMENTS = "achievements"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class SectionScores(BaseModel):
    """Heuristic 0-100 score for each resume section.

    Field names mirror the Section values, so all six keys are always present.
    """
    contact_info: Score = 0.0
    summary: Score = 0.0
    experience: Score = 0.0
    education: Score = 0.0
    skills: Score = 0.0
    achievements: Score = 0.0

    @classmethod
    def from_mapping(cls, scores: dict[Section, float]) -> "SectionScores":
        return cls(**{section.value: value for section, value in scores.items()})

    def get(self, section: Section) -> float:
        return getattr(self, section.value)

    def items(self) -> list[tuple[Section, float]]:
        return [(section, self.get(section)) for section in Section]

    def average(self) -> float:
        return sum(score for _, score in self.items()) / len(Section)

    def as_dict(self) -> dict[str, float]:
        return {section.value: score for section, score in self.items()}
