"""Analysis result contracts: basic engine output, AI service output, and the merged result."""

from enum import Enum
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from models.schemas.common import Score
from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.sections import Section, SectionScores

RecommendationType = Literal["resume", "cover_letter", "general"]

MAX_BASIC_RECOMMENDATIONS = 5


class AnalysisType(str, Enum):
    BASIC = "basic"
    BASIC_ENHANCED = "basic_enhanced"  # basic scores + derived probabilities, no AI
    COMBINED = "combined"  # basic blended with the AI service


class RecommendationCategory(str, Enum):
    """Overall verdict, listed from best to worst."""
    EXCELLENT_MATCH = "excellent_match"
    GOOD_MATCH = "good_match"
    FAIR_MATCH = "fair_match"
    POOR_MATCH = "poor_match"
    NOT_RECOMMENDED = "not_recommended"

    @property
    def threshold(self) -> float:
        return _CATEGORY_THRESHOLDS[self]


_CATEGORY_THRESHOLDS: dict[RecommendationCategory, float] = {
    RecommendationCategory.EXCELLENT_MATCH: 85.0,
    RecommendationCategory.GOOD_MATCH: 70.0,
    RecommendationCategory.FAIR_MATCH: 55.0,
    RecommendationCategory.POOR_MATCH: 40.0,
    RecommendationCategory.NOT_RECOMMENDED: 0.0,
}


class Recommendation(BaseModel):
    type: RecommendationType = "general"
    text: str


_RECOMMENDATION_TYPES = ("resume", "cover_letter", "general")


def _coerce_recommendations(value: Any) -> list[Any]:
    """Accept bare strings alongside {type, text} objects.

    A mapping of type to texts ({"resume": [...], "general": [...]}) is
    flattened into typed recommendations. Any other shape is rejected.
    """
    if not value:
        return []
    if isinstance(value, dict):
        grouped = []
        for rec_type, texts in value.items():
            if isinstance(texts, str):
                texts = [texts]
            if not isinstance(texts, list):
                raise ValueError(f"recommendations for {rec_type!r} must be a list of strings")
            if rec_type not in _RECOMMENDATION_TYPES:
                rec_type = "general"
            grouped.extend({"type": rec_type, "text": text} for text in texts)
        return grouped
    if not isinstance(value, list | tuple):
        raise ValueError("recommendations must be a list or a mapping of type to texts")

    coerced = []
    for item in value:
        if isinstance(item, str):
            coerced.append({"type": "general", "text": item})
        elif isinstance(item, dict) and item.get("type") not in _RECOMMENDATION_TYPES:
            coerced.append({**item, "type": "general"})
        else:
            coerced.append(item)
    return coerced


class BasicAnalysisResult(BaseModel):
    """Output of the local heuristic engine."""
    overall_score: Score = 0.0
    ats_score: Score = 0.0
    resume_match_score: Score = 0.0
    cover_letter_match_score: Score = 0.0
    section_scores: SectionScores = SectionScores()
    keyword_analysis: KeywordAnalysisResult = KeywordAnalysisResult()
    recommendations: list[str] = Field(default_factory=list, max_length=MAX_BASIC_RECOMMENDATIONS)
    analysis_type: AnalysisType = AnalysisType.BASIC


class AIKeywordAnalysis(BaseModel):
    """Keyword lists as reported by the AI service (any of them may be absent)."""
    matching: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("matching", "matching_keywords"),
    )
    missing: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("missing", "missing_keywords"),
    )
    suggested: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("suggested", "suggested_keywords"),
    )


class AIAnalysisResult(BaseModel):
    """Score set returned by the external AI analysis service.

    Every field is optional; the blender falls back to the basic engine for
    whatever is missing. Unknown section names and unknown recommendation
    categories are dropped rather than rejected.
    """
    overall_score: Score | None = None
    ats_score: Score | None = None
    resume_match_score: Score | None = None
    cover_letter_match_score: Score | None = None
    interview_probability: Score | None = None
    job_securing_probability: Score | None = None
    goodness_of_fit_score: Score | None = None
    ai_recommendation: RecommendationCategory | None = None
    ai_confidence_level: Score | None = None
    section_scores: dict[Section, Score] = {}
    keyword_analysis: AIKeywordAnalysis = AIKeywordAnalysis()
    skill_match_analysis: dict[str, Any] = {}
    experience_gap_analysis: dict[str, Any] = {}
    education_match_analysis: dict[str, Any] = {}
    recommendations: list[Recommendation] = []

    @field_validator("section_scores", mode="before")
    @classmethod
    def _known_sections(cls, value):
        if not isinstance(value, dict):
            return {}
        known = {s.value for s in Section}
        return {k: v for k, v in value.items() if str(getattr(k, "value", k)) in known and v is not None}

    @field_validator("ai_recommendation", mode="before")
    @classmethod
    def _known_category(cls, value):
        if isinstance(value, str) and value in {c.value for c in RecommendationCategory}:
            return value
        return None

    @field_validator("keyword_analysis", mode="before")
    @classmethod
    def _keyword_analysis_or_empty(cls, value):
        return value if isinstance(value, dict | AIKeywordAnalysis) else {}

    @field_validator(
        "skill_match_analysis", "experience_gap_analysis", "education_match_analysis",
        mode="before",
    )
    @classmethod
    def _dict_or_empty(cls, value):
        return value if isinstance(value, dict) else {}

    @field_validator("recommendations", mode="before")
    @classmethod
    def _recommendations(cls, value):
        return _coerce_recommendations(value)


class CombinedAnalysisResult(BaseModel):
    """Final analysis handed to the caller.

    analysis_type tells whether the AI service actually contributed
    ("combined") or the result is basic scoring plus derived fields
    ("basic_enhanced").
    """
    overall_score: Score = 0.0
    ats_score: Score = 0.0
    resume_match_score: Score = 0.0
    cover_letter_match_score: Score = 0.0
    interview_probability: Score = 0.0
    job_securing_probability: Score = 0.0
    goodness_of_fit_score: Score = 0.0
    ai_recommendation: RecommendationCategory = RecommendationCategory.FAIR_MATCH
    ai_confidence_level: Score = 60.0
    section_scores: SectionScores = SectionScores()
    keyword_analysis: KeywordAnalysisResult = KeywordAnalysisResult()
    skill_match_analysis: dict[str, Any] = {}
    experience_gap_analysis: dict[str, Any] = {}
    education_match_analysis: dict[str, Any] = {}
    recommendations: list[Recommendation] = []
    analysis_type: AnalysisType = AnalysisType.BASIC_ENHANCED

    @property
    def ai_applied(self) -> bool:
        return self.analysis_type == AnalysisType.COMBINED

    def recommendations_by_type(self, rec_type: RecommendationType) -> list[str]:
        """Up to five recommendation texts of one type, in order."""
        return [r.text for r in self.recommendations if r.type == rec_type][:5]


class ApplicationInput(BaseModel):
    """One job application as plain text, the unit of batch analysis."""
    job_description: str
    resume_text: str = ""
    cover_letter_text: str = ""
    label: str | None = None


class BatchItemResult(BaseModel):
    index: int
    label: str | None = None
    success: bool
    result: CombinedAnalysisResult | None = None
    error: str | None = None


class BatchSummary(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0


class BatchAnalysisResult(BaseModel):
    results: list[BatchItemResult] = []
    summary: BatchSummary = BatchSummary()
