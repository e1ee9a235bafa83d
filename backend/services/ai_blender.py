"""Merges the basic engine's result with the AI service's result.

blend() runs only when the AI call succeeded. When it did not, the
orchestrator uses enhance_basic() instead, which fills the AI-only fields
from the aggregator heuristics.
"""

from config import settings
from models.schemas.analysis import (
    AIAnalysisResult,
    AnalysisType,
    BasicAnalysisResult,
    CombinedAnalysisResult,
    Recommendation,
)
from models.schemas.common import round_half_up
from models.schemas.keywords import MAX_SUGGESTED_KEYWORDS, KeywordAnalysisResult
from models.schemas.sections import Section, SectionScores
from services import score_aggregator

MAX_BASIC_RECOMMENDATIONS_IN_BLEND = 3


def _weighted(basic: float, ai: float | None, basic_weight: float, ai_weight: float) -> float:
    if ai is None:
        ai = basic
    return basic * basic_weight + ai * ai_weight


def _merge_unique(*lists: list[str]) -> list[str]:
    merged: dict[str, None] = {}
    for values in lists:
        for value in values:
            merged.setdefault(value.lower(), None)
    return list(merged)


def merge_keywords(basic: KeywordAnalysisResult, ai: AIAnalysisResult) -> KeywordAnalysisResult:
    """Union of both keyword sets; anything either side matched is not missing."""
    matching = _merge_unique(basic.matching, ai.keyword_analysis.matching)
    matched = set(matching)
    missing = [kw for kw in _merge_unique(basic.missing, ai.keyword_analysis.missing) if kw not in matched]

    suggested = ai.keyword_analysis.suggested
    if suggested is None:
        suggested = missing[:MAX_SUGGESTED_KEYWORDS]

    return KeywordAnalysisResult(matching=matching, missing=missing, suggested=suggested)


def blend(
    basic: BasicAnalysisResult,
    ai: AIAnalysisResult,
    basic_weight: float | None = None,
    ai_weight: float | None = None,
    default_confidence: float | None = None,
) -> CombinedAnalysisResult:
    basic_weight = settings.basic_weight if basic_weight is None else basic_weight
    ai_weight = settings.ai_weight if ai_weight is None else ai_weight
    if default_confidence is None:
        default_confidence = settings.ai_default_confidence_level

    def mix(basic_value: float, ai_value: float | None) -> float:
        return round_half_up(_weighted(basic_value, ai_value, basic_weight, ai_weight))

    section_scores = SectionScores.from_mapping({
        section: round_half_up(
            _weighted(basic.section_scores.get(section), ai.section_scores.get(section), basic_weight, ai_weight),
            1,
        )
        for section in Section
    })

    recommendations = list(ai.recommendations) + [
        Recommendation(type="general", text=text)
        for text in basic.recommendations[:MAX_BASIC_RECOMMENDATIONS_IN_BLEND]
    ]

    overall = basic.overall_score
    return CombinedAnalysisResult(
        overall_score=mix(basic.overall_score, ai.overall_score),
        ats_score=ai.ats_score if ai.ats_score is not None else basic.ats_score,
        resume_match_score=mix(basic.resume_match_score, ai.resume_match_score),
        cover_letter_match_score=mix(basic.cover_letter_match_score, ai.cover_letter_match_score),
        interview_probability=(
            ai.interview_probability
            if ai.interview_probability is not None
            else score_aggregator.interview_probability(overall)
        ),
        job_securing_probability=(
            ai.job_securing_probability
            if ai.job_securing_probability is not None
            else score_aggregator.job_probability(overall)
        ),
        goodness_of_fit_score=(
            ai.goodness_of_fit_score if ai.goodness_of_fit_score is not None else overall
        ),
        ai_recommendation=ai.ai_recommendation or score_aggregator.recommendation(overall),
        ai_confidence_level=(
            ai.ai_confidence_level if ai.ai_confidence_level is not None else default_confidence
        ),
        section_scores=section_scores,
        keyword_analysis=merge_keywords(basic.keyword_analysis, ai),
        skill_match_analysis=ai.skill_match_analysis,
        experience_gap_analysis=ai.experience_gap_analysis,
        education_match_analysis=ai.education_match_analysis,
        recommendations=recommendations,
        analysis_type=AnalysisType.COMBINED,
    )


def enhance_basic(basic: BasicAnalysisResult, confidence: float | None = None) -> CombinedAnalysisResult:
    """Basic scores plus heuristic probabilities, used whenever AI did not contribute."""
    if confidence is None:
        confidence = settings.basic_confidence_level
    overall = basic.overall_score
    return CombinedAnalysisResult(
        overall_score=overall,
        ats_score=basic.ats_score,
        resume_match_score=basic.resume_match_score,
        cover_letter_match_score=basic.cover_letter_match_score,
        interview_probability=score_aggregator.interview_probability(overall),
        job_securing_probability=score_aggregator.job_probability(overall),
        goodness_of_fit_score=overall,
        ai_recommendation=score_aggregator.recommendation(overall),
        ai_confidence_level=confidence,
        section_scores=basic.section_scores,
        keyword_analysis=basic.keyword_analysis,
        recommendations=[Recommendation(type="general", text=text) for text in basic.recommendations],
        analysis_type=AnalysisType.BASIC_ENHANCED,
    )
