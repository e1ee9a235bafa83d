"""Score aggregation: overall score, probabilities, verdict, and recommendations.

The probability formulas are simple monotonic heuristics on the overall
score, not calibrated predictions.
"""

from models.schemas.analysis import RecommendationCategory
from models.schemas.common import round_half_up
from models.schemas.keywords import KeywordAnalysisResult
from models.schemas.sections import Section, SectionScores

# Weights for the overall score
W_RESUME_MATCH = 0.3
W_COVER_LETTER_MATCH = 0.2
W_SECTIONS = 0.5

# Probability heuristics: clamp((overall - offset) * slope, 0, 100)
INTERVIEW_OFFSET, INTERVIEW_SLOPE = 20.0, 1.2
JOB_OFFSET, JOB_SLOPE = 30.0, 1.0

# Recommendation triggers
WEAK_SECTION_THRESHOLD = 50
MISSING_KEYWORD_LIMIT = 5
LOW_MATCH_THRESHOLD = 60
MAX_RECOMMENDATIONS = 5

# Presentation ladders (highest threshold first)
GRADE_LADDER: tuple[tuple[float, str], ...] = (
    (90, "A+"), (85, "A"), (80, "A-"), (75, "B+"), (70, "B"), (65, "B-"),
    (60, "C+"), (55, "C"), (50, "C-"), (45, "D+"), (40, "D"),
)
SCORE_DESCRIPTIONS: dict[RecommendationCategory, str] = {
    RecommendationCategory.EXCELLENT_MATCH: "Excellent match - high chance of success",
    RecommendationCategory.GOOD_MATCH: "Good match - solid application",
    RecommendationCategory.FAIR_MATCH: "Fair match - room for improvement",
    RecommendationCategory.POOR_MATCH: "Poor match - significant improvements needed",
    RecommendationCategory.NOT_RECOMMENDED: "Very poor match - major revisions required",
}


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, value))


def aggregate(
    section_scores: SectionScores,
    resume_match: float,
    cover_letter_match: float,
) -> float:
    """Weighted overall score, rounded to one decimal."""
    overall = (
        resume_match * W_RESUME_MATCH
        + cover_letter_match * W_COVER_LETTER_MATCH
        + section_scores.average() * W_SECTIONS
    )
    return round_half_up(_clamp(overall), 1)


def recommendation(overall_score: float) -> RecommendationCategory:
    """Map an overall score to its verdict; thresholds are inclusive."""
    for category in RecommendationCategory:
        if overall_score >= category.threshold:
            return category
    return RecommendationCategory.NOT_RECOMMENDED


def interview_probability(overall_score: float) -> float:
    return _clamp((overall_score - INTERVIEW_OFFSET) * INTERVIEW_SLOPE)


def job_probability(overall_score: float) -> float:
    return _clamp((overall_score - JOB_OFFSET) * JOB_SLOPE)


def recommendations(
    section_scores: SectionScores,
    keyword_analysis: KeywordAnalysisResult,
    resume_match: float,
    cover_letter_match: float,
) -> list[str]:
    """Actionable recommendations: weak sections first, then keyword gap, then match warnings."""
    recs: list[str] = []

    for section, score in section_scores.items():
        if score < WEAK_SECTION_THRESHOLD:
            recs.append(f"Improve your {section.label} section")

    if len(keyword_analysis.missing) > MISSING_KEYWORD_LIMIT:
        recs.append("Include more relevant keywords from the job description")

    if resume_match < LOW_MATCH_THRESHOLD:
        recs.append("Better align your resume with the job requirements")

    if 0 < cover_letter_match < LOW_MATCH_THRESHOLD:
        recs.append("Customize your cover letter to better match the job")

    return recs[:MAX_RECOMMENDATIONS]


def letter_grade(score: float) -> str:
    for threshold, grade in GRADE_LADDER:
        if score >= threshold:
            return grade
    return "F"


def score_description(score: float) -> str:
    return SCORE_DESCRIPTIONS[recommendation(score)]


def weakest_section(section_scores: SectionScores) -> Section:
    """Lowest-scoring section; ties resolve to the earlier section."""
    return min(section_scores.items(), key=lambda item: item[1])[0]
