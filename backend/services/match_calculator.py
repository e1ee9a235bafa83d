"""Keyword match scoring between job keywords and application documents."""

from models.schemas.common import round_half_up
from models.schemas.keywords import MAX_SUGGESTED_KEYWORDS, JobKeywordSet, KeywordAnalysisResult


def match_percentage(keywords: JobKeywordSet, text: str) -> float:
    """Percentage of job keywords that occur (as substrings) in lowercased text.

    Returns 0 for an empty keyword set or empty text.
    """
    flat = keywords.flatten()
    if not flat or not text:
        return 0.0
    matched = sum(1 for kw in flat if kw in text)
    return round_half_up(matched / len(flat) * 100, 1)


def keyword_analysis(
    keywords: JobKeywordSet,
    resume_text: str,
    cover_letter_text: str = "",
) -> KeywordAnalysisResult:
    """Split job keywords into matching (in resume or cover letter) and missing."""
    matching: list[str] = []
    missing: list[str] = []
    for kw in keywords.flatten():
        if kw in resume_text or (cover_letter_text and kw in cover_letter_text):
            matching.append(kw)
        else:
            missing.append(kw)

    return KeywordAnalysisResult(
        matching=matching,
        missing=missing,
        suggested=missing[:MAX_SUGGESTED_KEYWORDS],
    )
