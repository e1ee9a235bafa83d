"""ATS compatibility scoring.

Models how likely an applicant tracking system is to parse the resume
cleanly. Independent of the job description and of section quality.
"""

import re

# U+FFFD, and the same character after a UTF-8 -> Latin-1 round trip
ENCODING_ARTIFACTS: tuple[str, ...] = ("�", "ï¿½")
REQUIRED_SECTIONS: tuple[str, ...] = ("experience", "education", "skills")

ENCODING_PENALTY = 20
MISSING_SECTION_PENALTY = 15
TOO_SHORT_PENALTY = 25
TOO_LONG_PENALTY = 10
MIN_WORDS = 200
MAX_WORDS = 1000

_WORD_RE = re.compile(r"[a-zA-Z][a-zA-Z'-]*")


def word_count(text: str) -> int:
    """Count alphabetic words (letters, apostrophes, hyphens)."""
    return len(_WORD_RE.findall(text))


def ats_score(resume_text: str) -> float:
    """Score 0-100 for a lowercased resume text, starting at 100 and deducting."""
    score = 100

    if any(artifact in resume_text for artifact in ENCODING_ARTIFACTS):
        score -= ENCODING_PENALTY

    for section in REQUIRED_SECTIONS:
        if section not in resume_text:
            score -= MISSING_SECTION_PENALTY

    words = word_count(resume_text)
    if words < MIN_WORDS:
        score -= TOO_SHORT_PENALTY
    elif words > MAX_WORDS:
        score -= TOO_LONG_PENALTY

    return float(max(0, score))
