"""Heuristic resume section scoring.

Each of the six sections is scored independently from the presence or
frequency of section-specific markers in the lowercased resume text. Scores
are capped at 100 and are all 0 for empty input.
"""

import re

from models.schemas.sections import Section, SectionScores

# Contact info patterns
EMAIL_RE = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.IGNORECASE)
# At least 7 digits in total, optionally grouped with spaces, dots, dashes, parens
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{1,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,9}\b")
LOCATION_RE = re.compile(
    r"\b(?:street|road|avenue|city|state|country|karachi|lahore|islamabad)\b"
)

SUMMARY_HEADINGS: tuple[str, ...] = ("summary", "profile", "objective", "overview", "about")

EXPERIENCE_HEADINGS: tuple[str, ...] = ("experience", "employment", "work", "career", "position")
JOB_TITLES: tuple[str, ...] = (
    "manager", "director", "analyst", "developer", "engineer", "consultant", "specialist",
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
DIGIT_GROUP_RE = re.compile(r"\d+")

EDUCATION_TERMS: tuple[str, ...] = (
    "education", "degree", "university", "college", "school",
    "bachelor", "master", "phd", "diploma",
)

SKILLS_HEADINGS: tuple[str, ...] = (
    "skills", "competencies", "expertise", "proficient", "technologies", "tools",
)

ACHIEVEMENT_TERMS: tuple[str, ...] = (
    "achievement", "award", "recognition", "accomplished",
    "improved", "increased", "reduced", "led", "managed",
)
# Percentages, "N+", comma-grouped large numbers, currency amounts
QUANTIFIED_RE = re.compile(
    r"\b\d+(?:\.\d+)?%|\b\d+\+|\b\d{1,3}(?:,\d{3})+\b|[$£€]\s?\d[\d,]*(?:\.\d+)?"
)

# Points per marker and caps
CONTACT_EMAIL_POINTS = 40
CONTACT_PHONE_POINTS = 30
CONTACT_LOCATION_POINTS = 30
SUMMARY_PRESENT_SCORE = 85
EXPERIENCE_HEADING_POINTS = 20
EXPERIENCE_TITLE_POINTS, EXPERIENCE_TITLE_CAP = 10, 40
EXPERIENCE_YEAR_POINTS, EXPERIENCE_YEAR_CAP = 5, 40
EDUCATION_TERM_POINTS = 15
SKILLS_HEADING_POINTS = 20
ACHIEVEMENT_TERM_POINTS = 10
QUANTIFIED_POINTS = 15
MAX_SCORE = 100


def _cap(score: float) -> float:
    return float(min(MAX_SCORE, score))


def _has_phone(text: str) -> bool:
    # A run of bare years ("2016 2019 2021") is a timeline, not a number to call
    for match in PHONE_RE.finditer(text):
        groups = DIGIT_GROUP_RE.findall(match.group())
        if not all(YEAR_RE.fullmatch(group) for group in groups):
            return True
    return False


def score_contact_info(text: str) -> float:
    score = 0
    if EMAIL_RE.search(text):
        score += CONTACT_EMAIL_POINTS
    if _has_phone(text):
        score += CONTACT_PHONE_POINTS
    if LOCATION_RE.search(text):
        score += CONTACT_LOCATION_POINTS
    return _cap(score)


def score_summary(text: str) -> float:
    if any(heading in text for heading in SUMMARY_HEADINGS):
        return float(SUMMARY_PRESENT_SCORE)
    return 0.0


def score_experience(text: str) -> float:
    score = 0
    if any(heading in text for heading in EXPERIENCE_HEADINGS):
        score += EXPERIENCE_HEADING_POINTS

    title_count = sum(text.count(title) for title in JOB_TITLES)
    score += min(EXPERIENCE_TITLE_CAP, title_count * EXPERIENCE_TITLE_POINTS)

    year_count = len(YEAR_RE.findall(text))
    score += min(EXPERIENCE_YEAR_CAP, year_count * EXPERIENCE_YEAR_POINTS)
    return _cap(score)


def score_education(text: str) -> float:
    present = sum(1 for term in EDUCATION_TERMS if term in text)
    return _cap(present * EDUCATION_TERM_POINTS)


def score_skills(text: str) -> float:
    present = sum(1 for heading in SKILLS_HEADINGS if heading in text)
    return _cap(present * SKILLS_HEADING_POINTS)


def score_achievements(text: str) -> float:
    # Occurrences are counted, not just presence
    term_hits = sum(text.count(term) for term in ACHIEVEMENT_TERMS)
    quantified = len(QUANTIFIED_RE.findall(text))
    return _cap(term_hits * ACHIEVEMENT_TERM_POINTS + quantified * QUANTIFIED_POINTS)


_SCORERS = {
    Section.CONTACT_INFO: score_contact_info,
    Section.SUMMARY: score_summary,
    Section.EXPERIENCE: score_experience,
    Section.EDUCATION: score_education,
    Section.SKILLS: score_skills,
    Section.ACHIEVEMENTS: score_achievements,
}


def score_sections(resume_text: str) -> SectionScores:
    """Score all six sections of an already-lowercased resume text."""
    if not resume_text or not resume_text.strip():
        return SectionScores()
    return SectionScores.from_mapping(
        {section: scorer(resume_text) for section, scorer in _SCORERS.items()}
    )
