"""Keyword extraction from job descriptions.

Scans the job description with one case-insensitive regex per category
(technologies, soft skills, tools) built from a curated vocabulary. Matches
are lowercased and deduplicated within their category, keeping the order in
which they first appear so the flattened keyword list is stable.
"""

import logging
import re

from models.schemas.keywords import JobKeywordSet, KeywordCategory

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Curated vocabularies. Entries are regex fragments, matched on word boundaries.
# ---------------------------------------------------------------------------
TECHNOLOGY_TERMS: tuple[str, ...] = (
    # Languages
    "php", "python", "java", "javascript",
    # Frameworks / runtimes
    "react", "angular", "vue", "node",
    # Databases
    "mysql", "postgresql", "mongodb",
    # Platforms & infrastructure
    "aws", "azure", "docker", "kubernetes", "git", "linux", "windows", "macos",
)

SKILL_TERMS: tuple[str, ...] = (
    "leadership", "management", "communication", "teamwork",
    r"problem.solving",  # "problem solving", "problem-solving"
    "analytical", "creative", "strategic", "planning", "organization",
)

TOOL_TERMS: tuple[str, ...] = (
    "photoshop", "illustrator", "figma", "sketch", "tableau", "powerbi",
    "excel", "word", "powerpoint", "jira", "confluence", "slack", "teams",
)

VOCABULARIES: dict[KeywordCategory, tuple[str, ...]] = {
    KeywordCategory.TECHNOLOGIES: TECHNOLOGY_TERMS,
    KeywordCategory.SKILLS: SKILL_TERMS,
    KeywordCategory.TOOLS: TOOL_TERMS,
}

_COMPILED: dict[KeywordCategory, re.Pattern] = {
    category: re.compile(rf"\b(?:{'|'.join(terms)})\b", re.IGNORECASE)
    for category, terms in VOCABULARIES.items()
}


def _extract_category(category: KeywordCategory, text: str) -> list[str]:
    return [m.group(0).lower() for m in _COMPILED[category].finditer(text)]


def extract(job_description: str) -> JobKeywordSet:
    """Extract categorized keywords from a job description.

    Pure function: an empty description yields empty categories.
    """
    if not job_description:
        return JobKeywordSet()

    keywords = JobKeywordSet(**{
        category.value: _extract_category(category, job_description)
        for category in KeywordCategory
    })
    logger.debug(
        "Extracted %d job keywords (%s)",
        keywords.total,
        ", ".join(f"{c.value}={len(v)}" for c, v in keywords.by_category().items()),
    )
    return keywords


def flatten_keywords(keywords: JobKeywordSet) -> list[str]:
    """Flattened keyword list: technologies, then skills, then tools."""
    return keywords.flatten()
