"""Structured field extraction from free-text job descriptions.

Regex-only and pure: the same text always parses to the same fields, and
fields that cannot be found are left as None or empty lists.
"""

import re

from models.schemas.job_posting import ParsedJobDescription

# Terms may end in "+" or "#" (c++, c#), so plain \b boundaries do not work
_TERM = r"(?<![\w+#])({})(?![\w+#])"


def _term_pattern(terms: tuple[str, ...]) -> re.Pattern:
    return re.compile(_TERM.format("|".join(terms)), re.IGNORECASE)


CITIES: tuple[str, ...] = (
    "karachi", "lahore", "islamabad", "rawalpindi", "faisalabad", "multan",
    "peshawar", "quetta", "hyderabad", "gujranwala",
)
INDUSTRIES: tuple[str, ...] = (
    "technology", "healthcare", "finance", "education", "retail", "manufacturing",
    "consulting", "marketing", "sales", "construction", "automotive", "aerospace",
    "telecommunications", "media", "entertainment", "hospitality", "real estate",
)
HARD_SKILL_GROUPS: dict[str, tuple[str, ...]] = {
    "programming": (
        "php", "python", "java", "javascript", r"c\+\+", "c#", "ruby", "go",
        "swift", "kotlin", "scala",
    ),
    "frameworks": ("react", "angular", "vue", "laravel", "django", "spring", "express", "flask"),
    "databases": ("mysql", "postgresql", "mongodb", "redis", "sqlite", "oracle", "sql server"),
    "tools": ("git", "docker", "kubernetes", "jenkins", "aws", "azure", "gcp", "linux", "windows"),
    "design": ("photoshop", "illustrator", "figma", "sketch", "adobe creative", "autocad"),
}
SOFT_SKILLS: tuple[str, ...] = (
    "leadership", "communication", "teamwork", r"problem.solving", "analytical",
    "creative", "strategic", "planning", "organization", r"time.management",
    "adaptability", r"critical.thinking",
)
LANGUAGES: tuple[str, ...] = (
    "english", "urdu", "arabic", "french", "german", "spanish", "chinese",
    "japanese", "hindi", "punjabi",
)

_LOCATION_PATTERNS = (
    re.compile(r"\b(?:location|based in|located in)\s*:?\s*([A-Za-z][A-Za-z ,]*)", re.IGNORECASE),
    re.compile(r"\b({})\b".format("|".join(CITIES)), re.IGNORECASE),
    re.compile(r"\b(remote|work from home|wfh)\b", re.IGNORECASE),
)

_AMOUNT = r"(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s*(k)?"
_SALARY_PATTERNS = (
    re.compile(
        r"(?:salary|pay|compensation)[^\d$]{0,20}\$?" + _AMOUNT
        + r"(?:\s*(?:to|-)\s*\$?" + _AMOUNT + ")?",
        re.IGNORECASE,
    ),
    re.compile(r"\$" + _AMOUNT + r"\s*(?:to|-)\s*\$?" + _AMOUNT, re.IGNORECASE),
    re.compile(r"\b(\d{1,3})(k)\s*(?:to|-)\s*(\d{1,3})(k)\b", re.IGNORECASE),
)

_EXPERIENCE_PATTERNS = (
    re.compile(r"(\d+)\+?\s*years?\s*(?:of\s*)?experience", re.IGNORECASE),
    re.compile(r"experience\s*:?\s*(\d+)\+?\s*years?", re.IGNORECASE),
    re.compile(r"minimum\s*(?:of\s*)?(\d+)\s*years?", re.IGNORECASE),
    re.compile(r"(\d+)\+\s*years?", re.IGNORECASE),
)

_EDUCATION_PATTERNS = (
    re.compile(
        r"\b(bachelor|master|phd|doctorate|diploma)(?:'?s)?\s*(?:degree)?\s*(?:in\s+)?((?:[A-Za-z]+ ?){0,4})",
        re.IGNORECASE,
    ),
    re.compile(r"\b(BS|MS|BSc|MSc|MBA|BA|MA)\b\s*(?:in\s+)?((?:[A-Za-z]+ ?){0,4})"),
)

_CERTIFICATION_PATTERNS = (
    re.compile(r"(?<![\w+])(pmp|cissp|cisa|cism|ccna|ccnp|comptia(?:\s+[a-z]+\+?)?)(?![\w+])", re.IGNORECASE),
    re.compile(r"\b((?:aws|microsoft|google|oracle|cisco)\s+certified(?:\s+[A-Za-z]+){1,3})", re.IGNORECASE),
    re.compile(r"\b([A-Z][A-Za-z]*(?:\s+[A-Z][A-Za-z]*){0,3}\s+[Cc]ertification)\b"),
)

_HARD_SKILL_PATTERNS = {group: _term_pattern(terms) for group, terms in HARD_SKILL_GROUPS.items()}
_SOFT_SKILL_PATTERN = _term_pattern(SOFT_SKILLS)
_LANGUAGE_PATTERN = _term_pattern(LANGUAGES)
_INDUSTRY_PATTERNS = tuple((industry, re.compile(rf"\b{industry}\b", re.IGNORECASE)) for industry in INDUSTRIES)


def _unique(values) -> list[str]:
    return list(dict.fromkeys(values))


def _number(raw: str | None, suffix: str | None) -> float | None:
    if raw is None:
        return None
    value = float(raw.replace(",", ""))
    return value * 1000 if suffix else value


def extract_location(text: str) -> str | None:
    for pattern in _LOCATION_PATTERNS:
        match = pattern.search(text)
        if match:
            location = match.group(1).strip(" ,")
            if location:
                return location
    return None


def extract_salary(text: str) -> tuple[float, float | None] | None:
    """(min, max) salary; a `k` suffix multiplies by 1000."""
    for pattern in _SALARY_PATTERNS:
        match = pattern.search(text)
        if match:
            low_raw, low_k, high_raw, high_k = match.groups()
            return _number(low_raw, low_k), _number(high_raw, high_k)
    return None


def extract_experience(text: str) -> str | None:
    for pattern in _EXPERIENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            return f"{match.group(1)}+ years"
    return None


def extract_education(text: str) -> str | None:
    for pattern in _EDUCATION_PATTERNS:
        match = pattern.search(text)
        if match:
            return f"{match.group(1)} {match.group(2)}".strip()
    return None


def extract_industry(text: str) -> str | None:
    for industry, pattern in _INDUSTRY_PATTERNS:
        if pattern.search(text):
            return industry.capitalize()
    return None


def extract_hard_skills(text: str) -> list[str]:
    skills = []
    for pattern in _HARD_SKILL_PATTERNS.values():
        skills.extend(m.lower() for m in pattern.findall(text))
    return _unique(skills)


def extract_soft_skills(text: str) -> list[str]:
    return _unique(m.lower() for m in _SOFT_SKILL_PATTERN.findall(text))


def extract_languages(text: str) -> list[str]:
    return _unique(m.lower() for m in _LANGUAGE_PATTERN.findall(text))


def extract_certifications(text: str) -> list[str]:
    certifications = []
    for pattern in _CERTIFICATION_PATTERNS:
        certifications.extend(m.strip() for m in pattern.findall(text))
    return _unique(certifications)


def parse_job_description(text: str) -> ParsedJobDescription:
    salary_min = salary_max = None
    salary = extract_salary(text)
    if salary:
        salary_min, salary_max = salary

    return ParsedJobDescription(
        location=extract_location(text),
        salary_min=salary_min,
        salary_max=salary_max,
        experience_required=extract_experience(text),
        education_required=extract_education(text),
        industry=extract_industry(text),
        hard_skills=extract_hard_skills(text),
        soft_skills=extract_soft_skills(text),
        languages_required=extract_languages(text),
        certifications_required=extract_certifications(text),
    )
