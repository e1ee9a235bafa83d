"""Shared test configuration, sample documents and fake AI clients."""

import asyncio

import pytest

from models.schemas.analysis import AIAnalysisResult
from services.ai_client import AIServiceClient

SAMPLE_JD = """
Senior PHP Developer

Location: Lahore, Pakistan
Salary: 150k - 250k

Requirements:
- 5+ years of experience with PHP and MySQL
- Experience with Docker, Git and Linux
- Strong communication and leadership skills
- Familiarity with Jira and Confluence

Education:
- Bachelor's degree in Computer Science or related field
"""

SAMPLE_RESUME = """
Ayesha Khan
ayesha.khan@example.com | +92 300 1234567 | Lahore, Pakistan

Professional Summary
Backend developer with a track record of shipping reliable PHP services.

Experience
Senior Software Engineer, Acme Corp (2019 - 2024)
- Led a team of 4 developers building MySQL-backed APIs
- Reduced page load time by 40% and increased conversions by 15%
- Managed deployments with Docker and Git on Linux servers

Software Developer, Beta Labs (2016 - 2019)
- Improved test coverage to 85% across 12 services

Education
Bachelor of Science in Computer Science, University of the Punjab, 2016

Skills
PHP, MySQL, Docker, Git, Linux, Jira, communication, teamwork
Achievements
Employee of the year award, 2022
"""

SAMPLE_COVER_LETTER = """
Dear Hiring Manager,
I am excited to apply for the Senior PHP Developer role. I have spent five
years building PHP and MySQL systems and I enjoy clear communication with
product teams.
"""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end scoring scenarios on fixed inputs"
    )


class FakeAIClient(AIServiceClient):
    """In-memory AI client: returns `result`, raises `error`, or sleeps `delay` first."""

    name = "fake"

    def __init__(
        self,
        result: AIAnalysisResult | None = None,
        error: BaseException | None = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result or AIAnalysisResult()
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, str, str]] = []

    async def analyze(self, job_description, resume_text, cover_letter_text, analysis_options=None):
        self.calls.append((job_description, resume_text, cover_letter_text))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result

    async def health(self):
        return {"status": "running", "message": "fake AI service"}


@pytest.fixture
def ai_result() -> AIAnalysisResult:
    return AIAnalysisResult.model_validate({
        "overall_score": 90,
        "ats_score": 88,
        "resume_match_score": 85,
        "cover_letter_match_score": 70,
        "interview_probability": 80,
        "job_securing_probability": 65,
        "goodness_of_fit_score": 87,
        "ai_recommendation": "excellent_match",
        "ai_confidence_level": 92,
        "section_scores": {"experience": 95, "skills": 90},
        "keyword_analysis": {
            "matching_keywords": ["php", "rest apis"],
            "missing_keywords": ["kubernetes"],
            "suggested_keywords": ["kubernetes", "redis"],
        },
        "recommendations": [
            {"type": "resume", "text": "Quantify the impact of your API work"},
            {"type": "cover_letter", "text": "Mention the company by name"},
        ],
    })


@pytest.fixture
def fake_ai_client(ai_result) -> FakeAIClient:
    return FakeAIClient(result=ai_result)
