"""Pydantic contracts shared by the scoring engine and its callers."""

from models.schemas.analysis import (
    AIAnalysisResult,
    AnalysisType,
    ApplicationInput,
    BasicAnalysisResult,
    BatchAnalysisResult,
    BatchItemResult,
    BatchSummary,
    CombinedAnalysisResult,
    Recommendation,
    RecommendationCategory,
)
from models.schemas.analysis_log import AnalysisLogEntry
from models.schemas.extraction import ExtractionReport
from models.schemas.job_posting import ParsedJobDescription
from models.schemas.keywords import JobKeywordSet, KeywordAnalysisResult, KeywordCategory
from models.schemas.sections import Section, SectionScores

__all__ = [
    "AIAnalysisResult",
    "AnalysisLogEntry",
    "AnalysisType",
    "ApplicationInput",
    "BasicAnalysisResult",
    "BatchAnalysisResult",
    "BatchItemResult",
    "BatchSummary",
    "CombinedAnalysisResult",
    "ExtractionReport",
    "JobKeywordSet",
    "KeywordAnalysisResult",
    "KeywordCategory",
    "ParsedJobDescription",
    "Recommendation",
    "RecommendationCategory",
    "Section",
    "SectionScores",
]
