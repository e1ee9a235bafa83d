from pydantic import BaseModel

from models.schemas.analysis import CombinedAnalysisResult
from models.schemas.analysis_log import AnalysisLogEntry
from models.schemas.extraction import ExtractionReport
from models.schemas.sections import Section


class AnalysisResponse(BaseModel):
    analysis: CombinedAnalysisResult
    grade: str  # letter grade of the overall score, A+ .. F
    description: str
    weakest_section: Section
    extraction: dict[str, ExtractionReport] = {}  # keyed by document, uploads only
    logs: list[AnalysisLogEntry] = []


class HealthResponse(BaseModel):
    status: str = "ok"
    ai_enabled: bool = False
    ai_provider: str = "http"
    ai_configured: bool = False


class AIHealthResponse(BaseModel):
    status: str
    message: str
