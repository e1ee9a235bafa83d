"""Shared dependencies for API routes."""

from collections.abc import Callable

from services.ai_client import AIServiceClient, get_ai_client
from services.job_analyzer import AnalysisOrchestrator, build_orchestrator

OrchestratorFactory = Callable[..., AnalysisOrchestrator]


def get_orchestrator_factory() -> OrchestratorFactory:
    """Builds a fresh orchestrator per request (orchestrators are single-use)."""
    return build_orchestrator


def get_ai_service_client() -> AIServiceClient | None:
    return get_ai_client()
