"""External AI analysis service clients.

The AI service receives the same inputs as the basic engine and returns an
alternative score set. Any transport problem, timeout, non-success response
or malformed payload surfaces as AIServiceFailure; request_analysis() turns
that into an explicit AIFailure value so the caller branches on the outcome
type instead of checking for None.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from config import settings
from models.schemas.analysis import AIAnalysisResult
from services.errors import AIServiceFailure

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_OPTIONS: dict[str, bool] = {
    "include_probabilities": True,
    "include_section_scores": True,
    "include_gap_analysis": True,
    "include_recommendations": True,
}


class AIServiceClient(ABC):
    """Contract every AI analysis backend implements."""

    name: str = ""

    @abstractmethod
    async def analyze(
        self,
        job_description: str,
        resume_text: str,
        cover_letter_text: str,
        analysis_options: dict[str, Any] | None = None,
    ) -> AIAnalysisResult:
        """Return the AI score set. Raises AIServiceFailure on any failure."""

    @abstractmethod
    async def health(self) -> dict[str, str]:
        """Liveness check. Never raises."""


@dataclass(frozen=True)
class AISuccess:
    result: AIAnalysisResult


@dataclass(frozen=True)
class AIFailure:
    reason: str
    cause: BaseException | None = None


AIOutcome = AISuccess | AIFailure


def parse_analysis_payload(body: Any) -> AIAnalysisResult:
    """Validate a `{success, analysis}` response body into an AIAnalysisResult."""
    if not isinstance(body, dict):
        raise AIServiceFailure("AI service returned a non-object response")
    if body.get("success") is not True:
        detail = body.get("error") or body.get("message") or "success flag not set"
        raise AIServiceFailure(f"AI service reported failure: {detail}")

    analysis = body.get("analysis")
    if not isinstance(analysis, dict):
        raise AIServiceFailure("AI service response has no analysis object")

    try:
        return AIAnalysisResult.model_validate(analysis)
    except ValidationError as e:
        raise AIServiceFailure("AI service analysis failed validation", cause=e) from e


class HttpAIServiceClient(AIServiceClient):
    """Client for the AI analysis microservice (POST /analyze, GET /health)."""

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        connect_timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def analyze(
        self,
        job_description: str,
        resume_text: str,
        cover_letter_text: str,
        analysis_options: dict[str, Any] | None = None,
    ) -> AIAnalysisResult:
        payload = {
            "job_description": job_description,
            "resume_text": resume_text,
            "cover_letter_text": cover_letter_text,
            "analysis_options": analysis_options or DEFAULT_ANALYSIS_OPTIONS,
        }
        try:
            async with self._client() as client:
                response = await client.post("/analyze", json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as e:
            raise AIServiceFailure(f"AI service timed out after {self.timeout:g}s", cause=e) from e
        except httpx.HTTPStatusError as e:
            raise AIServiceFailure(
                f"AI service returned HTTP {e.response.status_code}", cause=e
            ) from e
        except httpx.HTTPError as e:
            raise AIServiceFailure(f"AI service request failed: {e}", cause=e) from e
        except ValueError as e:
            raise AIServiceFailure("AI service returned invalid JSON", cause=e) from e

        return parse_analysis_payload(body)

    async def health(self) -> dict[str, str]:
        try:
            async with self._client() as client:
                response = await client.get("/health")
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.info("AI service health check failed: %s", e)
            return {"status": "stopped", "message": "AI service is not running"}
        return {"status": "running", "message": "AI service is operational"}


async def request_analysis(
    client: AIServiceClient,
    job_description: str,
    resume_text: str,
    cover_letter_text: str,
    analysis_options: dict[str, Any] | None = None,
    timeout: float | None = None,
) -> AIOutcome:
    """Call the AI service and return an explicit success/failure outcome.

    The call is bounded by `timeout` regardless of the client implementation.
    """
    timeout = settings.ai_service_timeout if timeout is None else timeout
    try:
        result = await asyncio.wait_for(
            client.analyze(job_description, resume_text, cover_letter_text, analysis_options),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        return AIFailure(reason=f"AI analysis timed out after {timeout:g}s", cause=e)
    except AIServiceFailure as e:
        return AIFailure(reason=str(e), cause=e.cause or e)
    except Exception as e:
        # Client bugs and unexpected transport errors degrade the same way
        return AIFailure(reason=f"AI analysis failed: {e!r}", cause=e)
    return AISuccess(result=result)


def get_ai_client() -> AIServiceClient | None:
    """Build the configured AI client, or None when it cannot be configured."""
    if settings.ai_provider == "gemini":
        if not settings.gemini_api_key:
            logger.warning("No GEMINI_API_KEY set - Gemini analysis disabled")
            return None
        from services.gemini_client import GeminiAIServiceClient
        return GeminiAIServiceClient(api_key=settings.gemini_api_key, model=settings.gemini_model)

    if settings.ai_provider == "http":
        return HttpAIServiceClient(
            base_url=settings.ai_service_url,
            timeout=settings.ai_service_timeout,
            connect_timeout=settings.ai_connect_timeout,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{settings.ai_provider}'")
