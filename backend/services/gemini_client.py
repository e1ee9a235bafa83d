"""Google Gemini backend for the AI analysis contract."""

import json
import logging
from typing import Any

from google import genai
from google.genai import types

from models.schemas.analysis import AIAnalysisResult
from services import prompt_builder
from services.ai_client import AIServiceClient, parse_analysis_payload
from services.errors import AIServiceFailure

logger = logging.getLogger(__name__)


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


class GeminiAIServiceClient(AIServiceClient):
    """Runs the analysis prompt on Gemini and validates the JSON it returns."""

    name = "gemini"

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.5-flash",
        client: Any = None,
    ) -> None:
        self.model = model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    async def analyze(
        self,
        job_description: str,
        resume_text: str,
        cover_letter_text: str,
        analysis_options: dict[str, Any] | None = None,
    ) -> AIAnalysisResult:
        prompt = prompt_builder.build_analysis_prompt(
            job_description, resume_text, cover_letter_text, analysis_options
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.3,
                    max_output_tokens=4096,
                ),
            )
        except Exception as e:
            raise AIServiceFailure(f"Gemini API error: {e}", cause=e) from e

        try:
            data = json.loads(_strip_code_fences(response.text or ""))
        except json.JSONDecodeError as e:
            logger.error("Failed to parse Gemini response as JSON: %s", e)
            raise AIServiceFailure("Gemini returned invalid JSON", cause=e) from e

        return parse_analysis_payload({"success": True, "analysis": data})

    async def health(self) -> dict[str, str]:
        try:
            await self._client.aio.models.get(model=self.model)
        except Exception as e:
            logger.info("Gemini health check failed: %s", e)
            return {"status": "stopped", "message": f"Gemini model {self.model} unreachable"}
        return {"status": "running", "message": f"Gemini model {self.model} available"}
