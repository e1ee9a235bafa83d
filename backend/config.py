import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    max_upload_size_mb: int = 5
    max_job_description_chars: int = 10000
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "10/minute"

    # External AI analysis service
    ai_service_enabled: bool = False
    ai_provider: str = "http"  # "http" | "gemini"
    ai_service_url: str = "http://localhost:5000"
    ai_service_timeout: float = 30.0
    ai_connect_timeout: float = 10.0
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Blend weights (basic engine vs AI service) and confidence levels
    basic_weight: float = 0.3
    ai_weight: float = 0.7
    basic_confidence_level: float = 60.0  # no AI ran
    ai_default_confidence_level: float = 75.0  # AI ran but reported none

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
