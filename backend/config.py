import os
from dataclasses import dataclass, field
from typing import List, Optional

try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # .env is optional
    pass


def _default_cors_origins() -> List[str]:
    value = os.getenv("CORS_ORIGINS")
    return value.split(",") if value else ["*"]


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass
class Settings:
    """Runtime configuration loaded from environment variables."""

    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    # None keeps the provider call unbounded
    openai_timeout: Optional[float] = field(
        default_factory=lambda: _optional_float("OPENAI_TIMEOUT")
    )
    cors_origins: List[str] = field(default_factory=_default_cors_origins)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    chat_api_url: str = os.getenv("CHAT_API_URL", "http://localhost:8000")


settings = Settings()
