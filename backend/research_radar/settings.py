"""Runtime configuration for the Research Radar backend."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_S2_BASE_URL = "https://api.semanticscholar.org/graph/v1"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-lite"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass
class Settings:
    """Configuration values, read once at startup."""
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"
    static_dir: str = "public"

    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_timeout: float = 60.0

    s2_api_key: str = ""
    s2_base_url: str = DEFAULT_S2_BASE_URL
    scholar_timeout: float = 15.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from the environment, honouring a local .env file."""
        load_dotenv()
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 3000),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            static_dir=os.getenv("STATIC_DIR", "public"),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            gemini_timeout=_env_float("GEMINI_TIMEOUT", 60.0),
            s2_api_key=os.getenv("S2_API_KEY", ""),
            s2_base_url=os.getenv("S2_BASE_URL", DEFAULT_S2_BASE_URL),
            scholar_timeout=_env_float("SCHOLAR_TIMEOUT", 15.0),
        )
