"""
Runtime configuration.

Values come from the process environment, optionally seeded from a .env file
next to the Backend folder (or the current directory) via python-dotenv.

Environment Variables:
    GEMINI_API_KEY:        key for the Gemini generation backend
    GEMINI_MODEL:          Gemini model name (default gemini-2.0-flash)
    OPENAI_API_KEY:        key for the GPT generation backend
    OPENAI_MODEL:          OpenAI model name (default gpt-4o)
    GITHUB_CLIENT_ID:      OAuth app client id
    GITHUB_CLIENT_SECRET:  OAuth app client secret
    GITHUB_API_BASE:       REST API root (default https://api.github.com)
    GITHUB_TIMEOUT:        per-request timeout in seconds (default 15)
    GITHUB_MAX_TRIES:      attempts for retryable GitHub failures (default 3)
    GENERATION_TIMEOUT:    per-request timeout for LLM calls (default 120)
    CORS_ORIGINS:          comma-separated list of allowed origins
"""
import os
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _load_env_file():
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        logger.debug("Loading .env from %s", env_path)
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    github_client_id: Optional[str] = None
    github_client_secret: Optional[str] = None
    github_api_base: str = "https://api.github.com"
    github_timeout: float = 15.0
    github_max_tries: int = 3
    generation_timeout: float = 120.0
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    def missing_secrets(self) -> List[str]:
        """Names of the required secrets that are not set."""
        required = {
            "GEMINI_API_KEY": self.gemini_api_key,
            "OPENAI_API_KEY": self.openai_api_key,
            "GITHUB_CLIENT_ID": self.github_client_id,
            "GITHUB_CLIENT_SECRET": self.github_client_secret,
        }
        return [name for name, value in required.items() if not value]


def load_settings() -> Settings:
    """Build a Settings object from the environment."""
    _load_env_file()

    s = Settings()
    s.gemini_api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    s.gemini_model = os.getenv("GEMINI_MODEL", s.gemini_model)
    s.openai_api_key = os.getenv("OPENAI_API_KEY")
    s.openai_model = os.getenv("OPENAI_MODEL", s.openai_model)
    s.github_client_id = os.getenv("GITHUB_CLIENT_ID")
    s.github_client_secret = os.getenv("GITHUB_CLIENT_SECRET")
    s.github_api_base = os.getenv("GITHUB_API_BASE", s.github_api_base).rstrip("/")
    s.github_timeout = float(os.getenv("GITHUB_TIMEOUT", s.github_timeout))
    s.github_max_tries = max(1, int(os.getenv("GITHUB_MAX_TRIES", s.github_max_tries)))
    s.generation_timeout = float(os.getenv("GENERATION_TIMEOUT", s.generation_timeout))

    origins = os.getenv("CORS_ORIGINS")
    if origins:
        s.cors_origins = _split_csv(origins)
    return s


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
