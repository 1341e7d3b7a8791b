# /wrestling_bot/config.py
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load .env once here so all modules see env vars
load_dotenv()

MISTRAL_URL = "https://api.mistral.ai/v1/chat/completions"
MODEL_NAME = "mistral-large-latest"
DEFAULT_DATABASE_URL = "sqlite:///./wrestling_bot.db"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, built once at startup.
    Sampling parameters and the history window are fixed, not env-driven.
    """

    api_key: str
    api_url: str = MISTRAL_URL
    model: str = MODEL_NAME
    max_tokens: int = 250
    temperature: float = 0.8
    timeout: float = 60.0
    history_limit: int = 5
    port: int = 8000
    database_url: str = DEFAULT_DATABASE_URL
    debug_log: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env

        api_key = (env.get("MISTRAL_API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError("MISTRAL_API_KEY env variable not set")

        try:
            port = int(env.get("PORT") or "8000")
            timeout = float(env.get("COMPLETION_TIMEOUT") or "60")
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        return cls(
            api_key=api_key,
            api_url=env.get("MISTRAL_URL") or MISTRAL_URL,
            model=env.get("MISTRAL_MODEL") or MODEL_NAME,
            timeout=timeout,
            port=port,
            database_url=env.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
            debug_log=env.get("DEBUG_LOG", "0") == "1",
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
