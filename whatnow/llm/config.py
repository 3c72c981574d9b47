from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LLMConfig:
    """Settings for the Groq collaborators around the suggestion core.

    One config drives intent classification, place summaries and day-plan
    drafts. Each call type has its own sampling temperature. Set
    ``WHATNOW_AI_ENABLED=0`` to force every collaborator onto its keyword
    or rating-based fallback.
    """

    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    timeout: float = float(os.getenv("GROQ_TIMEOUT", "10"))
    enabled: bool = _env_flag("WHATNOW_AI_ENABLED", True)
    max_tokens: int = 1024
    classify_max_tokens: int = 64
    classify_temperature: float = 0.0
    summary_temperature: float = 0.5
    day_plan_temperature: float = 0.7
    # Summaries are reused for a day
    summary_cache_ttl: float = 24 * 60 * 60


DEFAULT_LLM_CONFIG = LLMConfig()
