from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _parse_hhmm(raw: str) -> time:
    hours, _, minutes = raw.strip().partition(":")
    return time(int(hours), int(minutes or 0))


@dataclass(frozen=True)
class SuggestionConfig:
    day_start: time = _parse_hhmm(os.getenv("WHATNOW_DAY_START", "09:00"))
    transportation_mode: str = os.getenv("WHATNOW_TRANSPORT_MODE", "walking")
    default_stop_minutes: int = int(os.getenv("WHATNOW_STOP_MINUTES", "60"))


DEFAULT_SUGGESTION_CONFIG = SuggestionConfig()
