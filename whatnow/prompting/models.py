from __future__ import annotations

from pydantic import BaseModel, Field

from ..suggestions.intents import SuggestionIntent
from ..suggestions.models import InterpretedPrompt


class InterpretRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=1000)


class InterpretResponse(BaseModel):
    prompt: InterpretedPrompt
    intent: SuggestionIntent
