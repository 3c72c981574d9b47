"""
Free-text prompt handling ahead of the suggestion core.

Responsibilities:
- Extract a search query, district and price tags from EN/TR prompts.
- Classify a prompt into one of the five suggestion intents.
- Fall back to keyword rules when the LLM is unavailable.
"""
