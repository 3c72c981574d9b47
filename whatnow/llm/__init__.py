"""
LLM collaborators that feed the suggestion core.

Responsibilities:
- Manage Groq API configuration and credentials.
- Summarise places into highlights, sentiment and audience tags.
- Draft an ordered day plan over candidate places for route requests.
- Graceful fallback when the LLM is unavailable or returns invalid output.
"""
