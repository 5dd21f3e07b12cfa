"""API clients for external services."""

from .llm import LLMClient
from .gemini import GeminiClient

__all__ = ["LLMClient", "GeminiClient"]
