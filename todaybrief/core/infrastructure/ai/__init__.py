"""AI service infrastructure."""

from .gemini import GeminiTextGenerator

__all__ = ["GeminiTextGenerator"]
