"""
Translation module.

Provides the Gemini-based translator used by the turn pipeline.
"""
from .gemini import GeminiTranslator

__all__ = ["GeminiTranslator"]
