"""
Provider wiring

Builds the production turn pipeline from the Google Cloud adapters and the
Redis translation cache. Tests replace it through FastAPI dependency
overrides.
"""

import functools

from speech_relay.services.gcp import GCPSpeechService, GCPTextToSpeechService
from speech_relay.services.session.pipeline import TurnPipeline
from speech_relay.services.translation import GeminiTranslator
from speech_relay.services.translation_cache import get_translation_cache


@functools.lru_cache(maxsize=1)
def get_turn_pipeline() -> TurnPipeline:
    """Shared pipeline instance; provider clients are created on first use."""
    return TurnPipeline(
        transcriber=GCPSpeechService(),
        translator=GeminiTranslator(),
        synthesizer=GCPTextToSpeechService(),
        cache=get_translation_cache(),
    )
