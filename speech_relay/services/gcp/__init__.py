"""
GCP Services Package

Exports the Google Cloud speech adapters.
"""

from speech_relay.services.gcp.speech import GCPSpeechService
from speech_relay.services.gcp.tts import GCPTextToSpeechService

__all__ = [
    "GCPSpeechService",
    "GCPTextToSpeechService",
]
