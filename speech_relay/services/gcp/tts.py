"""
GCP Text-to-Speech Service

Handles Google Cloud Text-to-Speech operations.
"""

import asyncio
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import texttospeech

from speech_relay.config.constants import TTS_SPEAKING_RATE
from speech_relay.services.exceptions import SynthesisError
from speech_relay.services.gcp.credentials import ensure_credentials
from speech_relay.services.languages import VoiceSelection

logger = logging.getLogger(__name__)


class GCPTextToSpeechService:
    """Handles Text-to-Speech operations."""

    def __init__(self, speaking_rate: float = TTS_SPEAKING_RATE):
        self.speaking_rate = speaking_rate
        self._client: Optional[texttospeech.TextToSpeechClient] = None

    def _get_client(self) -> texttospeech.TextToSpeechClient:
        if self._client is None:
            ensure_credentials()
            self._client = texttospeech.TextToSpeechClient()
        return self._client

    def synthesize_sync(self, text: str, voice: VoiceSelection) -> bytes:
        """Synthesize text to MP3 audio (blocking)."""
        voice_params = texttospeech.VoiceSelectionParams(
            language_code=voice.language_code,
            name=voice.name or "",
        )

        audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.MP3,
            speaking_rate=self.speaking_rate,
            pitch=0.0,
        )

        synthesis_input = texttospeech.SynthesisInput(text=text)

        try:
            response = self._get_client().synthesize_speech(
                input=synthesis_input,
                voice=voice_params,
                audio_config=audio_config,
            )
        except GoogleAPIError as e:
            raise SynthesisError(f"Text-to-Speech request failed: {e}") from e

        if not response.audio_content:
            raise SynthesisError("Text-to-Speech returned no audio")

        return response.audio_content

    async def synthesize(self, text: str, voice: VoiceSelection) -> bytes:
        """Synthesize without blocking the event loop."""
        loop = asyncio.get_running_loop()
        audio = await loop.run_in_executor(None, self.synthesize_sync, text, voice)
        logger.debug(f"[TTS] '{text[:30]}' ({voice.name or voice.language_code}) -> {len(audio)} bytes")
        return audio
