"""
GCP Speech Service

Handles Google Cloud Speech-to-Text operations.
"""

import asyncio
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import speech

from speech_relay.config.settings import settings
from speech_relay.services.exceptions import TranscriptionError
from speech_relay.services.gcp.credentials import ensure_credentials
from speech_relay.services.languages import get_locale

logger = logging.getLogger(__name__)


class GCPSpeechService:
    """Handles Speech-to-Text operations."""

    def __init__(
        self,
        encoding: Optional[str] = None,
        sample_rate_hertz: Optional[int] = None,
    ):
        self.encoding = encoding or settings.STT_ENCODING
        self.sample_rate_hertz = sample_rate_hertz or settings.STT_SAMPLE_RATE_HZ
        self._client: Optional[speech.SpeechClient] = None

    def _get_client(self) -> speech.SpeechClient:
        if self._client is None:
            ensure_credentials()
            self._client = speech.SpeechClient()
        return self._client

    def _build_config(self, language_code: str) -> speech.RecognitionConfig:
        # WAV and FLAC carry encoding and sample rate in their headers, so
        # both stay unset unless configured.
        try:
            encoding = speech.RecognitionConfig.AudioEncoding[self.encoding]
        except KeyError as e:
            raise TranscriptionError(f"Unsupported STT_ENCODING: {self.encoding}") from e

        kwargs = {
            "encoding": encoding,
            "language_code": get_locale(language_code),
            "enable_automatic_punctuation": True,
        }
        if self.sample_rate_hertz:
            kwargs["sample_rate_hertz"] = self.sample_rate_hertz
        return speech.RecognitionConfig(**kwargs)

    def transcribe_sync(self, audio_data: bytes, language_code: str) -> str:
        """Transcribe a complete recording (blocking)."""
        config = self._build_config(language_code)
        audio = speech.RecognitionAudio(content=audio_data)

        try:
            response = self._get_client().recognize(config=config, audio=audio)
        except GoogleAPIError as e:
            raise TranscriptionError(f"Speech-to-Text request failed: {e}") from e

        if not response.results:
            return ""

        return " ".join(
            result.alternatives[0].transcript.strip()
            for result in response.results
            if result.alternatives
        ).strip()

    async def transcribe(self, audio_data: bytes, language_code: str) -> str:
        """Transcribe without blocking the event loop."""
        loop = asyncio.get_running_loop()
        transcript = await loop.run_in_executor(
            None, self.transcribe_sync, audio_data, language_code
        )
        logger.info(f"[STT] {len(audio_data)} bytes ({language_code}) -> '{transcript[:50]}'")
        return transcript
