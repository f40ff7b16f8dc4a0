"""
Protocol definitions for the session pipeline collaborators.

This module defines interfaces (Python Protocols) that allow:
- Swapping implementations (e.g., GCP → another provider → local models)
- Testing without real API credentials
- Clear contracts between the pipeline and its adapters

Usage:
    from speech_relay.services.protocols import TranscriberProtocol

    async def run(transcriber: TranscriberProtocol, audio: bytes):
        text = await transcriber.transcribe(audio, "sv")
"""

from typing import Optional, Protocol

from speech_relay.services.languages import VoiceSelection


class TranscriberProtocol(Protocol):
    """
    Interface for speech-to-text services.

    Implementations raise TranscriptionError on provider failure.
    """

    async def transcribe(self, audio_data: bytes, language_code: str) -> str:
        """
        Transcribe a complete recording to text.

        Args:
            audio_data: Encoded audio bytes as recorded by the client
            language_code: Short source language hint (e.g., "sv", "en")

        Returns:
            Transcribed text, empty when nothing was recognized
        """
        ...


class TranslatorProtocol(Protocol):
    """
    Interface for translation services.

    Implementations must decode deterministically so a cached translation
    is interchangeable with a fresh one. Raise TranslationError on failure.
    """

    async def translate(
        self,
        text: str,
        source_language_name: str,
        target_language_name: str,
    ) -> str:
        """
        Translate text between two languages.

        Args:
            text: Text to translate
            source_language_name: Human-readable source language ("Swedish")
            target_language_name: Human-readable target language ("English")

        Returns:
            Translated text
        """
        ...


class SynthesizerProtocol(Protocol):
    """
    Interface for text-to-speech services.

    Implementations return MP3 encoded audio and raise SynthesisError on
    failure.
    """

    async def synthesize(self, text: str, voice: VoiceSelection) -> bytes:
        """
        Synthesize speech from text.

        Args:
            text: Text to synthesize
            voice: Locale and voice name chosen for the target language

        Returns:
            MP3 audio bytes
        """
        ...


class TranslationCacheProtocol(Protocol):
    """
    Interface for the translation cache.

    Both operations swallow store errors: a failed read is a miss and a
    failed write is dropped.
    """

    async def get(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        """Return the cached translation or None."""
        ...

    async def set(self, from_lang: str, to_lang: str, text: str, translated: str) -> None:
        """Store a translation with the length-dependent expiry."""
        ...
