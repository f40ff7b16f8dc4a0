import asyncio
import base64
from typing import Dict, List, Optional, Tuple

from speech_relay.services.languages import VoiceSelection
from speech_relay.services.translation_cache import make_cache_key

# Not a real recording; the fake transcriber never looks at the bytes
SAMPLE_AUDIO = b"RIFF\x24\x00\x00\x00WAVEfmt \x10\x00\x00\x00\x01\x00\x01\x00"


def encode_audio(data: bytes = SAMPLE_AUDIO, data_url: bool = False) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    if data_url:
        return f"data:audio/wav;base64,{encoded}"
    return encoded


class FakeTranscriber:
    def __init__(self, text: str = "hej", error: Optional[Exception] = None, delay: float = 0):
        self.text = text
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[bytes, str]] = []

    async def transcribe(self, audio_data: bytes, language_code: str) -> str:
        self.calls.append((audio_data, language_code))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.text


class FakeTranslator:
    def __init__(
        self,
        translations: Optional[Dict[str, str]] = None,
        default: str = "hello",
        error: Optional[Exception] = None,
    ):
        self.translations = translations or {}
        self.default = default
        self.error = error
        self.calls: List[Tuple[str, str, str]] = []

    async def translate(self, text: str, source_language_name: str, target_language_name: str) -> str:
        self.calls.append((text, source_language_name, target_language_name))
        if self.error:
            raise self.error
        return self.translations.get(text, self.default)


class FakeSynthesizer:
    """Returns b"mp3:<text>"; per-text delays let tests reorder completion."""

    def __init__(self, delays: Optional[Dict[str, float]] = None, error: Optional[Exception] = None):
        self.delays = delays or {}
        self.error = error
        self.calls: List[Tuple[str, VoiceSelection]] = []
        self.completed: List[str] = []

    async def synthesize(self, text: str, voice: VoiceSelection) -> bytes:
        self.calls.append((text, voice))
        await asyncio.sleep(self.delays.get(text, 0))
        if self.error:
            raise self.error
        self.completed.append(text)
        return f"mp3:{text}".encode()


class InMemoryTranslationCache:
    """Dict-backed cache using the production key derivation."""

    def __init__(self):
        self.entries: Dict[str, str] = {}

    async def get(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        return self.entries.get(make_cache_key(from_lang, to_lang, text))

    async def set(self, from_lang: str, to_lang: str, text: str, translated: str) -> None:
        self.entries[make_cache_key(from_lang, to_lang, text)] = translated


def data_url_payload(url: str) -> bytes:
    prefix, encoded = url.split(",", 1)
    assert prefix == "data:audio/mp3;base64"
    return base64.b64decode(encoded)
