"""
Language table and voice selection.

Maps the short language codes clients send (``sv``, ``en`` ...) to the
human-readable names used in translation prompts and to the locales the
Google speech services expect.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from speech_relay.config.constants import (
    TTS_ENGLISH_VOICE_NAME,
    TTS_DEFAULT_VOICE_TEMPLATE,
)


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    locale: str


@dataclass(frozen=True)
class VoiceSelection:
    """Voice parameters handed to the synthesis adapter."""
    language_code: str
    name: Optional[str] = None


LANGUAGES: Dict[str, Language] = {
    lang.code: lang
    for lang in (
        Language("sv", "Swedish", "sv-SE"),
        Language("en", "English", "en-US"),
        Language("tr", "Turkish", "tr-TR"),
        Language("ar", "Arabic", "ar-XA"),
        Language("es", "Spanish", "es-ES"),
        Language("fr", "French", "fr-FR"),
        Language("de", "German", "de-DE"),
        Language("it", "Italian", "it-IT"),
        Language("pt", "Portuguese", "pt-PT"),
        Language("ru", "Russian", "ru-RU"),
        Language("zh", "Chinese", "cmn-CN"),
        Language("ja", "Japanese", "ja-JP"),
        Language("ko", "Korean", "ko-KR"),
    )
}


def get_language_name(code: str) -> str:
    """Human-readable name, or the code itself when unknown."""
    lang = LANGUAGES.get(code)
    return lang.name if lang else code


def get_locale(code: str) -> str:
    """BCP-47 locale for the speech services, or the code itself when unknown."""
    lang = LANGUAGES.get(code)
    return lang.locale if lang else code


def resolve_voice(to_lang: str) -> VoiceSelection:
    """
    Pick the synthesis voice for a target language.

    English always gets the designated English voice; every other known
    language gets its locale's standard voice. Unknown codes leave the voice
    name to the provider's default for that language.
    """
    if to_lang == "en":
        return VoiceSelection(language_code="en-US", name=TTS_ENGLISH_VOICE_NAME)

    lang = LANGUAGES.get(to_lang)
    if lang is None:
        return VoiceSelection(language_code=to_lang)

    return VoiceSelection(
        language_code=lang.locale,
        name=TTS_DEFAULT_VOICE_TEMPLATE.format(locale=lang.locale),
    )
