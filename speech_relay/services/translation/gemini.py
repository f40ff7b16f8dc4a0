"""
Gemini Translator - text translation using Vertex AI.

Uses Gemini via Vertex AI with deterministic decoding (temperature 0) so the
same sentence always yields the same translation, which is what makes
cached translations interchangeable with fresh ones.

Uses existing GCP credentials (GOOGLE_APPLICATION_CREDENTIALS) - no separate
API key needed.

Usage:
    from speech_relay.services.translation import GeminiTranslator

    translator = GeminiTranslator()
    translated = await translator.translate("Hej", "Swedish", "English")
    # Returns: "Hi"
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from google.api_core.exceptions import GoogleAPIError

from speech_relay.config.settings import settings
from speech_relay.config.constants import (
    TRANSLATION_TEMPERATURE,
    TRANSLATION_MAX_OUTPUT_TOKENS,
)
from speech_relay.services.exceptions import TranslationError
from speech_relay.services.gcp.credentials import ensure_credentials

logger = logging.getLogger(__name__)

TRANSLATION_INSTRUCTION = "Translate from {source} to {target}. Only return translation."

# Thread pool for blocking Vertex AI calls
_vertex_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="vertex_ai")


class GeminiTranslator:
    """
    Translates text with Gemini via Vertex AI.

    Thread-safe: Uses async wrapper around blocking API.
    Lazy: the Vertex AI client is initialized on first use.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: float = TRANSLATION_TEMPERATURE,
        max_output_tokens: int = TRANSLATION_MAX_OUTPUT_TOKENS,
    ):
        self.model_name = model_name or settings.TRANSLATION_MODEL
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._initialized = False

    def _initialize(self):
        """Lazy initialization of Vertex AI."""
        if self._initialized:
            return

        if not settings.GOOGLE_PROJECT_ID:
            raise TranslationError(
                "GOOGLE_PROJECT_ID is not set. Please update .env accordingly."
            )

        import vertexai

        ensure_credentials()
        vertexai.init(
            project=settings.GOOGLE_PROJECT_ID,
            location=settings.VERTEX_AI_LOCATION
        )
        self._initialized = True
        logger.info(
            f"[Translator] Initialized Vertex AI Gemini "
            f"(project={settings.GOOGLE_PROJECT_ID}, "
            f"location={settings.VERTEX_AI_LOCATION}, "
            f"model={self.model_name})"
        )

    def translate_sync(
        self,
        text: str,
        source_language_name: str,
        target_language_name: str,
    ) -> str:
        """Synchronous call to Gemini via Vertex AI (runs in thread pool)."""
        from vertexai.generative_models import GenerationConfig, GenerativeModel

        self._initialize()

        model = GenerativeModel(
            self.model_name,
            system_instruction=TRANSLATION_INSTRUCTION.format(
                source=source_language_name,
                target=target_language_name,
            ),
        )
        generation_config = GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

        try:
            response = model.generate_content(
                text,
                generation_config=generation_config,
            )
            translated = response.text.strip() if response else ""
        except GoogleAPIError as e:
            raise TranslationError(f"Translation request failed: {e}") from e
        except ValueError as e:
            # response.text raises when the candidate was blocked or empty
            raise TranslationError(f"Translation returned no text: {e}") from e

        if not translated:
            raise TranslationError("Translation returned no text")

        return translated

    async def translate(
        self,
        text: str,
        source_language_name: str,
        target_language_name: str,
    ) -> str:
        """Translate without blocking the event loop."""
        loop = asyncio.get_running_loop()
        translated = await loop.run_in_executor(
            _vertex_executor,
            self.translate_sync,
            text,
            source_language_name,
            target_language_name,
        )
        logger.info(
            f"[Translator] {source_language_name} -> {target_language_name}: "
            f"'{text[:40]}' -> '{translated[:40]}'"
        )
        return translated
