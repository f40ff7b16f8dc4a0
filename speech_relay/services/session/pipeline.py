"""
Turn Pipeline - transcribe, translate and synthesize one recorded turn.

Triggered once per `stop`. Events are emitted in this order:

    partial -> final -> (audio | audio_chunk x N -> audio_complete) -> end

Usage:
    from speech_relay.services.session.pipeline import TurnPipeline

    pipeline = TurnPipeline(transcriber, translator, synthesizer, cache)
    result = await pipeline.run(session, emit=send_event)

Every failure is raised as a RelayError subclass; the caller turns it into a
single error frame. Nothing is retried.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Literal, Optional, Set, Tuple

from speech_relay.config.constants import TTS_CHUNK_MAX_CHARS
from speech_relay.config.settings import settings
from speech_relay.schemas.websocket_events import (
    OutboundEvent,
    PartialEvent,
    FinalEvent,
    AudioEvent,
    AudioChunkEvent,
    AudioCompleteEvent,
    EndEvent,
)
from speech_relay.services.audio import decode_audio_chunks, spooled_audio, to_data_url
from speech_relay.services.exceptions import (
    ProviderTimeoutError,
    TranscriptionError,
    TranslationError,
)
from speech_relay.services.languages import VoiceSelection, get_language_name, resolve_voice
from speech_relay.services.metrics import stage_latency
from speech_relay.services.protocols import (
    TranscriberProtocol,
    TranslatorProtocol,
    SynthesizerProtocol,
    TranslationCacheProtocol,
)
from speech_relay.services.session.state import Session
from speech_relay.services.text_chunker import chunk_text

logger = logging.getLogger(__name__)

EmitFn = Callable[[OutboundEvent], Awaitable[None]]
SynthesisMode = Literal["single", "chunked"]


@dataclass
class TurnResult:
    """Outcome of one turn; discarded after emission."""
    original_text: str
    translated_text: str
    cache_hit: bool


class TurnPipeline:
    """
    Runs the stop-triggered turn for a session.

    One instance is shared by all connections; it holds no per-session state
    apart from the background cache writes it is tracking.
    """

    def __init__(
        self,
        transcriber: TranscriberProtocol,
        translator: TranslatorProtocol,
        synthesizer: SynthesizerProtocol,
        cache: TranslationCacheProtocol,
        synthesis_mode: Optional[SynthesisMode] = None,
        chunk_max_chars: int = TTS_CHUNK_MAX_CHARS,
        provider_timeout: Optional[float] = None,
        tmp_dir: Optional[str] = None,
    ):
        """
        Args:
            transcriber: Speech-to-text adapter
            translator: Translation adapter
            synthesizer: Text-to-speech adapter
            cache: Translation cache adapter
            synthesis_mode: "single" for one audio event, "chunked" for
                            parallel fragment synthesis (default from settings)
            chunk_max_chars: Fragment length bound in chunked mode
            provider_timeout: Seconds allowed per adapter call (default from
                              settings)
            tmp_dir: Directory for the temporary audio spool
        """
        self.transcriber = transcriber
        self.translator = translator
        self.synthesizer = synthesizer
        self.cache = cache
        self.synthesis_mode = synthesis_mode or settings.SYNTHESIS_MODE
        self.chunk_max_chars = chunk_max_chars
        self.provider_timeout = (
            provider_timeout if provider_timeout is not None else settings.PROVIDER_TIMEOUT_SEC
        )
        self.tmp_dir = tmp_dir or settings.AUDIO_TMP_DIR
        self._pending_writes: Set[asyncio.Task] = set()

    async def run(self, session: Session, emit: EmitFn) -> TurnResult:
        """Run one turn for the session, emitting events as results arrive."""
        from_lang = session.from_lang
        to_lang = session.to_lang

        audio = decode_audio_chunks(session.audio_chunks)
        logger.info(
            f"[Pipeline] Session {session.session_id}: {len(session.audio_chunks)} chunks, "
            f"{len(audio)} bytes ({from_lang} -> {to_lang})"
        )

        original_text = await self._transcribe(audio, from_lang)
        await emit(PartialEvent(text=original_text))

        translated_text, cache_hit = await self._translate(from_lang, to_lang, original_text)
        await emit(FinalEvent(
            original=original_text,
            translated=translated_text,
            cached=cache_hit,
            from_lang=from_lang,
            to_lang=to_lang,
        ))

        voice = resolve_voice(to_lang)
        if self.synthesis_mode == "chunked":
            await self._emit_chunked_audio(translated_text, voice, emit)
        else:
            await self._emit_single_audio(translated_text, voice, emit)

        await emit(EndEvent(session_id=session.session_id))

        logger.info(f"[Pipeline] Session {session.session_id} turn complete (cached={cache_hit})")
        return TurnResult(
            original_text=original_text,
            translated_text=translated_text,
            cache_hit=cache_hit,
        )

    # === Steps ===

    async def _transcribe(self, audio: bytes, from_lang: str) -> str:
        with spooled_audio(audio, directory=self.tmp_dir):
            text = await self._call(
                self.transcriber.transcribe(audio, from_lang), "Transcription"
            )

        text = (text or "").strip()
        if not text:
            raise TranscriptionError("No text transcribed from audio")
        return text

    async def _translate(self, from_lang: str, to_lang: str, text: str) -> Tuple[str, bool]:
        cached = await self._cache_get(from_lang, to_lang, text)
        if cached:
            return cached, True

        translated = await self._call(
            self.translator.translate(
                text,
                get_language_name(from_lang),
                get_language_name(to_lang),
            ),
            "Translation",
        )
        translated = (translated or "").strip()
        if not translated:
            raise TranslationError("Translation returned no text")

        self._schedule_cache_write(from_lang, to_lang, text, translated)
        return translated, False

    async def _emit_single_audio(self, text: str, voice: VoiceSelection, emit: EmitFn):
        audio = await self._synthesize(text, voice)
        await emit(AudioEvent(url=to_data_url(audio)))

    async def _emit_chunked_audio(self, text: str, voice: VoiceSelection, emit: EmitFn):
        fragments = chunk_text(text, self.chunk_max_chars)

        # Fragments are synthesized concurrently but delivered strictly by index
        results = await asyncio.gather(
            *(self._synthesize(fragment, voice) for fragment in fragments)
        )

        total = len(results)
        for index, audio in enumerate(results):
            await emit(AudioChunkEvent(
                url=to_data_url(audio),
                chunk_index=index,
                total_chunks=total,
            ))
        await emit(AudioCompleteEvent(total_chunks=total))

    async def _synthesize(self, text: str, voice: VoiceSelection) -> bytes:
        return await self._call(self.synthesizer.synthesize(text, voice), "Synthesis")

    # === Cache ===

    async def _cache_get(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        try:
            return await asyncio.wait_for(
                self.cache.get(from_lang, to_lang, text),
                timeout=self.provider_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"[Pipeline] Cache lookup timed out after {self.provider_timeout}s")
            return None

    def _schedule_cache_write(self, from_lang: str, to_lang: str, text: str, translated: str):
        task = asyncio.create_task(self.cache.set(from_lang, to_lang, text, translated))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def wait_for_pending_writes(self) -> None:
        """Wait until every scheduled cache write has finished."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    # === Helpers ===

    async def _call(self, coro: Awaitable, what: str):
        try:
            with stage_latency.labels(component=what.lower()).time():
                return await asyncio.wait_for(coro, timeout=self.provider_timeout)
        except asyncio.TimeoutError as e:
            if isinstance(e, ProviderTimeoutError):
                raise
            raise ProviderTimeoutError(
                f"{what} timed out after {self.provider_timeout}s"
            ) from e
