"""
Translation Cache

Caches translations in Redis so repeated phrases skip the translation call.

Keys are derived from the text content, never from the session, so two
connections translating the same phrase share one entry:

- "Hej, hur mår du?" (sv -> en) -> key "t:sv:en:hejhurmårdu"
- "hej hur mår du"   (sv -> en) -> same key, cache hit

Short utterances (likely common phrases) are kept for a day, everything else
for an hour. The cache is an optimization only: every Redis error is logged
and degrades to a miss or a dropped write.
"""
import json
import logging
from typing import Awaitable, Callable, Optional

import redis.asyncio as redis

from speech_relay.config.constants import (
    CACHE_KEY_PREFIX,
    CACHE_KEY_MAX_CHARS,
    CACHE_SHORT_TEXT_MAX_WORDS,
    CACHE_TTL_SHORT_SEC,
    CACHE_TTL_LONG_SEC,
)
from speech_relay.config.redis import get_redis
from speech_relay.services.exceptions import CacheError
from speech_relay.services.metrics import cache_lookups

logger = logging.getLogger(__name__)


def normalize_text(text: str) -> str:
    """
    Normalize text for use in a cache key.

    Lower-cases, drops every character that is not a Unicode letter or digit
    (punctuation and whitespace included) and keeps the first
    CACHE_KEY_MAX_CHARS characters.
    """
    lowered = text.lower()
    return "".join(ch for ch in lowered if ch.isalnum())[:CACHE_KEY_MAX_CHARS]


def make_cache_key(from_lang: str, to_lang: str, text: str) -> str:
    """Build the cache key for a language pair and source text."""
    return f"{CACHE_KEY_PREFIX}:{from_lang}:{to_lang}:{normalize_text(text)}"


def ttl_for(text: str) -> int:
    """
    Expiry for a cache entry, based on the word count of the original text.

    Returns:
        CACHE_TTL_SHORT_SEC for up to CACHE_SHORT_TEXT_MAX_WORDS words,
        CACHE_TTL_LONG_SEC otherwise
    """
    word_count = len(text.split())
    if word_count <= CACHE_SHORT_TEXT_MAX_WORDS:
        return CACHE_TTL_SHORT_SEC
    return CACHE_TTL_LONG_SEC


class TranslationCache:
    """Redis-backed translation cache with hit/miss statistics."""

    def __init__(self, redis_factory: Callable[[], Awaitable[redis.Redis]] = get_redis):
        """
        Initialize the translation cache.

        Args:
            redis_factory: Coroutine function returning the Redis client
                           (defaults to the shared application client)
        """
        self._redis_factory = redis_factory
        self._hits = 0
        self._misses = 0
        self._errors = 0

    async def get(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        """
        Retrieve a cached translation.

        Returns:
            Translated text if cached, None on a miss or any store error
        """
        if not text:
            return None

        key = make_cache_key(from_lang, to_lang, text)
        try:
            translated = await self._read(key)
        except CacheError as e:
            self._errors += 1
            self._misses += 1
            cache_lookups.labels(result="error").inc()
            logger.warning(f"[TranslationCache] get failed for {key}: {e}")
            return None

        if translated is None:
            self._misses += 1
            cache_lookups.labels(result="miss").inc()
            logger.debug(f"[TranslationCache] MISS {key}")
            return None

        self._hits += 1
        cache_lookups.labels(result="hit").inc()
        logger.info(f"[TranslationCache] HIT {key}")
        return translated

    async def set(self, from_lang: str, to_lang: str, text: str, translated: str) -> None:
        """Store a translation; errors are logged and dropped."""
        if not text:
            return

        key = make_cache_key(from_lang, to_lang, text)
        ttl = ttl_for(text)
        try:
            await self._write(key, translated, ttl)
        except CacheError as e:
            self._errors += 1
            logger.warning(f"[TranslationCache] set failed for {key}: {e}")
            return

        logger.info(f"[TranslationCache] SET {key} (TTL {ttl}s)")

    async def _read(self, key: str) -> Optional[str]:
        try:
            client = await self._redis_factory()
            raw = await client.get(key)
            if raw is None:
                return None
            value = json.loads(raw)
            return value["translatedText"]
        except Exception as e:
            raise CacheError(str(e)) from e

    async def _write(self, key: str, translated: str, ttl: int) -> None:
        try:
            client = await self._redis_factory()
            await client.setex(key, ttl, json.dumps({"translatedText": translated}))
        except Exception as e:
            raise CacheError(str(e)) from e

    def get_stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            Dict with hits, misses, errors and hit_rate_percent
        """
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0

        return {
            "hits": self._hits,
            "misses": self._misses,
            "errors": self._errors,
            "hit_rate_percent": round(hit_rate, 2),
        }


# Global singleton instance
_translation_cache = TranslationCache()


def get_translation_cache() -> TranslationCache:
    """Get the global translation cache instance."""
    return _translation_cache
