"""
Tests for translation cache key derivation, TTL policy and Redis access
"""
import json

import pytest

from speech_relay.config.constants import CACHE_KEY_MAX_CHARS
from speech_relay.services.translation_cache import (
    TranslationCache,
    make_cache_key,
    normalize_text,
    ttl_for,
)


@pytest.mark.parametrize("text", [
    "Hej, hur mår du?",
    "  Hello   World!!  ",
    "İstanbul'a gidiyorum",
    "Привет, мир",
    "Room 101, floor 3.",
    "",
    "x" * 500,
])
def test_normalize_is_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_normalize_keeps_unicode_letters_and_digits():
    assert normalize_text("Hej, hur mår du?") == "hejhurmårdu"
    assert normalize_text("Room 101, floor 3.") == "room101floor3"
    assert normalize_text("Привет, мир!") == "приветмир"


def test_normalize_truncates_to_max_chars():
    text = "abc def " * 100
    assert len(normalize_text(text)) == CACHE_KEY_MAX_CHARS


def test_key_format():
    assert make_cache_key("sv", "en", "Hej!") == "t:sv:en:hej"


def test_keys_ignore_case_punctuation_and_spacing():
    a = make_cache_key("sv", "en", "Hej, hur mår du?")
    b = make_cache_key("sv", "en", "hej   HUR mår du")
    c = make_cache_key("sv", "en", "Hej hur... mår, du!")
    assert a == b == c


def test_keys_differ_by_language_pair():
    assert make_cache_key("sv", "en", "hej") != make_cache_key("sv", "de", "hej")
    assert make_cache_key("sv", "en", "hej") != make_cache_key("en", "sv", "hej")


def test_key_suffix_is_bounded():
    key = make_cache_key("sv", "en", "ord " * 200)
    suffix = key.split(":", 3)[3]
    assert len(suffix) <= CACHE_KEY_MAX_CHARS


def test_ttl_boundary_is_inclusive_at_five_words():
    assert ttl_for("one two three four five") == 86400
    assert ttl_for("one two three four five six") == 3600


def test_ttl_counts_whitespace_separated_words():
    assert ttl_for("one  two\tthree\nfour   five") == 86400
    assert ttl_for("hej") == 86400


@pytest.mark.asyncio
async def test_set_then_get(redis_cache, fake_redis):
    await redis_cache.set("sv", "en", "Hej!", "Hi!")

    assert await redis_cache.get("sv", "en", "hej") == "Hi!"

    raw = await fake_redis.get("t:sv:en:hej")
    assert json.loads(raw) == {"translatedText": "Hi!"}


@pytest.mark.asyncio
async def test_set_applies_length_dependent_ttl(redis_cache, fake_redis):
    await redis_cache.set("sv", "en", "hej", "hi")
    await redis_cache.set("sv", "en", "ett två tre fyra fem sex", "one two three four five six")

    assert 3600 < await fake_redis.ttl("t:sv:en:hej") <= 86400
    assert 0 < await fake_redis.ttl("t:sv:en:etttvåtrefyrafemsex") <= 3600


@pytest.mark.asyncio
async def test_miss_returns_none(redis_cache):
    assert await redis_cache.get("sv", "en", "never seen") is None
    assert redis_cache.get_stats()["misses"] == 1


@pytest.mark.asyncio
async def test_empty_text_is_never_cached(redis_cache, fake_redis):
    await redis_cache.set("sv", "en", "", "nothing")
    assert await fake_redis.keys("*") == []
    assert await redis_cache.get("sv", "en", "") is None


@pytest.mark.asyncio
async def test_corrupt_entry_is_a_miss(redis_cache, fake_redis):
    await fake_redis.set("t:sv:en:hej", b"not json")
    assert await redis_cache.get("sv", "en", "hej") is None
    assert redis_cache.get_stats()["errors"] == 1


@pytest.mark.asyncio
async def test_store_errors_are_swallowed():
    async def _unavailable():
        raise ConnectionError("redis down")

    cache = TranslationCache(redis_factory=_unavailable)

    assert await cache.get("sv", "en", "hej") is None
    await cache.set("sv", "en", "hej", "hi")

    stats = cache.get_stats()
    assert stats["errors"] == 2
    assert stats["hits"] == 0


@pytest.mark.asyncio
async def test_stats_track_hit_rate(redis_cache):
    await redis_cache.set("sv", "en", "hej", "hi")
    await redis_cache.get("sv", "en", "hej")
    await redis_cache.get("sv", "en", "hejdå")

    stats = redis_cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate_percent"] == 50.0
