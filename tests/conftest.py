import sys
import pytest
from pathlib import Path

# Add project root (1 level up from tests/) to sys.path so tests can import
# 'speech_relay' and 'tests.helpers' without an install
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

import fakeredis
import fakeredis.aioredis

from speech_relay.main import app
from speech_relay.services.providers import get_turn_pipeline
from speech_relay.services.session.pipeline import TurnPipeline
from speech_relay.services.translation_cache import TranslationCache
from tests.helpers import (
    FakeTranscriber,
    FakeTranslator,
    FakeSynthesizer,
    InMemoryTranslationCache,
)


@pytest.fixture
def fake_redis():
    # Use a FakeServer per test so entries never leak between tests
    return fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer())


@pytest.fixture
def redis_cache(fake_redis):
    async def _get_fake():
        return fake_redis

    return TranslationCache(redis_factory=_get_fake)


@pytest.fixture
def transcriber():
    return FakeTranscriber(text="hej")


@pytest.fixture
def translator():
    return FakeTranslator(translations={"hej": "hi"})


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def memory_cache():
    return InMemoryTranslationCache()


@pytest.fixture
def override_pipeline(transcriber, translator, synthesizer, memory_cache, tmp_path):
    """Serve the WebSocket endpoint with fake adapters."""
    pipeline = TurnPipeline(
        transcriber=transcriber,
        translator=translator,
        synthesizer=synthesizer,
        cache=memory_cache,
        synthesis_mode="single",
        provider_timeout=5.0,
        tmp_dir=str(tmp_path),
    )
    app.dependency_overrides[get_turn_pipeline] = lambda: pipeline
    yield pipeline
    app.dependency_overrides.clear()
