"""
Application-wide constants for configuration and tuning.

This file centralizes the magic numbers of the session pipeline so the
cache policy, chunking and provider parameters can be tuned in one place.

Note: Environment-dependent settings (Redis, GCP project, timeouts) belong in
settings.py. This file is for operational parameters that rarely change
between environments.
"""

# ==============================================================================
# TRANSLATION CACHE
# ==============================================================================

# Prefix of every translation cache key ("t:<from>:<to>:<text>")
CACHE_KEY_PREFIX: str = "t"

# Maximum length of the normalized text part of a cache key (characters)
CACHE_KEY_MAX_CHARS: int = 120

# Utterances with at most this many words are treated as common phrases
CACHE_SHORT_TEXT_MAX_WORDS: int = 5

# Expiry for short utterances (seconds, 24h)
CACHE_TTL_SHORT_SEC: int = 86400

# Expiry for everything else (seconds, 1h)
CACHE_TTL_LONG_SEC: int = 3600

# ==============================================================================
# TRANSLATION (Gemini via Vertex AI)
# ==============================================================================

# Deterministic decoding
TRANSLATION_TEMPERATURE: float = 0.0

# Upper bound on the translated output
TRANSLATION_MAX_OUTPUT_TOKENS: int = 256

# ==============================================================================
# SPEECH SYNTHESIS
# ==============================================================================

# Maximum characters per synthesized fragment in chunked mode
TTS_CHUNK_MAX_CHARS: int = 40

# Speaking rate passed to Text-to-Speech (1.0 = normal)
TTS_SPEAKING_RATE: float = 1.0

# Voice used whenever the target language is English
TTS_ENGLISH_VOICE_NAME: str = "en-US-Neural2-C"

# Voice name template for every other language (filled with the locale)
TTS_DEFAULT_VOICE_TEMPLATE: str = "{locale}-Standard-A"

# MIME type of the data URLs sent back to the client
TTS_AUDIO_MIME_TYPE: str = "audio/mp3"

# ==============================================================================
# TEMPORARY AUDIO STORAGE
# ==============================================================================

# Filename prefix/suffix of the per-turn audio spool file
AUDIO_TMP_PREFIX: str = "audio_"
AUDIO_TMP_SUFFIX: str = ".wav"
