from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field


class Settings(BaseSettings):
    # Redis (translation cache)
    REDIS_URL: str | None = Field(None)
    REDIS_HOST: str = Field("redis")
    REDIS_PORT: int = Field(6379)
    REDIS_PASSWORD: str | None = Field(None)

    # Google Cloud
    GOOGLE_APPLICATION_CREDENTIALS: str | None = Field(None)
    GOOGLE_PROJECT_ID: str | None = Field(None)
    VERTEX_AI_LOCATION: str = Field("us-central1")
    TRANSLATION_MODEL: str = Field("gemini-1.5-flash")

    # Speech-to-Text recognition config. ENCODING_UNSPECIFIED reads WAV and FLAC
    # headers; browser MediaRecorder audio needs WEBM_OPUS (or OGG_OPUS) with
    # STT_SAMPLE_RATE_HZ set to the recording rate, typically 48000.
    STT_ENCODING: str = Field("ENCODING_UNSPECIFIED")
    STT_SAMPLE_RATE_HZ: int | None = Field(None)

    # App
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(8080, validation_alias=AliasChoices("API_PORT", "PORT"))
    DEBUG: bool = Field(False)
    LOG_LEVEL: str = Field("INFO")
    CORS_ALLOW_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # Session pipeline
    DEFAULT_FROM_LANG: str = Field("sv")
    DEFAULT_TO_LANG: str = Field("en")
    SYNTHESIS_MODE: Literal["single", "chunked"] = Field("single")
    PROVIDER_TIMEOUT_SEC: float = Field(30.0)

    # Prometheus metrics
    METRICS_ENABLED: bool = Field(False)
    METRICS_PORT: int = Field(8001)

    # Temporary audio spool
    AUDIO_TMP_DIR: str | None = Field(None)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8"
    )


settings = Settings()
