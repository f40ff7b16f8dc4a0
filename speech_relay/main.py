"""
Speech Relay Backend - Main Application

This is the entry point for the FastAPI application.
It handles:
- The WebSocket endpoint for real-time speech translation
- Health check endpoints
- Redis connection lifecycle for the translation cache
"""
from contextlib import asynccontextmanager
import logging
from datetime import datetime, UTC

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from speech_relay import __version__
from speech_relay.api.websocket import router as ws_router
from speech_relay.config.redis import get_redis, close_redis
from speech_relay.config.settings import settings
from speech_relay.services.connection_manager import connection_manager
from speech_relay.services.metrics import start_metrics_server
from speech_relay.services.providers import get_turn_pipeline
from speech_relay.services.translation_cache import get_translation_cache

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # === STARTUP ===
    logger.info("🚀 Starting Speech Relay...")

    # The cache is optional: a Redis outage only costs cache hits
    try:
        redis = await get_redis()
        await redis.ping()
        logger.info("✅ Redis connected")
    except Exception as e:
        logger.warning(f"⚠️ Redis unavailable, translations will not be cached: {e}")

    if settings.METRICS_ENABLED:
        start_metrics_server(port=settings.METRICS_PORT)

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("🛑 Shutting down...")
    if get_turn_pipeline.cache_info().currsize:
        await get_turn_pipeline().wait_for_pending_writes()
    await close_redis()


app = FastAPI(
    title="Speech Relay",
    description="Real-time speech translation over WebSocket",
    version=__version__,
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Include WebSocket routes
app.include_router(ws_router)


@app.get("/")
@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": "WebSocket server running",
        "timestamp": datetime.now(UTC).isoformat(),
        "active_connections": connection_manager.get_total_connections(),
        "processing_turns": connection_manager.get_processing_count(),
        "cache": get_translation_cache().get_stats(),
    }
