"""
WebSocket API module.

Provides the WebSocket router for real-time speech translation.
"""
from .router import router

__all__ = ["router"]
