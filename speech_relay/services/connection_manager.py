"""
Connection Manager

Tracks the open WebSocket connections and their sessions for the health
endpoint. Sessions never cross connections, so this registry is the only
place that sees all of them.
"""
import asyncio
import logging
import uuid
from typing import Dict

from speech_relay.services.metrics import active_connections_gauge
from speech_relay.services.session.state import Session, SessionState

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Registry of live connections (connection_id -> Session)."""

    def __init__(self):
        self._connections: Dict[str, Session] = {}
        self._lock = asyncio.Lock()

    async def connect(self, session: Session) -> str:
        """Register a connection and return its id."""
        connection_id = uuid.uuid4().hex
        async with self._lock:
            self._connections[connection_id] = session
        active_connections_gauge.inc()
        logger.info(f"Connection {connection_id} opened ({len(self._connections)} active)")
        return connection_id

    async def disconnect(self, connection_id: str) -> None:
        """Remove a connection."""
        async with self._lock:
            session = self._connections.pop(connection_id, None)
        if session is not None:
            active_connections_gauge.dec()
            logger.info(f"Connection {connection_id} closed ({len(self._connections)} active)")

    def get_total_connections(self) -> int:
        return len(self._connections)

    def get_processing_count(self) -> int:
        return sum(
            1 for session in self._connections.values()
            if session.state is SessionState.PROCESSING
        )


# Singleton instance
connection_manager = ConnectionManager()
