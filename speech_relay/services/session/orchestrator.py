import json
import logging
from typing import TYPE_CHECKING, Optional

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from starlette.websockets import WebSocketState

from speech_relay.config.settings import settings
from speech_relay.schemas.websocket_events import (
    INBOUND_EVENT_TYPES,
    InboundEvent,
    inbound_event_adapter,
    StartEvent,
    ChunkEvent,
    StopEvent,
    PingEvent,
    OutboundEvent,
    ConnectedEvent,
    ErrorEvent,
    PongEvent,
)
from speech_relay.services.exceptions import AudioDecodeError, ProtocolError, RelayError
from speech_relay.services.metrics import turns_processed
from speech_relay.services.session.pipeline import TurnPipeline
from speech_relay.services.session.state import Session

if TYPE_CHECKING:
    from speech_relay.services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


def parse_frame(text_data: str) -> Optional[InboundEvent]:
    """
    Parse an inbound JSON frame.

    Returns:
        The typed event, or None when the `type` is not one we handle

    Raises:
        ProtocolError: for invalid JSON, a non-object frame or invalid fields
    """
    try:
        data = json.loads(text_data)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ProtocolError("Frame is not a JSON object")

    if data.get("type") not in INBOUND_EVENT_TYPES:
        return None

    try:
        return inbound_event_adapter.validate_python(data)
    except ValidationError as e:
        raise ProtocolError(f"Invalid {data['type']} frame: {e.error_count()} error(s)") from e


class SessionOrchestrator:
    """
    Orchestrates the lifecycle of one WebSocket translation session.
    Handles:
    - Connection setup and the initial greeting
    - Message loop processing, one frame at a time
    - Session state transitions around each turn
    - Cleanup on disconnect
    """

    def __init__(
        self,
        websocket: WebSocket,
        pipeline: TurnPipeline,
        session_id: Optional[str] = None,
        connections: Optional["ConnectionManager"] = None,
    ):
        self.websocket = websocket
        self.pipeline = pipeline
        self.connections = connections
        self.session = Session(session_id=session_id)
        self._connection_id: Optional[str] = None
        self.closed = False

    async def run(self):
        """
        Main entry point for handling a WebSocket connection.
        """
        await self.websocket.accept()
        if self.connections is not None:
            self._connection_id = await self.connections.connect(self.session)

        client = self.websocket.client
        logger.info(f"[Session] WS connected from {client.host if client else 'unknown'}")

        try:
            await self.send(ConnectedEvent(message="WebSocket ready"))
            await self._message_loop()
        except WebSocketDisconnect:
            logger.info(f"[Session] Client disconnected (session {self.session.session_id})")
        finally:
            await self._cleanup()

    async def _message_loop(self):
        """
        Main message processing loop. Each frame is handled to completion,
        including a full turn, before the next one is read.
        """
        while True:
            if self.closed:
                # a send already found the peer gone
                raise WebSocketDisconnect(1006)

            message = await self.websocket.receive()

            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            if message.get("text") is not None:
                await self.handle_text_message(message["text"])
            elif message.get("bytes") is not None:
                logger.warning("[Session] Binary frame ignored; audio must be sent as chunk messages")
            else:
                logger.warning("[Session] Unexpected message structure")

    async def handle_text_message(self, text_data: str):
        """
        Handle one JSON frame. Errors never propagate: protocol errors are
        logged and anything else is reported to the client.
        """
        try:
            event = parse_frame(text_data)
            if event is None:
                logger.warning(f"[Session] Unknown message type: {self._peek_type(text_data)}")
                return
            await self.dispatch(event)

        except ProtocolError as e:
            logger.warning(f"[Session] {e}")

        except WebSocketDisconnect:
            raise

        except Exception as e:
            logger.exception(f"[Session] WS error: {e}")
            await self.send(ErrorEvent(error=str(e)))

    async def dispatch(self, event: InboundEvent):
        if isinstance(event, StartEvent):
            await self._handle_start(event)
        elif isinstance(event, ChunkEvent):
            self.session.append_chunk(event.audio)
        elif isinstance(event, StopEvent):
            await self._handle_stop()
        elif isinstance(event, PingEvent):
            await self.send(PongEvent())

    async def _handle_start(self, event: StartEvent):
        from_lang = event.from_lang
        to_lang = event.to_lang
        if not from_lang or not to_lang:
            logger.warning(
                f"[Session] start without language pair ({from_lang!r}, {to_lang!r}), "
                f"falling back to {settings.DEFAULT_FROM_LANG} -> {settings.DEFAULT_TO_LANG}"
            )
            from_lang = from_lang or settings.DEFAULT_FROM_LANG
            to_lang = to_lang or settings.DEFAULT_TO_LANG

        session_id = event.session_id if event.session_id is not None else self.session.session_id
        self.session.start(session_id, from_lang, to_lang)
        logger.info(f"[Session] {session_id} started ({from_lang} -> {to_lang})")
        await self.send(ConnectedEvent(session_id=session_id))

    async def _handle_stop(self):
        session = self.session
        if session.from_lang is None or session.to_lang is None:
            # stop before any start: chunks may still have arrived
            session.from_lang = session.from_lang or settings.DEFAULT_FROM_LANG
            session.to_lang = session.to_lang or settings.DEFAULT_TO_LANG

        language_pair = f"{session.from_lang}-{session.to_lang}"
        status = "error"
        session.begin_turn()
        try:
            if not session.has_audio:
                raise AudioDecodeError("No audio received")
            await self.pipeline.run(session, emit=self.send)
            status = "success"
        except RelayError as e:
            logger.warning(f"[Session] Turn failed for {session.session_id}: {type(e).__name__}: {e}")
            await self.send(ErrorEvent(error=str(e)))
        finally:
            turns_processed.labels(status=status, language_pair=language_pair).inc()
            session.finish_turn()

    async def send(self, event: OutboundEvent):
        """
        Send an event. Once the client has gone away events are dropped, so
        a turn in flight still runs to completion and writes the cache.
        """
        if self.closed or not self._is_connected():
            logger.debug(f"[Session] Dropping {event.type} for closed connection")
            return
        try:
            await self.websocket.send_json(event.to_wire())
        except (WebSocketDisconnect, OSError) as e:
            self.closed = True
            logger.info(f"[Session] Client gone while sending {event.type} ({type(e).__name__}), dropping further events")

    def _is_connected(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def _cleanup(self):
        if self.connections is not None and self._connection_id is not None:
            await self.connections.disconnect(self._connection_id)
        logger.info("[Session] WS closed")

    @staticmethod
    def _peek_type(text_data: str) -> Optional[str]:
        try:
            return json.loads(text_data).get("type")
        except (json.JSONDecodeError, AttributeError):
            return None
