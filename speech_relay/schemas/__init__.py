"""
Schemas Package

Pydantic models for WebSocket events.
"""

from speech_relay.schemas.websocket_events import (
    WebSocketEventBase,
    StartEvent,
    ChunkEvent,
    StopEvent,
    PingEvent,
    InboundEvent,
    inbound_event_adapter,
    INBOUND_EVENT_TYPES,
    ConnectedEvent,
    PartialEvent,
    FinalEvent,
    AudioEvent,
    AudioChunkEvent,
    AudioCompleteEvent,
    EndEvent,
    ErrorEvent,
    PongEvent,
    OutboundEvent,
)

__all__ = [
    "WebSocketEventBase",
    "StartEvent",
    "ChunkEvent",
    "StopEvent",
    "PingEvent",
    "InboundEvent",
    "inbound_event_adapter",
    "INBOUND_EVENT_TYPES",
    "ConnectedEvent",
    "PartialEvent",
    "FinalEvent",
    "AudioEvent",
    "AudioChunkEvent",
    "AudioCompleteEvent",
    "EndEvent",
    "ErrorEvent",
    "PongEvent",
    "OutboundEvent",
]
