"""
WebSocket Event Schemas

Pydantic models for type-safe WebSocket event handling. Field names are
snake_case in Python and camelCase on the wire.
"""

from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Opaque client-supplied id, echoed back unchanged in `connected` and `end`
SessionId = Union[str, int]


class WebSocketEventBase(BaseModel):
    """Base model for all WebSocket events."""
    model_config = ConfigDict(populate_by_name=True)

    type: str

    def to_wire(self) -> dict:
        """Serialize with wire field names, leaving out unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Inbound Events (client -> server)
# =============================================================================

class StartEvent(WebSocketEventBase):
    """Begin a turn: reset the audio buffer and set the language pair."""
    type: Literal["start"] = "start"
    session_id: Optional[SessionId] = Field(None, alias="sessionId")
    from_lang: Optional[str] = Field(None, alias="fromLang")
    to_lang: Optional[str] = Field(None, alias="toLang")


class ChunkEvent(WebSocketEventBase):
    """A base64 audio fragment, optionally data-URL prefixed."""
    type: Literal["chunk"] = "chunk"
    audio: str


class StopEvent(WebSocketEventBase):
    """End of recording: run the turn pipeline."""
    type: Literal["stop"] = "stop"


class PingEvent(WebSocketEventBase):
    """Simple ping for latency check."""
    type: Literal["ping"] = "ping"


InboundEvent = Annotated[
    Union[StartEvent, ChunkEvent, StopEvent, PingEvent],
    Field(discriminator="type"),
]

inbound_event_adapter = TypeAdapter(InboundEvent)

INBOUND_EVENT_TYPES = frozenset({"start", "chunk", "stop", "ping"})


# =============================================================================
# Outbound Events (server -> client)
# =============================================================================

class ConnectedEvent(WebSocketEventBase):
    """Acknowledges a new connection or a `start`."""
    type: Literal["connected"] = "connected"
    session_id: Optional[SessionId] = Field(None, alias="sessionId")
    message: Optional[str] = None


class PartialEvent(WebSocketEventBase):
    """Transcript, sent before translation and synthesis finish."""
    type: Literal["partial"] = "partial"
    text: str


class FinalEvent(WebSocketEventBase):
    """Transcript and translation for the turn."""
    type: Literal["final"] = "final"
    original: str
    translated: str
    cached: bool
    from_lang: str = Field(alias="fromLang")
    to_lang: str = Field(alias="toLang")


class AudioEvent(WebSocketEventBase):
    """Whole-text synthesized audio as a data URL."""
    type: Literal["audio"] = "audio"
    url: str


class AudioChunkEvent(WebSocketEventBase):
    """One synthesized fragment, delivered in index order."""
    type: Literal["audio_chunk"] = "audio_chunk"
    url: str
    chunk_index: int = Field(alias="chunkIndex")
    total_chunks: int = Field(alias="totalChunks")


class AudioCompleteEvent(WebSocketEventBase):
    """All fragments of the turn have been sent."""
    type: Literal["audio_complete"] = "audio_complete"
    total_chunks: int = Field(alias="totalChunks")


class EndEvent(WebSocketEventBase):
    """The turn is complete."""
    type: Literal["end"] = "end"
    session_id: Optional[SessionId] = Field(None, alias="sessionId")


class ErrorEvent(WebSocketEventBase):
    """A turn or message failed; the connection stays open."""
    type: Literal["error"] = "error"
    error: str


class PongEvent(WebSocketEventBase):
    """Reply to ping."""
    type: Literal["pong"] = "pong"


OutboundEvent = Union[
    ConnectedEvent,
    PartialEvent,
    FinalEvent,
    AudioEvent,
    AudioChunkEvent,
    AudioCompleteEvent,
    EndEvent,
    ErrorEvent,
    PongEvent,
]
