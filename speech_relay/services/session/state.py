"""
Per-connection session state.

One Session exists per WebSocket connection and is mutated only by that
connection's task, so it needs no locking.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from speech_relay.schemas.websocket_events import SessionId

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    PROCESSING = "processing"


@dataclass
class Session:
    """Audio buffer, language pair and turn state of one connection."""
    session_id: Optional[SessionId] = None
    from_lang: Optional[str] = None
    to_lang: Optional[str] = None
    audio_chunks: List[str] = field(default_factory=list)
    state: SessionState = SessionState.IDLE

    def start(self, session_id: Optional[SessionId], from_lang: str, to_lang: str) -> None:
        """Reset the buffer and begin collecting audio for a new turn."""
        self.session_id = session_id
        self.from_lang = from_lang
        self.to_lang = to_lang
        self.audio_chunks = []
        self.state = SessionState.COLLECTING

    def append_chunk(self, audio: str) -> None:
        """Buffer an audio fragment; accepted in any state."""
        if self.state is not SessionState.COLLECTING:
            logger.debug(f"[Session] chunk received while {self.state.value}, appending anyway")
        self.audio_chunks.append(audio)

    def begin_turn(self) -> None:
        self.state = SessionState.PROCESSING

    def finish_turn(self) -> None:
        self.state = SessionState.IDLE

    @property
    def has_audio(self) -> bool:
        return bool(self.audio_chunks)
