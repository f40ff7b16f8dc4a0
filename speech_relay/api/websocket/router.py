"""
WebSocket Router - Real-time Speech Translation Endpoint

This is the thin routing layer that delegates to SessionOrchestrator
for all WebSocket session management.
"""
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket

from speech_relay.services.connection_manager import connection_manager
from speech_relay.services.providers import get_turn_pipeline
from speech_relay.services.session import SessionOrchestrator, TurnPipeline

router = APIRouter()


@router.websocket("/")
@router.websocket("/ws")
@router.websocket("/ws/{session_id}")
async def ws_endpoint(
    websocket: WebSocket,
    session_id: Optional[str] = None,
    pipeline: TurnPipeline = Depends(get_turn_pipeline),
):
    """
    WebSocket endpoint for real-time speech translation.

    Path Parameters:
        session_id: Optional session ID, used until a `start` message
                    supplies one

    Message Types (JSON, client -> server):
        - start: {sessionId, fromLang, toLang} - begin a turn
        - chunk: {audio} - base64 audio fragment
        - stop: run transcription, translation and synthesis
        - ping: latency check

    Message Types (JSON, server -> client):
        connected, partial, final, audio, audio_chunk, audio_complete,
        end, error, pong
    """
    orchestrator = SessionOrchestrator(
        websocket=websocket,
        pipeline=pipeline,
        session_id=session_id,
        connections=connection_manager,
    )
    await orchestrator.run()
