"""
Session management module.

Provides the per-connection SessionOrchestrator, the Session state it owns
and the TurnPipeline it drives.
"""
from .state import Session, SessionState
from .pipeline import TurnPipeline, TurnResult
from .orchestrator import SessionOrchestrator, parse_frame

__all__ = [
    "Session",
    "SessionState",
    "TurnPipeline",
    "TurnResult",
    "SessionOrchestrator",
    "parse_frame",
]
