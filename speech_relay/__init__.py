"""
Speech Relay

Real-time speech translation over WebSocket: audio in, transcript,
translation and synthesized speech out.
"""

__version__ = "1.0.0"
