"""Business Logic Services.

This package contains the service modules that implement the session
pipeline of Speech Relay.

Service Categories:
- Session: per-connection state machine and turn pipeline
- Translation cache: Redis-backed, content-addressed translation reuse
- Text chunker: word-boundary fragments for parallel synthesis
- Audio: base64 assembly, temporary spooling, data URLs

External integrations:
- gcp: Google Cloud Speech-to-Text and Text-to-Speech
- translation: Gemini via Vertex AI
"""
