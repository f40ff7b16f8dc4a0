"""
Session Pipeline Exceptions

Custom exceptions for relay errors. Everything raised during a turn derives
from RelayError so the session can report it as a single error frame.
"""


class RelayError(Exception):
    """Base exception for relay errors"""
    pass


class ProtocolError(RelayError):
    """Raised for a malformed inbound frame (bad JSON, invalid fields)"""
    pass


class AudioDecodeError(RelayError):
    """Raised when the buffered audio is empty or not valid base64"""
    pass


class TranscriptionError(RelayError):
    """Raised when speech-to-text fails or returns no text"""
    pass


class TranslationError(RelayError):
    """Raised when the translation provider fails"""
    pass


class SynthesisError(RelayError):
    """Raised when text-to-speech fails"""
    pass


class CacheError(RelayError):
    """Raised by the cache store; never escapes the cache adapter"""
    pass


class ProviderTimeoutError(RelayError, TimeoutError):
    """Raised when a provider call exceeds its time budget"""
    pass
