"""
Text Chunker - word-boundary splitting for parallel speech synthesis.

Usage:
    from speech_relay.services.text_chunker import chunk_text

    chunk_text("Hello there, how are you doing today?", max_len=16)
    # ['Hello there, how', 'are you doing', 'today?']
"""
from typing import List

from speech_relay.config.constants import TTS_CHUNK_MAX_CHARS


def chunk_text(text: str, max_len: int = TTS_CHUNK_MAX_CHARS) -> List[str]:
    """
    Greedily pack words into fragments of at most ``max_len`` characters.

    A word joins the running fragment while
    ``len(fragment) + len(word) + 1 <= max_len``; otherwise the fragment is
    closed and the word starts the next one. Words are never split, so a
    single word longer than ``max_len`` becomes its own oversized fragment.

    Args:
        text: Text to split
        max_len: Maximum fragment length in characters

    Returns:
        Ordered fragments; joining them with single spaces gives back the
        text with its whitespace collapsed. Blank input yields an empty list.
    """
    if max_len <= 0:
        raise ValueError(f"max_len must be positive, got {max_len}")

    fragments: List[str] = []
    current = ""

    for word in text.split():
        if not current:
            current = word
        elif len(current) + len(word) + 1 <= max_len:
            current = f"{current} {word}"
        else:
            fragments.append(current)
            current = word

    if current:
        fragments.append(current)

    return fragments
