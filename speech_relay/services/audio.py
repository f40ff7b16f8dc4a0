"""
Audio helpers for the turn pipeline.

- Assembling the base64 chunks a client streamed into raw bytes
- Spooling the decoded recording to a temporary file for the duration of a
  transcription call
- Wrapping synthesized audio into the data URLs sent back to the client
"""
import base64
import binascii
import logging
import os
import re
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from speech_relay.config.constants import (
    AUDIO_TMP_PREFIX,
    AUDIO_TMP_SUFFIX,
    TTS_AUDIO_MIME_TYPE,
)
from speech_relay.services.exceptions import AudioDecodeError

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:[\w/+.-]+(;[\w=.-]+)*;base64,")


def strip_data_url_prefix(payload: str) -> str:
    """Remove a leading ``data:<mime>;base64,`` prefix if present."""
    return DATA_URL_PREFIX.sub("", payload, count=1)


def decode_audio_chunks(chunks: Sequence[str]) -> bytes:
    """
    Join base64 chunks in receipt order and decode them.

    Chunks are concatenated before decoding, so a client may split the
    base64 text at any position. A data-URL prefix at the start of the
    joined payload is stripped first.

    Raises:
        AudioDecodeError: if there is no audio or it is not valid base64
    """
    if not chunks:
        raise AudioDecodeError("No audio received")

    payload = strip_data_url_prefix("".join(chunks)).strip()
    if not payload:
        raise AudioDecodeError("No audio received")

    try:
        audio = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AudioDecodeError(f"Invalid audio payload: {e}") from e

    if not audio:
        raise AudioDecodeError("No audio received")

    return audio


@contextmanager
def spooled_audio(audio: bytes, directory: Optional[str] = None) -> Iterator[str]:
    """
    Write audio to a temporary file and remove it on exit.

    The file is removed unconditionally, including when the body raises.

    Yields:
        Path of the temporary file
    """
    fd, tmp_path = tempfile.mkstemp(
        suffix=AUDIO_TMP_SUFFIX, prefix=AUDIO_TMP_PREFIX, dir=directory
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(audio)
        logger.debug(f"Spooled {len(audio)} bytes of audio to {tmp_path}")
        yield tmp_path
    finally:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass


def to_data_url(audio: bytes, mime_type: str = TTS_AUDIO_MIME_TYPE) -> str:
    """Encode audio bytes as a ``data:<mime>;base64,...`` URL."""
    encoded = base64.b64encode(audio).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
