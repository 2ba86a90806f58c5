"""Helpers for turning capture artifacts into request content."""

import asyncio
import base64
import logging
from pathlib import Path

from ..errors import EncodingFailure

logger = logging.getLogger(__name__)


def encode_audio_bytes(audio: bytes) -> str:
    """Base64-encode raw audio for a JSON request body."""
    return base64.b64encode(audio).decode('ascii')


async def read_audio_file_as_base64(path: str) -> str:
    """Read the whole file at ``path`` and return it base64-encoded.
    
    Raises:
        EncodingFailure: If the file cannot be read
    """
    try:
        audio = await asyncio.to_thread(Path(path).read_bytes)
    except OSError as e:
        raise EncodingFailure(f"Could not read recording {path}: {e}") from e
    
    logger.debug(f"Read {len(audio)} bytes from {path}")
    return encode_audio_bytes(audio)
