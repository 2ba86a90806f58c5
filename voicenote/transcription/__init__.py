"""Transcription module for VoiceNote."""

from .base import AbstractTranscriptionClient
from .encoding import encode_audio_bytes, read_audio_file_as_base64
from .google_backend import GoogleSpeechClient, DEFAULT_ENDPOINT_URL

__all__ = [
    "AbstractTranscriptionClient",
    "encode_audio_bytes",
    "read_audio_file_as_base64",
    "GoogleSpeechClient",
    "DEFAULT_ENDPOINT_URL",
]
