"""Exceptions raised by the audio platform and transcription client."""

from typing import Optional


class VoiceNoteError(Exception):
    """Base class for all VoiceNote errors."""


class PermissionDenied(VoiceNoteError):
    """Microphone access was not granted."""


class CaptureFailure(VoiceNoteError):
    """The platform audio API failed to start or stop a capture."""


class EncodingFailure(VoiceNoteError):
    """The captured artifact could not be read or encoded."""


class TranscriptionError(VoiceNoteError):
    """The recognition request could not be completed."""


class ServiceError(TranscriptionError):
    """The recognition service answered with an explicit error payload."""

    def __init__(self, code: Optional[int] = None, message: Optional[str] = None,
                 status: Optional[str] = None):
        self.code = code
        self.message = message
        self.status = status
        super().__init__(f"Recognition service error {code}: {message} ({status})")


class NoSpeechDetected(TranscriptionError):
    """The recognition service returned no usable results."""
