"""Data models for the VoiceNote application."""

from .recording import (
    RecordingState,
    PermissionStatus,
    RecordingProfile,
    RecordingArtifact,
    LINEAR16_PROFILE,
)
from .transcription import TranscriptResult, OutcomeStatus, TranscriptionOutcome
from .notices import Notice, NoticeLevel

__all__ = [
    "RecordingState",
    "PermissionStatus",
    "RecordingProfile",
    "RecordingArtifact",
    "LINEAR16_PROFILE",
    "TranscriptResult",
    "OutcomeStatus",
    "TranscriptionOutcome",
    "Notice",
    "NoticeLevel",
]
