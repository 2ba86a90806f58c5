"""Transcription-related data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict

from .recording import RecordingArtifact


@dataclass
class TranscriptResult:
    """Transcript payload handed to the note editor.

    Every language field carries the recognized text; no translation is
    performed. ``transcription`` is the field the editor saves.
    """
    transcription: str
    english: str
    simplified_chinese: str
    traditional_chinese: str
    italian: str
    spanish: str
    japanese: str
    korean: str
    confidence: Optional[float] = None
    language_code: Optional[str] = None

    @classmethod
    def from_transcript(cls, transcript: str, confidence: Optional[float] = None,
                        language_code: Optional[str] = None) -> "TranscriptResult":
        """Build a result with every language field set to ``transcript``."""
        return cls(
            transcription=transcript,
            english=transcript,
            simplified_chinese=transcript,
            traditional_chinese=transcript,
            italian=transcript,
            spanish=transcript,
            japanese=transcript,
            korean=transcript,
            confidence=confidence,
            language_code=language_code,
        )

    def to_dict(self) -> Dict[str, str]:
        """Consumer payload with camelCase keys."""
        return {
            "transcription": self.transcription,
            "english": self.english,
            "simplifiedChinese": self.simplified_chinese,
            "traditionalChinese": self.traditional_chinese,
            "italian": self.italian,
            "spanish": self.spanish,
            "japanese": self.japanese,
            "korean": self.korean,
        }


class OutcomeStatus(Enum):
    """How a stop request ended."""
    NOT_RECORDING = "not_recording"
    DELIVERED = "delivered"
    NO_CONSUMER = "no_consumer"
    NO_SPEECH = "no_speech"
    SERVICE_ERROR = "service_error"
    ENCODING_FAILED = "encoding_failed"
    TRANSCRIPTION_FAILED = "transcription_failed"
    CAPTURE_FAILED = "capture_failed"
    HANDLER_FAILED = "handler_failed"


@dataclass
class TranscriptionOutcome:
    """Result of stopping a recording."""
    status: OutcomeStatus
    result: Optional[TranscriptResult] = None
    artifact: Optional[RecordingArtifact] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is OutcomeStatus.DELIVERED
