"""Abstract base classes for transcription clients."""

from abc import ABC, abstractmethod

from ..models.recording import RecordingArtifact
from ..models.transcription import TranscriptResult


class AbstractTranscriptionClient(ABC):
    """Abstract base class for speech recognition clients."""

    def __init__(self, language: str = "zh-CN"):
        """Initialize client with primary language preference."""
        self.language = language

    @abstractmethod
    async def transcribe(self, artifact: RecordingArtifact) -> TranscriptResult:
        """Transcribe a finalized recording.
        
        Args:
            artifact: Recording stored by the audio platform
            
        Returns:
            TranscriptResult with the recognized text
            
        Raises:
            EncodingFailure: If the artifact cannot be read
            ServiceError: If the service answers with an error payload
            NoSpeechDetected: If the service returns no usable results
            TranscriptionError: On transport or response-format failures
        """
        pass
