"""Recording-related data models."""

from dataclasses import dataclass
from enum import Enum


class RecordingState(Enum):
    """Lifecycle state of the recording service."""
    IDLE = "idle"
    RECORDING = "recording"
    PROCESSING = "processing"


class PermissionStatus(Enum):
    """Microphone permission as reported by the audio platform."""
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class RecordingProfile:
    """Fixed audio encoding parameters required by the recognition service."""
    channels: int = 1
    sample_rate: int = 16000
    bit_depth: int = 16
    little_endian: bool = True
    signed: bool = True
    extension: str = ".wav"
    encoding: str = "LINEAR16"
    bit_rate: int = 128000  # Nominal, mirrors the mobile recording options

    @property
    def sample_width(self) -> int:
        """Bytes per sample."""
        return self.bit_depth // 8

    @property
    def bytes_per_second(self) -> int:
        return self.sample_rate * self.channels * self.sample_width


LINEAR16_PROFILE = RecordingProfile()


@dataclass
class RecordingArtifact:
    """A finalized capture stored on disk."""
    uri: str
    duration_seconds: float
    size_bytes: int
    sample_rate: int
    channels: int
    total_chunks: int
