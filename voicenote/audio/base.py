"""Abstract base classes for the platform audio API."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.recording import PermissionStatus, RecordingProfile, RecordingArtifact


class AbstractCaptureHandle(ABC):
    """Opaque reference to an in-progress recording.

    Owned by the recording service until ``stop_and_unload`` returns; the
    handle is invalid afterwards.
    """

    @abstractmethod
    async def stop_and_unload(self) -> RecordingArtifact:
        """Finalize the capture, release the device and return the stored artifact.
        
        Raises:
            CaptureFailure: If the handle was already unloaded or the device failed
        """
        pass

    @property
    @abstractmethod
    def uri(self) -> Optional[str]:
        """Artifact location, None until the capture is unloaded."""
        pass


class AbstractAudioPlatform(ABC):
    """Platform audio API consumed by the recording service."""

    @abstractmethod
    async def get_permission_status(self) -> PermissionStatus:
        """Current microphone permission without prompting."""
        pass

    @abstractmethod
    async def request_permission(self) -> PermissionStatus:
        """Ask for microphone permission and return the answer."""
        pass

    @abstractmethod
    async def set_audio_mode(self, allow_recording: bool) -> None:
        """Switch the audio session between recording and playback-only mode."""
        pass

    @abstractmethod
    async def start_capture(self, profile: RecordingProfile) -> AbstractCaptureHandle:
        """Begin capturing with the given profile.
        
        Raises:
            CaptureFailure: If the device is busy or the audio mode forbids recording
        """
        pass
