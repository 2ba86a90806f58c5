"""PyAudio implementation of the platform audio API."""

import asyncio
import pyaudio
import random
import string
import tempfile
import wave
import logging
from datetime import datetime
from pathlib import Path
from threading import Thread, Event
from typing import Optional, List

from .base import AbstractAudioPlatform, AbstractCaptureHandle
from ..errors import CaptureFailure
from ..models.recording import PermissionStatus, RecordingProfile, RecordingArtifact


logger = logging.getLogger(__name__)

_PYAUDIO_FORMATS = {
    8: pyaudio.paInt8,
    16: pyaudio.paInt16,
    24: pyaudio.paInt24,
    32: pyaudio.paInt32,
}


class PyAudioCaptureHandle(AbstractCaptureHandle):
    """Continuous capture into memory on a background thread, stored as WAV on unload."""
    
    def __init__(
        self,
        pyaudio_instance: pyaudio.PyAudio,
        profile: RecordingProfile,
        output_path: Path,
        chunk_size: int = 1024,
        input_device_index: Optional[int] = None,
    ):
        """Initialize capture handle.
        
        Args:
            pyaudio_instance: Initialized PortAudio wrapper owned by the platform
            profile: Recording profile (channels, sample rate, bit depth)
            output_path: Where the WAV artifact is written on unload
            chunk_size: Frames read from the device per chunk
            input_device_index: PortAudio device index, None for the default device
        """
        if profile.bit_depth not in _PYAUDIO_FORMATS:
            raise CaptureFailure(f"Unsupported bit depth: {profile.bit_depth}")
        
        self.pyaudio_instance = pyaudio_instance
        self.profile = profile
        self.output_path = output_path
        self.chunk_size = chunk_size
        self.input_device_index = input_device_index
        
        # Recording thread management
        self.recording_thread: Optional[Thread] = None
        self.stop_event = Event()
        self.stream = None
        self.error: Optional[Exception] = None
        
        # Captured audio
        self.audio_data: List[bytes] = []
        self.start_time: Optional[datetime] = None
        self.total_chunks = 0
        self.unloaded = False
        self._uri: Optional[str] = None
    
    @property
    def uri(self) -> Optional[str]:
        return self._uri
    
    def start(self) -> None:
        """Open the input stream and start the recording thread.
        
        Blocking; called from a worker thread by the platform.
        """
        try:
            self.stream = self.pyaudio_instance.open(
                format=_PYAUDIO_FORMATS[self.profile.bit_depth],
                channels=self.profile.channels,
                rate=self.profile.sample_rate,
                input=True,
                input_device_index=self.input_device_index,
                frames_per_buffer=self.chunk_size,
                stream_callback=None
            )
        except (OSError, ValueError) as e:
            raise CaptureFailure(f"Could not open input stream: {e}") from e
        
        logger.info(f"Audio stream opened: {self.profile.sample_rate}Hz, "
                    f"{self.profile.channels} channel(s), {self.chunk_size} frames/chunk")
        
        self.stop_event.clear()
        self.start_time = datetime.now()
        self.total_chunks = 0
        self.recording_thread = Thread(target=self._record_continuously, daemon=True)
        self.recording_thread.name = "AudioCaptureThread"
        self.recording_thread.start()
    
    def _record_continuously(self) -> None:
        """Internal method: continuous recording loop in background thread."""
        try:
            while not self.stop_event.is_set():
                audio_chunk = self.stream.read(self.chunk_size, exception_on_overflow=False)
                self.audio_data.append(audio_chunk)
                self.total_chunks += 1
        except OSError as e:
            logger.error(f"Audio stream read failed: {e}")
            self.error = e
    
    async def stop_and_unload(self) -> RecordingArtifact:
        if self.unloaded:
            raise CaptureFailure("Recording has already been stopped and unloaded")
        self.unloaded = True
        return await asyncio.to_thread(self._stop_and_save)
    
    def _stop_and_save(self) -> RecordingArtifact:
        """Stop the recording thread, close the stream and write the WAV artifact."""
        logger.info("Stopping audio capture")
        self.stop_event.set()
        
        if self.recording_thread and self.recording_thread.is_alive():
            self.recording_thread.join(timeout=2.0)
            if self.recording_thread.is_alive():
                # Stream stays open while the read thread may still be using it
                logger.warning("Recording thread did not stop cleanly, leaving stream open")
                raise CaptureFailure("Recording thread did not stop within 2 seconds")
        
        try:
            if self.stream:
                self.stream.stop_stream()
                self.stream.close()
        except OSError as e:
            raise CaptureFailure(f"Could not close input stream: {e}") from e
        finally:
            self.stream = None
        
        if self.error:
            raise CaptureFailure(f"Audio device error during recording: {self.error}")
        
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            with wave.open(str(self.output_path), 'wb') as wf:
                wf.setnchannels(self.profile.channels)
                wf.setsampwidth(self.profile.sample_width)
                wf.setframerate(self.profile.sample_rate)
                for chunk in self.audio_data:
                    wf.writeframes(chunk)
        except OSError as e:
            raise CaptureFailure(f"Could not write recording to {self.output_path}: {e}") from e
        
        audio_bytes = sum(len(chunk) for chunk in self.audio_data)
        self.audio_data = []
        self._uri = str(self.output_path)
        
        artifact = RecordingArtifact(
            uri=self._uri,
            duration_seconds=audio_bytes / self.profile.bytes_per_second,
            size_bytes=self.output_path.stat().st_size,
            sample_rate=self.profile.sample_rate,
            channels=self.profile.channels,
            total_chunks=self.total_chunks,
        )
        logger.info(f"Recording stored at {artifact.uri} "
                    f"({artifact.duration_seconds:.2f}s, {artifact.total_chunks} chunks)")
        return artifact


class PyAudioPlatform(AbstractAudioPlatform):
    """Desktop audio platform backed by PortAudio."""
    
    def __init__(self,
                 recordings_dir: Optional[str] = None,
                 chunk_size: int = 1024,
                 input_device_index: Optional[int] = None):
        """Initialize the platform.
        
        Args:
            recordings_dir: Directory for WAV artifacts, system temp directory if None
            chunk_size: Frames read from the device per chunk
            input_device_index: PortAudio device index, None for the default device
        """
        self.recordings_dir = Path(recordings_dir) if recordings_dir else Path(tempfile.gettempdir())
        self.chunk_size = chunk_size
        self.input_device_index = input_device_index
        self.permission = PermissionStatus.UNDETERMINED
        self.pyaudio_instance: Optional[pyaudio.PyAudio] = None
        self.allows_recording = False
    
    async def get_permission_status(self) -> PermissionStatus:
        return self.permission
    
    async def request_permission(self) -> PermissionStatus:
        """Grant access when PortAudio can see at least one input device."""
        has_input = await asyncio.to_thread(self._has_input_device)
        self.permission = PermissionStatus.GRANTED if has_input else PermissionStatus.DENIED
        logger.info(f"Microphone permission: {self.permission.value}")
        return self.permission
    
    def _has_input_device(self) -> bool:
        probe = pyaudio.PyAudio()
        try:
            if self.input_device_index is not None:
                try:
                    info = probe.get_device_info_by_index(self.input_device_index)
                except (OSError, ValueError) as e:
                    logger.debug(f"Input device {self.input_device_index} unavailable: {e}")
                    return False
                return info.get('maxInputChannels', 0) > 0
            
            for index in range(probe.get_device_count()):
                info = probe.get_device_info_by_index(index)
                if info.get('maxInputChannels', 0) > 0:
                    logger.debug(f"Found input device: {info.get('name')}")
                    return True
            return False
        finally:
            probe.terminate()
    
    async def set_audio_mode(self, allow_recording: bool) -> None:
        if allow_recording and self.pyaudio_instance is None:
            self.pyaudio_instance = await asyncio.to_thread(pyaudio.PyAudio)
        elif not allow_recording and self.pyaudio_instance is not None:
            instance, self.pyaudio_instance = self.pyaudio_instance, None
            await asyncio.to_thread(instance.terminate)
        self.allows_recording = allow_recording
        logger.debug(f"Audio mode set: allows_recording={allow_recording}")
    
    async def start_capture(self, profile: RecordingProfile) -> PyAudioCaptureHandle:
        if not self.allows_recording or self.pyaudio_instance is None:
            raise CaptureFailure("Audio mode does not allow recording")
        
        handle = PyAudioCaptureHandle(
            pyaudio_instance=self.pyaudio_instance,
            profile=profile,
            output_path=self.recordings_dir / self._artifact_filename(profile),
            chunk_size=self.chunk_size,
            input_device_index=self.input_device_index,
        )
        await asyncio.to_thread(handle.start)
        logger.info("Audio capture started")
        return handle
    
    @staticmethod
    def _artifact_filename(profile: RecordingProfile) -> str:
        # Include random suffix to ensure uniqueness
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=4))
        return f"recording_{timestamp}_{random_suffix}{profile.extension}"
