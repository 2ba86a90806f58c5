"""Recording service that owns the capture lifecycle and hands audio to transcription."""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from ..audio.base import AbstractAudioPlatform, AbstractCaptureHandle
from ..errors import (
    EncodingFailure,
    NoSpeechDetected,
    PermissionDenied,
    ServiceError,
    TranscriptionError,
)
from ..models.notices import Notice, NoticeLevel
from ..models.recording import (
    LINEAR16_PROFILE,
    PermissionStatus,
    RecordingArtifact,
    RecordingProfile,
    RecordingState,
)
from ..models.transcription import OutcomeStatus, TranscriptionOutcome, TranscriptResult
from ..transcription.base import AbstractTranscriptionClient
from .notifier import Notifier, NoticePublisher

logger = logging.getLogger(__name__)

TranscriptionHandler = Callable[[TranscriptResult], Union[None, Awaitable[None]]]

NO_SPEECH_MESSAGE = (
    "Unable to recognize voice content, please try again\n\n"
    "Possible reasons:\n"
    "- Recording time too short\n"
    "- Environment too noisy\n"
    "- Speech not clear enough"
)


class RecordingService:
    """Manages one recording at a time: start, stop, and delivery of the transcript.
    
    State moves IDLE -> RECORDING -> PROCESSING -> IDLE. Every failure is
    reported through the notifier and returns the service to IDLE, so the
    user can simply toggle again.
    """
    
    def __init__(self,
                 platform: AbstractAudioPlatform,
                 transcription_client: AbstractTranscriptionClient,
                 notifier: Optional[Notifier] = None,
                 handler: Optional[TranscriptionHandler] = None,
                 profile: RecordingProfile = LINEAR16_PROFILE):
        """Initialize recording service.
        
        Args:
            platform: Audio API used to capture microphone input
            transcription_client: Client that turns a recording into text
            notifier: Receives user-visible notices; publishes over pubsub if None
            handler: Transcript consumer, may also be set with register_handler
            profile: Recording profile, must match what the client declares
        """
        self.platform = platform
        self.transcription_client = transcription_client
        self.notifier = notifier or NoticePublisher()
        self.profile = profile
        self.state = RecordingState.IDLE
        self.last_artifact: Optional[RecordingArtifact] = None
        self._handler: Optional[TranscriptionHandler] = handler
        self._capture: Optional[AbstractCaptureHandle] = None
    
    @property
    def is_recording(self) -> bool:
        return self.state is RecordingState.RECORDING
    
    @property
    def is_processing(self) -> bool:
        return self.state is RecordingState.PROCESSING
    
    @property
    def has_handler(self) -> bool:
        return self._handler is not None
    
    def register_handler(self, handler: TranscriptionHandler) -> None:
        """Install the transcript consumer, replacing any previous one."""
        logger.info("Registering transcription handler")
        self._handler = handler
    
    def unregister_handler(self) -> None:
        logger.info("Unregistering transcription handler")
        self._handler = None
    
    async def toggle_recording(self) -> Optional[TranscriptionOutcome]:
        """Start when idle, stop when recording.
        
        Returns:
            The stop outcome, or None when a recording was (attempted to be) started
        """
        if self.is_recording:
            return await self.stop_recording()
        await self.start_recording()
        return None
    
    async def start_recording(self) -> bool:
        """Request permission, switch to recording mode and begin capture.
        
        Returns:
            True if capture started
        """
        if self.state is not RecordingState.IDLE:
            logger.warning(f"Ignoring start request while {self.state.value}")
            return False
        
        mode_changed = False
        try:
            logger.info("Requesting microphone permission...")
            await self._ensure_permission()
            
            await self.platform.set_audio_mode(allow_recording=True)
            mode_changed = True
            
            logger.info("Starting recording...")
            self._capture = await self.platform.start_capture(self.profile)
            self.state = RecordingState.RECORDING
            logger.info(f"Recording started with {self.profile.encoding} format")
            return True
            
        except PermissionDenied as e:
            logger.warning(f"Microphone permission not granted: {e}")
            self._notify("Permission needed",
                         "Please grant microphone permission to record audio.",
                         NoticeLevel.WARNING)
            return False
        except Exception as e:
            logger.error(f"Failed to start recording: {e}")
            self._capture = None
            self.state = RecordingState.IDLE
            if mode_changed:
                await self._restore_audio_mode()
            self._notify("Error", f"Failed to start recording: {e}", NoticeLevel.ERROR)
            return False
    
    async def stop_recording(self) -> TranscriptionOutcome:
        """Finalize the capture and deliver its transcript to the handler.
        
        Returns:
            TranscriptionOutcome describing how processing ended
        """
        if self._capture is None or not self.is_recording:
            logger.debug("Stop requested with no active recording")
            return TranscriptionOutcome(status=OutcomeStatus.NOT_RECORDING)
        
        logger.info("Stopping recording...")
        # Leave RECORDING before any I/O so the UI reflects intent immediately
        self.state = RecordingState.PROCESSING
        capture, self._capture = self._capture, None
        
        try:
            try:
                artifact = await capture.stop_and_unload()
            finally:
                await self._restore_audio_mode()
            self.last_artifact = artifact
            logger.info(f"Recording stopped and stored at {artifact.uri}")
            return await self._process(artifact)
        except Exception as e:
            logger.error(f"Failed to stop recording: {e}")
            self._notify("Error", f"Failed to stop recording: {e}", NoticeLevel.ERROR)
            return TranscriptionOutcome(status=OutcomeStatus.CAPTURE_FAILED, error=str(e))
        finally:
            self.state = RecordingState.IDLE
    
    async def _process(self, artifact: RecordingArtifact) -> TranscriptionOutcome:
        if self._handler is None:
            logger.info("No handler registered, skipping transcription")
            self._notify("Tip", "Recording saved, but no active note page to receive text")
            return TranscriptionOutcome(status=OutcomeStatus.NO_CONSUMER, artifact=artifact)
        
        logger.info(f"Sending recording to {type(self.transcription_client).__name__}")
        try:
            result = await self.transcription_client.transcribe(artifact)
        except ServiceError as e:
            self._notify(
                "API Error",
                f"Error Code: {e.code if e.code is not None else 'N/A'}\n\n"
                f"Error Message: {e.message or 'Unknown Error'}\n\n"
                f"Status: {e.status or 'N/A'}",
                NoticeLevel.ERROR,
            )
            return self._failed(OutcomeStatus.SERVICE_ERROR, artifact, e)
        except NoSpeechDetected as e:
            logger.info("No transcription results")
            self._notify("Tip", NO_SPEECH_MESSAGE, NoticeLevel.WARNING)
            return self._failed(OutcomeStatus.NO_SPEECH, artifact, e)
        except EncodingFailure as e:
            logger.error(f"Could not encode recording: {e}")
            self._notify("Error", f"Voice recognition failed: {e}", NoticeLevel.ERROR)
            return self._failed(OutcomeStatus.ENCODING_FAILED, artifact, e)
        except TranscriptionError as e:
            logger.error(f"Transcription failed: {e}")
            self._notify("Error", f"Voice recognition failed: {e}", NoticeLevel.ERROR)
            return self._failed(OutcomeStatus.TRANSCRIPTION_FAILED, artifact, e)
        except Exception as e:
            logger.exception("Unexpected error during transcription")
            self._notify("Error", f"Voice recognition failed: {e}", NoticeLevel.ERROR)
            return self._failed(OutcomeStatus.TRANSCRIPTION_FAILED, artifact, e)
        
        logger.info(f"Recognized text: {result.transcription}")
        
        # The consumer may have gone away while the request was in flight
        handler = self._handler
        if handler is None:
            logger.info("Handler unregistered during transcription, result not delivered")
            return TranscriptionOutcome(status=OutcomeStatus.NO_CONSUMER, result=result,
                                        artifact=artifact)
        try:
            delivered = handler(result)
            if inspect.isawaitable(delivered):
                await delivered
        except Exception as e:
            logger.exception("Transcription handler raised")
            self._notify("Error", f"Failed to deliver transcription: {e}", NoticeLevel.ERROR)
            return TranscriptionOutcome(status=OutcomeStatus.HANDLER_FAILED, result=result,
                                        artifact=artifact, error=str(e))
        
        return TranscriptionOutcome(status=OutcomeStatus.DELIVERED, result=result, artifact=artifact)
    
    async def _ensure_permission(self) -> None:
        """Raise PermissionDenied unless the microphone may be used."""
        status = await self.platform.get_permission_status()
        if status is not PermissionStatus.GRANTED:
            status = await self.platform.request_permission()
        if status is not PermissionStatus.GRANTED:
            raise PermissionDenied(f"Microphone permission {status.value}")
    
    async def _restore_audio_mode(self) -> None:
        try:
            await self.platform.set_audio_mode(allow_recording=False)
        except Exception as e:
            logger.error(f"Failed to restore audio mode: {e}")
    
    @staticmethod
    def _failed(status: OutcomeStatus, artifact: RecordingArtifact,
                error: Exception) -> TranscriptionOutcome:
        return TranscriptionOutcome(status=status, artifact=artifact, error=str(error))
    
    def _notify(self, title: str, message: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        try:
            self.notifier(Notice(title=title, message=message, level=level))
        except Exception as e:
            logger.error(f"Failed to publish notice '{title}': {e}")
