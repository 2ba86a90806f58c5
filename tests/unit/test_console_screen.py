"""Unit tests for ConsoleNoteScreen."""

import io
import pytest
from unittest.mock import AsyncMock, Mock

from rich.console import Console

from voicenote.audio.base import AbstractAudioPlatform, AbstractCaptureHandle
from voicenote.errors import NoSpeechDetected
from voicenote.models.recording import PermissionStatus, RecordingArtifact
from voicenote.models.transcription import TranscriptResult
from voicenote.services.notifier import NoticePublisher
from voicenote.services.recording_service import RecordingService
from voicenote.ui.console_screen import ConsoleNoteScreen

TOPIC = "test.console.notice"


@pytest.fixture
def service():
    handle = Mock(spec=AbstractCaptureHandle)
    handle.stop_and_unload = AsyncMock(return_value=RecordingArtifact(
        uri="/tmp/recording.wav", duration_seconds=1.0, size_bytes=32044,
        sample_rate=16000, channels=1, total_chunks=16,
    ))
    platform = Mock(spec=AbstractAudioPlatform)
    platform.get_permission_status = AsyncMock(return_value=PermissionStatus.GRANTED)
    platform.request_permission = AsyncMock(return_value=PermissionStatus.GRANTED)
    platform.set_audio_mode = AsyncMock()
    platform.start_capture = AsyncMock(return_value=handle)
    client = Mock()
    client.transcribe = AsyncMock(return_value=TranscriptResult.from_transcript("会议纪要"))
    return RecordingService(platform, client, notifier=NoticePublisher(TOPIC))


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def screen(service, output):
    console = Console(file=output, width=100, force_terminal=False)
    return ConsoleNoteScreen(service, console=console, notice_topic=TOPIC)


@pytest.mark.unit
class TestConsoleNoteScreen:
    """Test cases for ConsoleNoteScreen."""
    
    def test_on_transcription_renders_all_fields(self, screen, output):
        screen.on_transcription(TranscriptResult.from_transcript("hello"))
        
        text = output.getvalue()
        assert len(screen.transcripts) == 1
        assert "Simplified Chinese" in text
        assert "Korean" in text
        assert "hello" in text
    
    @pytest.mark.asyncio
    async def test_quit_command(self, screen):
        assert await screen.handle_command("q") is False
    
    @pytest.mark.asyncio
    async def test_quit_while_recording_stops_first(self, screen, service):
        await screen.handle_command("")
        assert service.is_recording is True
        
        assert await screen.handle_command("quit") is False
        assert service.is_recording is False
    
    @pytest.mark.asyncio
    async def test_run_toggles_and_receives_transcript(self, screen, service, output):
        screen.console.input = Mock(side_effect=["", "", "q"])
        
        await screen.run()
        
        assert [r.transcription for r in screen.transcripts] == ["会议纪要"]
        assert service.has_handler is False
        assert "会议纪要" in output.getvalue()
    
    @pytest.mark.asyncio
    async def test_run_renders_notices(self, screen, service, output):
        service.transcription_client.transcribe.side_effect = NoSpeechDetected("empty")
        screen.console.input = Mock(side_effect=["", "", "q"])
        
        await screen.run()
        
        assert screen.transcripts == []
        assert "Speech not clear enough" in output.getvalue()
