"""Pytest configuration and fixtures for VoiceNote tests."""

import base64
import pytest
import tempfile
import time
import logging
import wave
from pathlib import Path
from unittest.mock import Mock, patch
import numpy as np
from aiohttp import web
from aiohttp.test_utils import TestServer

from voicenote.models.recording import RecordingArtifact


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def sample_audio_chunk():
    """Generate a sample audio chunk for testing."""
    # Generate 1024 samples of 16-bit audio (sine wave)
    sample_rate = 16000
    duration = 1024 / sample_rate  # ~0.064 seconds
    freq = 440  # A4 note
    
    t = np.linspace(0, duration, 1024, False)
    wave_data = np.sin(2 * np.pi * freq * t)
    
    # Convert to 16-bit integers
    audio_data = (wave_data * 32767).astype(np.int16)
    return audio_data.tobytes()


@pytest.fixture
def mock_pyaudio(sample_audio_chunk):
    """Mock PyAudio for testing without actual audio hardware."""
    with patch('pyaudio.PyAudio') as mock_pyaudio_class:
        mock_pyaudio_instance = Mock()
        mock_stream = Mock()
        
        def read_chunk(frames, exception_on_overflow=True):
            # Pace reads roughly like a real device would
            time.sleep(0.01)
            return sample_audio_chunk
        
        # Configure mock stream
        mock_stream.read.side_effect = read_chunk
        mock_stream.stop_stream.return_value = None
        mock_stream.close.return_value = None
        
        # Configure mock PyAudio instance
        mock_pyaudio_instance.open.return_value = mock_stream
        mock_pyaudio_instance.terminate.return_value = None
        mock_pyaudio_instance.get_sample_size.return_value = 2
        mock_pyaudio_instance.get_device_count.return_value = 2
        devices = [
            {'name': 'Speakers', 'maxInputChannels': 0},
            {'name': 'Built-in Microphone', 'maxInputChannels': 1},
        ]
        mock_pyaudio_instance.get_device_info_by_index.side_effect = lambda index: devices[index]
        
        # Configure mock PyAudio class
        mock_pyaudio_class.return_value = mock_pyaudio_instance
        
        yield {
            'class': mock_pyaudio_class,
            'instance': mock_pyaudio_instance,
            'stream': mock_stream
        }


@pytest.fixture
def sample_audio_file(temp_data_dir, sample_audio_chunk):
    """Create a sample WAV file for testing."""
    file_path = Path(temp_data_dir) / "test_audio.wav"
    
    with wave.open(str(file_path), 'wb') as wf:
        wf.setnchannels(1)  # Mono
        wf.setsampwidth(2)  # 16-bit
        wf.setframerate(16000)  # 16kHz
        
        for _ in range(20):  # ~1.3 seconds of audio
            wf.writeframes(sample_audio_chunk)
    
    return str(file_path)


@pytest.fixture
def sample_artifact(sample_audio_file):
    """Recording artifact pointing at the sample WAV file."""
    return RecordingArtifact(
        uri=sample_audio_file,
        duration_seconds=1.28,
        size_bytes=Path(sample_audio_file).stat().st_size,
        sample_rate=16000,
        channels=1,
        total_chunks=20,
    )


class FakeRecognitionService:
    """In-process stand-in for the recognize endpoint.
    
    Records every request and answers with a canned body.
    """
    
    path = "/v1/recognize"
    
    def __init__(self, response_body=None, status: int = 200):
        self.response_body = {} if response_body is None else response_body
        self.status = status
        self.requests = []
        self.server = None
        self.url = None
    
    async def handle(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.requests.append({"query": dict(request.query), "body": body})
        if isinstance(self.response_body, bytes):
            return web.Response(body=self.response_body, status=self.status)
        if isinstance(self.response_body, str):
            return web.Response(text=self.response_body, status=self.status)
        return web.json_response(self.response_body, status=self.status)
    
    def received_audio(self, index: int = -1) -> bytes:
        """Decode the audio content of a received request."""
        return base64.b64decode(self.requests[index]["body"]["audio"]["content"])
    
    async def __aenter__(self):
        app = web.Application()
        app.router.add_post(self.path, self.handle)
        self.server = TestServer(app)
        await self.server.start_server()
        self.url = str(self.server.make_url(self.path))
        return self
    
    async def __aexit__(self, *exc_info):
        await self.server.close()


@pytest.fixture
def recognition_service():
    """Factory for fake recognition endpoints: ``async with recognition_service(body) as svc``."""
    return FakeRecognitionService


@pytest.fixture
def config_file(temp_data_dir):
    """Write a minimal voicenote.yaml and return its path."""
    path = Path(temp_data_dir) / "voicenote.yaml"
    path.write_text(
        "google_speech:\n"
        "  api_key: test-key\n"
        "  language: zh-CN\n"
        "  alternative_languages: [en-US, zh-TW]\n"
        "audio:\n"
        "  chunk_size: 512\n"
        "  recordings_directory: recordings\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  file_path: logs/voicenote.log\n"
        "  console_output: false\n",
        encoding="utf-8",
    )
    return str(path)
