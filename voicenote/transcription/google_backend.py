"""Google Speech-to-Text REST transcription client."""

import asyncio
import json
import time
import logging
from typing import Optional, Sequence

import aiohttp
from pydantic import ValidationError

from .base import AbstractTranscriptionClient
from .encoding import read_audio_file_as_base64
from ..errors import NoSpeechDetected, ServiceError, TranscriptionError
from ..models.recording import RecordingArtifact
from ..models.speech_api import (
    RecognitionAudio,
    RecognitionConfig,
    RecognizeRequest,
    RecognizeResponse,
)
from ..models.transcription import TranscriptResult

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "https://speech.googleapis.com/v1/speech:recognize"


class GoogleSpeechClient(AbstractTranscriptionClient):
    """Google Speech-to-Text ``speech:recognize`` client authenticated with an API key."""
    
    def __init__(self,
                 api_key: str,
                 endpoint_url: str = DEFAULT_ENDPOINT_URL,
                 language: str = "zh-CN",
                 alternative_languages: Sequence[str] = ("en-US", "zh-TW"),
                 enable_automatic_punctuation: bool = True,
                 sample_rate: int = 16000,
                 session: Optional[aiohttp.ClientSession] = None):
        """Initialize Google Speech client.
        
        Args:
            api_key: Google Cloud API key, sent as the ``key`` query parameter
            endpoint_url: Recognition endpoint
            language: Primary language code (e.g., 'zh-CN')
            alternative_languages: Additional language codes the service may detect
            enable_automatic_punctuation: Enable automatic punctuation
            sample_rate: Sample rate of the submitted LINEAR16 audio
            session: Shared HTTP session; a session per request is used if None
        """
        super().__init__(language)
        if not api_key:
            raise ValueError("Google API key is required - cannot transcribe without credentials")
        self.api_key = api_key
        self.endpoint_url = endpoint_url
        self.alternative_languages = list(alternative_languages)
        self.enable_automatic_punctuation = enable_automatic_punctuation
        self.sample_rate = sample_rate
        self.session = session
        self.service_name = "Google Speech-to-Text"
    
    def build_request(self, audio_content: str) -> RecognizeRequest:
        """Build the recognition request for base64 ``audio_content``."""
        return RecognizeRequest(
            config=RecognitionConfig(
                encoding="LINEAR16",
                sample_rate_hertz=self.sample_rate,
                language_code=self.language,
                alternative_language_codes=self.alternative_languages,
                enable_automatic_punctuation=self.enable_automatic_punctuation,
            ),
            audio=RecognitionAudio(content=audio_content),
        )
    
    async def transcribe(self, artifact: RecordingArtifact) -> TranscriptResult:
        """Transcribe a recording with one synchronous recognize call."""
        start_time = time.time()
        
        audio_content = await read_audio_file_as_base64(artifact.uri)
        logger.debug(f"Base64 audio length: {len(audio_content)}; Language: {self.language}; "
                     f"Alternatives: {self.alternative_languages}")
        
        request = self.build_request(audio_content)
        payload = await self._post(request.to_payload())
        response = self._parse_response(payload)
        processing_time = time.time() - start_time
        
        if response.error:
            error = response.error
            logger.error(f"Google STT API error: code={error.code}, status={error.status}, "
                         f"message={error.message}")
            raise ServiceError(code=error.code, message=error.message, status=error.status)
        
        first_result = response.first_result()
        if first_result is None:
            logger.info("--- NO SPEECH DETECTED ---")
            raise NoSpeechDetected("No transcription results returned")
        
        alternative = first_result.alternatives[0]
        confidence = f"{alternative.confidence:.2f}" if alternative.confidence is not None else "n/a"
        logger.info(f"✅ TRANSCRIPTION SUCCESS: '{alternative.transcript}' "
                    f"(confidence: {confidence}, processing_time: {processing_time:.3f}s)")
        return TranscriptResult.from_transcript(
            alternative.transcript,
            confidence=alternative.confidence,
            language_code=first_result.language_code,
        )
    
    async def _post(self, body: dict) -> dict:
        """POST ``body`` and return the decoded JSON response, whatever the HTTP status."""
        try:
            if self.session is not None:
                return await self._send(self.session, body)
            async with aiohttp.ClientSession() as session:
                return await self._send(session, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Google STT request failed: {e!r}")
            raise TranscriptionError(f"Recognition request failed: {e}") from e
    
    async def _send(self, session: aiohttp.ClientSession, body: dict) -> dict:
        async with session.post(self.endpoint_url, params={"key": self.api_key}, json=body) as resp:
            raw = await resp.read()
            status = resp.status
        logger.debug(f"Google STT response (HTTP {status}): {raw.decode('utf-8', errors='replace')}")
        try:
            payload = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TranscriptionError(
                f"Recognition service returned a non-JSON response (HTTP {status})"
            ) from e
        if not isinstance(payload, dict):
            raise TranscriptionError(f"Unexpected recognition response (HTTP {status})")
        return payload
    
    @staticmethod
    def _parse_response(payload: dict) -> RecognizeResponse:
        try:
            return RecognizeResponse.model_validate(payload)
        except ValidationError as e:
            raise TranscriptionError(f"Malformed recognition response: {e}") from e
