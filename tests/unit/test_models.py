"""Unit tests for data models."""

import pytest

from voicenote.models.recording import LINEAR16_PROFILE
from voicenote.models.speech_api import RecognizeResponse
from voicenote.models.transcription import OutcomeStatus, TranscriptionOutcome, TranscriptResult


@pytest.mark.unit
class TestTranscriptResult:
    """Test cases for TranscriptResult."""
    
    def test_from_transcript_copies_text_to_every_field(self):
        result = TranscriptResult.from_transcript("Buy milk.")
        
        assert result.to_dict() == {
            "transcription": "Buy milk.",
            "english": "Buy milk.",
            "simplifiedChinese": "Buy milk.",
            "traditionalChinese": "Buy milk.",
            "italian": "Buy milk.",
            "spanish": "Buy milk.",
            "japanese": "Buy milk.",
            "korean": "Buy milk.",
        }
        assert result.confidence is None
    
    def test_outcome_success(self):
        assert TranscriptionOutcome(status=OutcomeStatus.DELIVERED).success is True
        assert TranscriptionOutcome(status=OutcomeStatus.NO_SPEECH).success is False


@pytest.mark.unit
class TestRecordingProfile:
    """The fixed LINEAR16 profile expected by the recognition service."""
    
    def test_linear16_profile(self):
        assert LINEAR16_PROFILE.channels == 1
        assert LINEAR16_PROFILE.sample_rate == 16000
        assert LINEAR16_PROFILE.bit_depth == 16
        assert LINEAR16_PROFILE.little_endian is True
        assert LINEAR16_PROFILE.signed is True
        assert LINEAR16_PROFILE.extension == ".wav"
        assert LINEAR16_PROFILE.sample_width == 2
        assert LINEAR16_PROFILE.bytes_per_second == 32000


@pytest.mark.unit
class TestRecognizeResponse:
    """Test cases for parsing recognize responses."""
    
    def test_first_result(self):
        response = RecognizeResponse.model_validate({
            "results": [
                {"alternatives": [{"transcript": "first", "confidence": 0.9},
                                  {"transcript": "second"}]},
                {"alternatives": [{"transcript": "other"}]},
            ],
            "totalBilledTime": "2s",
        })
        
        assert response.error is None
        assert response.first_result().alternatives[0].transcript == "first"
    
    def test_error_payload(self):
        response = RecognizeResponse.model_validate({
            "error": {"code": 403, "message": "API key not valid.", "status": "PERMISSION_DENIED"}
        })
        
        assert response.error.code == 403
        assert response.first_result() is None
    
    def test_empty_response(self):
        assert RecognizeResponse.model_validate({}).first_result() is None
    
    def test_first_result_without_alternatives(self):
        """Only the first result is considered, even if a later one has alternatives."""
        response = RecognizeResponse.model_validate({
            "results": [
                {"alternatives": []},
                {"alternatives": [{"transcript": "later"}]},
            ]
        })
        
        assert response.first_result() is None
