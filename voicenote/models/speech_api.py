"""Wire models for the Google Speech-to-Text v1 ``speech:recognize`` REST call."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RecognitionConfig(_WireModel):
    encoding: str = "LINEAR16"
    sample_rate_hertz: int = Field(16000, alias="sampleRateHertz")
    language_code: str = Field("zh-CN", alias="languageCode")
    alternative_language_codes: List[str] = Field(
        default_factory=lambda: ["en-US", "zh-TW"], alias="alternativeLanguageCodes"
    )
    enable_automatic_punctuation: bool = Field(True, alias="enableAutomaticPunctuation")


class RecognitionAudio(_WireModel):
    content: str


class RecognizeRequest(_WireModel):
    config: RecognitionConfig
    audio: RecognitionAudio

    def to_payload(self) -> dict:
        """JSON body with the service's camelCase field names."""
        return self.model_dump(by_alias=True)


class ApiError(_WireModel):
    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None


class SpeechRecognitionAlternative(_WireModel):
    transcript: str = ""
    confidence: Optional[float] = None


class SpeechRecognitionResult(_WireModel):
    alternatives: List[SpeechRecognitionAlternative] = Field(default_factory=list)
    language_code: Optional[str] = Field(None, alias="languageCode")


class RecognizeResponse(_WireModel):
    results: List[SpeechRecognitionResult] = Field(default_factory=list)
    error: Optional[ApiError] = None

    def first_result(self) -> Optional[SpeechRecognitionResult]:
        """The first result, or None when it is missing or has no alternatives."""
        if self.results and self.results[0].alternatives:
            return self.results[0]
        return None
