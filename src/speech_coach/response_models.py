"""Response models for the speech-coach API."""

from pydantic import BaseModel, ConfigDict, Field

from speech_coach.domain import AnalysisResult


class Suggestions(BaseModel):
    """Coaching suggestions derived from the analysis."""

    pacing: str
    pauses: str


class AnalyzeResponse(BaseModel):
    """Response returned after a successful analysis."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Analysis complete!"
    transcript: str
    words_per_minute: int = Field(alias="wordsPerMinute")
    filler_word_count: int = Field(alias="fillerWordCount")
    suggestions: Suggestions

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeResponse":
        return cls(
            transcript=result.transcript,
            words_per_minute=result.words_per_minute,
            filler_word_count=result.filler_word_count,
            suggestions=Suggestions(
                pacing=result.pacing_suggestion,
                pauses=result.pause_suggestion,
            ),
        )


class ErrorResponse(BaseModel):
    """Body of a failed request."""

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """Liveness and configuration check."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    timestamp: str
    api_key: str = Field(alias="apiKey")
