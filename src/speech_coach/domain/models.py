"""Domain models for the speech analysis service."""

from enum import Enum
from typing import Any

import assemblyai as aai
from pydantic import BaseModel, Field, field_validator


class AnalysisState(str, Enum):
    """Lifecycle of a single analysis request."""

    received = "received"
    uploading = "uploading"
    submitted = "submitted"
    polling = "polling"
    completed = "completed"
    failed = "failed"


class AudioUpload(BaseModel, frozen=True):
    """An uploaded audio blob as received from the client."""

    data: bytes
    filename: str | None = None
    content_type: str | None = None


class WordTimestamp(BaseModel, frozen=True):
    """A recognized word with its start and end offsets."""

    text: str = ""
    start: float | None = None
    end: float | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("start", "end", mode="before")
    @classmethod
    def _numeric_or_none(cls, value: Any) -> float | None:
        """Non-numeric offsets are dropped rather than coerced."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value


class TranscriptionJob(BaseModel, frozen=True):
    """Snapshot of a transcription job at the provider."""

    id: str
    status: aai.TranscriptStatus
    text: str | None = None
    audio_duration: float | None = None
    words: list[WordTimestamp] = Field(default_factory=list)
    error: str | None = None

    @field_validator("words", mode="before")
    @classmethod
    def _words_or_empty(cls, value: Any) -> Any:
        """Malformed entries become blank words so they break, not shift, adjacency."""
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        return [
            entry if isinstance(entry, (dict, WordTimestamp)) else WordTimestamp()
            for entry in value
        ]


class AnalysisResult(BaseModel, frozen=True):
    """Speech coaching metrics derived from a completed transcript."""

    transcript: str
    word_count: int = Field(ge=0)
    words_per_minute: int = Field(ge=0)
    filler_word_count: int = Field(ge=0)
    long_pause_count: int = Field(ge=0)
    pacing_suggestion: str
    pause_suggestion: str
