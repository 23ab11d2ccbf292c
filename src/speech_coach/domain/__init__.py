"""Domain layer exports."""

from .models import (
    AnalysisResult,
    AnalysisState,
    AudioUpload,
    TranscriptionJob,
    WordTimestamp,
)
from .speech_analyzer import SpeechAnalyzer

__all__ = [
    "AnalysisResult",
    "AnalysisState",
    "AudioUpload",
    "TranscriptionJob",
    "WordTimestamp",
    "SpeechAnalyzer",
]
