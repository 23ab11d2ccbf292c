"""Core business logic for speech coaching metrics."""

import math
import re
from collections.abc import Sequence

from .models import AnalysisResult, WordTimestamp

FILLER_WORDS = (
    "um",
    "uh",
    "like",
    "so",
    "you know",
    "actually",
    "basically",
    "ahh",
    "ummmm",
    "uhhhh",
)

PACE_FAST_WPM = 160
PACE_SLOW_WPM = 130
LONG_PAUSE_SECONDS = 2.0
MILLISECOND_GAP_THRESHOLD = 100
MAX_LONG_PAUSES = 3
MAX_FILLER_WORDS = 5

PACING_FAST = (
    "Your pace is quite fast. Try speaking a bit more slowly to ensure "
    "your audience can follow along."
)
PACING_SLOW = (
    "Your pace is a little slow. Try speaking a bit faster to keep your "
    "audience engaged."
)
PACING_GOOD = (
    "Your pacing is excellent! It's right in the ideal range for presentations."
)
PAUSES_HEAVY = (
    "You paused for over 2 seconds {count} times. Try to make your "
    "transitions between sentences smoother."
)
FILLERS_HEAVY = (
    "You used {count} filler words. Practice your speech to reduce reliance "
    "on words like 'um' and 'like'."
)
FLOW_GOOD = "Great job on maintaining a smooth flow with minimal long pauses!"


class SpeechAnalyzer:
    """Derives pacing, filler-word and pause metrics from a transcript."""

    def __init__(self, filler_words: Sequence[str] = FILLER_WORDS):
        self._filler_patterns = [
            re.compile(rf"\b{re.escape(filler)}\b", re.IGNORECASE)
            for filler in filler_words
        ]

    def analyze(
        self,
        transcript_text: str,
        duration_seconds: float | None,
        words: Sequence[WordTimestamp],
    ) -> AnalysisResult:
        """
        Computes coaching metrics for a completed transcription.

        Args:
            transcript_text: Full transcript text.
            duration_seconds: Total audio duration in seconds.
            words: Word entries with start/end offsets, in spoken order.

        Returns:
            AnalysisResult with metrics and suggestions.
        """
        word_count = self.count_words(transcript_text)
        wpm = self.words_per_minute(word_count, duration_seconds)
        filler_count = self.count_filler_words(transcript_text)
        long_pauses = self.count_long_pauses(words)

        return AnalysisResult(
            transcript=transcript_text,
            word_count=word_count,
            words_per_minute=wpm,
            filler_word_count=filler_count,
            long_pause_count=long_pauses,
            pacing_suggestion=self._pacing_suggestion(wpm),
            pause_suggestion=self._pause_suggestion(long_pauses, filler_count),
        )

    @staticmethod
    def count_words(transcript_text: str) -> int:
        return len(transcript_text.split())

    @staticmethod
    def words_per_minute(word_count: int, duration_seconds: float | None) -> int:
        if not duration_seconds or duration_seconds <= 0:
            return 0
        # Half-up rounding.
        return math.floor(word_count / (duration_seconds / 60) + 0.5)

    def count_filler_words(self, transcript_text: str) -> int:
        return sum(
            len(pattern.findall(transcript_text)) for pattern in self._filler_patterns
        )

    @staticmethod
    def count_long_pauses(words: Sequence[WordTimestamp]) -> int:
        """Counts gaps between consecutive words longer than two seconds."""
        long_pauses = 0
        for previous, current in zip(words, words[1:]):
            if previous.end is None or current.start is None:
                continue
            gap = current.start - previous.end
            # Offsets above the threshold are milliseconds.
            pause_seconds = gap / 1000 if gap > MILLISECOND_GAP_THRESHOLD else gap
            if pause_seconds > LONG_PAUSE_SECONDS:
                long_pauses += 1
        return long_pauses

    @staticmethod
    def _pacing_suggestion(wpm: int) -> str:
        if wpm > PACE_FAST_WPM:
            return PACING_FAST
        if wpm < PACE_SLOW_WPM:
            return PACING_SLOW
        return PACING_GOOD

    @staticmethod
    def _pause_suggestion(long_pause_count: int, filler_word_count: int) -> str:
        if long_pause_count > MAX_LONG_PAUSES:
            return PAUSES_HEAVY.format(count=long_pause_count)
        if filler_word_count > MAX_FILLER_WORDS:
            return FILLERS_HEAVY.format(count=filler_word_count)
        return FLOW_GOOD
