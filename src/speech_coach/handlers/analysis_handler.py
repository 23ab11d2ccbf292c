"""Handler for turning an uploaded recording into coaching feedback."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

import assemblyai as aai

from speech_coach.config import PollingConfig
from speech_coach.domain import (
    AnalysisResult,
    AnalysisState,
    AudioUpload,
    SpeechAnalyzer,
    TranscriptionJob,
)
from speech_coach.exceptions import (
    AnalysisTimeoutError,
    NoFileError,
    TranscriptionFailedError,
)
from speech_coach.infrastructure.interfaces import TranscriptionGateway, UploadStorage
from speech_coach.logging import setup_logging

logger = setup_logging()


class AnalysisHandler:
    """Orchestrates upload, transcription polling and speech analysis."""

    def __init__(
        self,
        storage: UploadStorage,
        gateway: TranscriptionGateway,
        analyzer: SpeechAnalyzer,
        polling: PollingConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._storage = storage
        self._gateway = gateway
        self._analyzer = analyzer
        self._polling = polling
        self._sleep = sleep

    async def process(self, upload: AudioUpload | None) -> AnalysisResult:
        """
        Transcribes an uploaded recording and derives coaching metrics.

        The stored copy of the upload is removed before this returns or raises.

        Args:
            upload: The uploaded audio, or None if the request carried no file.

        Returns:
            AnalysisResult for the completed transcription.

        Raises:
            NoFileError: If no file was uploaded.
            UploadError: If the provider upload fails.
            SubmitError: If the transcription job cannot be created.
            PollError: If a status request fails.
            AuthError: If the provider rejects the API key.
            TranscriptionFailedError: If the provider reports a failed job.
            AnalysisTimeoutError: If the job does not finish within the poll budget.
        """
        if upload is None:
            self._transition(AnalysisState.failed, reason="no_file")
            raise NoFileError()

        self._transition(
            AnalysisState.received,
            file_name=upload.filename,
            size=len(upload.data),
        )

        try:
            async with self._stored(upload) as path:
                self._transition(AnalysisState.uploading)
                audio_data = await asyncio.to_thread(self._storage.read, path)
                transcript_id = await self._gateway.submit(audio_data)

                self._transition(AnalysisState.submitted, transcript_id=transcript_id)
                job = await self._wait_for_completion(transcript_id)

                result = self._analyzer.analyze(
                    job.text or "", job.audio_duration or 0, job.words
                )
        except Exception as e:
            self._transition(AnalysisState.failed, error_type=type(e).__name__)
            raise

        self._transition(
            AnalysisState.completed,
            transcript_id=transcript_id,
            word_count=result.word_count,
            words_per_minute=result.words_per_minute,
            filler_word_count=result.filler_word_count,
            long_pause_count=result.long_pause_count,
        )
        return result

    async def _wait_for_completion(self, transcript_id: str) -> TranscriptionJob:
        """Polls the provider until the job completes, fails or exhausts the budget."""
        self._transition(AnalysisState.polling, transcript_id=transcript_id)
        max_attempts = self._polling.max_attempts

        for attempt in range(1, max_attempts + 1):
            job = await self._gateway.poll_status(transcript_id)
            logger.info(
                "Poll completed",
                extra={
                    "transcript_id": transcript_id,
                    "attempt": attempt,
                    "max_attempts": max_attempts,
                    "status": job.status.value,
                },
            )

            if job.status == aai.TranscriptStatus.completed:
                return job
            if job.status == aai.TranscriptStatus.error:
                raise TranscriptionFailedError(transcript_id, job.error)

            if attempt < max_attempts:
                await self._sleep(self._polling.interval_seconds)

        raise AnalysisTimeoutError(transcript_id, max_attempts)

    @asynccontextmanager
    async def _stored(self, upload: AudioUpload) -> AsyncIterator[Path]:
        """Stores the upload for the duration of the block, then deletes it."""
        path = await asyncio.to_thread(self._storage.save, upload)
        try:
            yield path
        finally:
            try:
                await asyncio.to_thread(self._storage.delete, path)
            except OSError:
                logger.exception(
                    "Failed to delete temporary upload", extra={"path": str(path)}
                )

    @staticmethod
    def _transition(state: AnalysisState, **context) -> None:
        logger.info("Analysis state changed", extra={"state": state.value, **context})
