"""AnalysisHandler: polling state machine, error propagation and cleanup."""
import assemblyai as aai
import pytest

from conftest import FakeGateway, make_job
from speech_coach.config import PollingConfig
from speech_coach.domain import AudioUpload, SpeechAnalyzer
from speech_coach.exceptions import (
    AnalysisTimeoutError,
    AuthError,
    NoFileError,
    PollError,
    SubmitError,
    TranscriptionFailedError,
    UploadError,
)
from speech_coach.handlers import AnalysisHandler
from speech_coach.infrastructure import LocalUploadStorage

UPLOAD = AudioUpload(data=b"fake-webm", filename="recording.webm", content_type="audio/webm")

COMPLETED = make_job(
    aai.TranscriptStatus.completed,
    text="um this is a test like really",
    audio_duration=10,
    words=[
        {"text": "um", "start": 0, "end": 300},
        {"text": "this", "start": 2600, "end": 2800},
        {"text": "is", "start": 2950, "end": 3100},
        {"text": "a", "start": 3250, "end": 3400},
        {"text": "test", "start": 3550, "end": 3800},
        {"text": "like", "start": 6000, "end": 6200},
        {"text": "really", "start": 6350, "end": 6600},
    ],
)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


def _handler(gateway, upload_dir, sleep, max_attempts=20, storage=None):
    return AnalysisHandler(
        storage or LocalUploadStorage(upload_dir),
        gateway,
        SpeechAnalyzer(),
        PollingConfig(interval_seconds=3.0, max_attempts=max_attempts),
        sleep=sleep,
    )


def _leftover_files(upload_dir):
    return list(upload_dir.iterdir()) if upload_dir.exists() else []


@pytest.mark.asyncio
async def test_completed_job_produces_result(upload_dir, sleep):
    gateway = FakeGateway(
        [
            make_job(aai.TranscriptStatus.queued),
            make_job(aai.TranscriptStatus.processing),
            COMPLETED,
        ]
    )

    result = await _handler(gateway, upload_dir, sleep).process(UPLOAD)

    assert gateway.submitted == [b"fake-webm"]
    assert gateway.polled == ["transcript-1"] * 3
    assert sleep.calls == [3.0, 3.0]
    assert result.word_count == 7
    assert result.words_per_minute == 42
    assert result.filler_word_count == 2
    assert result.long_pause_count == 2
    assert _leftover_files(upload_dir) == []


@pytest.mark.asyncio
async def test_missing_file_makes_no_provider_calls(upload_dir, sleep):
    gateway = FakeGateway([COMPLETED])

    with pytest.raises(NoFileError):
        await _handler(gateway, upload_dir, sleep).process(None)

    assert gateway.submitted == []
    assert gateway.polled == []
    assert _leftover_files(upload_dir) == []


@pytest.mark.asyncio
async def test_provider_job_error_raises_transcription_failed(upload_dir, sleep):
    gateway = FakeGateway(
        [
            make_job(aai.TranscriptStatus.processing),
            make_job(aai.TranscriptStatus.error, error="Audio file has no speech"),
        ]
    )

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await _handler(gateway, upload_dir, sleep).process(UPLOAD)

    assert exc_info.value.detail == "Audio file has no speech"
    assert "Transcription failed" in str(exc_info.value)
    assert _leftover_files(upload_dir) == []


@pytest.mark.asyncio
async def test_poll_budget_exhausted_raises_timeout_and_cleans_up(upload_dir, sleep):
    gateway = FakeGateway([make_job(aai.TranscriptStatus.processing)])

    with pytest.raises(AnalysisTimeoutError) as exc_info:
        await _handler(gateway, upload_dir, sleep).process(UPLOAD)

    assert exc_info.value.attempts == 20
    assert len(gateway.polled) == 20
    assert len(sleep.calls) == 19
    assert _leftover_files(upload_dir) == []


@pytest.mark.asyncio
async def test_custom_poll_budget(upload_dir, sleep):
    gateway = FakeGateway([make_job(aai.TranscriptStatus.queued)])

    with pytest.raises(AnalysisTimeoutError):
        await _handler(gateway, upload_dir, sleep, max_attempts=3).process(UPLOAD)

    assert len(gateway.polled) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        UploadError("upload failed", status_code=503),
        SubmitError("submit failed", status_code=400),
        AuthError("submit"),
    ],
)
async def test_submit_errors_propagate_and_clean_up(upload_dir, sleep, error):
    gateway = FakeGateway([COMPLETED], submit_error=error)

    with pytest.raises(type(error)) as exc_info:
        await _handler(gateway, upload_dir, sleep).process(UPLOAD)

    assert exc_info.value is error
    assert gateway.polled == []
    assert _leftover_files(upload_dir) == []


@pytest.mark.asyncio
async def test_poll_error_propagates_and_cleans_up(upload_dir, sleep):
    gateway = FakeGateway([COMPLETED], poll_error=PollError("network down"))

    with pytest.raises(PollError):
        await _handler(gateway, upload_dir, sleep).process(UPLOAD)

    assert _leftover_files(upload_dir) == []


class BrokenDeleteStorage(LocalUploadStorage):
    def delete(self, path):
        raise PermissionError("read-only filesystem")


@pytest.mark.asyncio
async def test_cleanup_failure_does_not_change_result(upload_dir, sleep):
    storage = BrokenDeleteStorage(upload_dir)
    handler = _handler(FakeGateway([COMPLETED]), upload_dir, sleep, storage=storage)

    result = await handler.process(UPLOAD)

    assert result.words_per_minute == 42


@pytest.mark.asyncio
async def test_cleanup_failure_does_not_mask_original_error(upload_dir, sleep):
    storage = BrokenDeleteStorage(upload_dir)
    gateway = FakeGateway([make_job(aai.TranscriptStatus.processing)])
    handler = _handler(gateway, upload_dir, sleep, max_attempts=2, storage=storage)

    with pytest.raises(AnalysisTimeoutError):
        await handler.process(UPLOAD)


@pytest.mark.asyncio
async def test_completed_job_without_text_or_duration(upload_dir, sleep):
    gateway = FakeGateway([make_job(aai.TranscriptStatus.completed)])

    result = await _handler(gateway, upload_dir, sleep).process(UPLOAD)

    assert result.transcript == ""
    assert result.word_count == 0
    assert result.words_per_minute == 0
    assert result.long_pause_count == 0
