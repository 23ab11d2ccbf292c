"""Shared fixtures: fake provider gateway, recording sleep and test config."""
import pytest

from speech_coach.config import AppConfig, AssemblyAIConfig, PollingConfig, ServerConfig
from speech_coach.domain import TranscriptionJob
from speech_coach.infrastructure.interfaces import TranscriptionGateway


class FakeGateway(TranscriptionGateway):
    """Replays a scripted sequence of job snapshots."""

    def __init__(self, snapshots=None, submit_error=None, poll_error=None):
        self.snapshots = list(snapshots or [])
        self.submit_error = submit_error
        self.poll_error = poll_error
        self.submitted: list[bytes] = []
        self.polled: list[str] = []

    async def submit(self, audio_data: bytes) -> str:
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(audio_data)
        return "transcript-1"

    async def poll_status(self, transcript_id: str) -> TranscriptionJob:
        self.polled.append(transcript_id)
        if self.poll_error is not None:
            raise self.poll_error
        if len(self.snapshots) > 1:
            return self.snapshots.pop(0)
        return self.snapshots[0]


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_job(status, **fields) -> TranscriptionJob:
    return TranscriptionJob(id="transcript-1", status=status, **fields)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(
        assemblyai=AssemblyAIConfig(api_key="test-key"),
        polling=PollingConfig(interval_seconds=0, max_attempts=20),
        server=ServerConfig(environment="development", upload_dir=str(tmp_path)),
    )
