"""Abstract interface for transcription provider operations."""

from abc import ABC, abstractmethod

from speech_coach.domain.models import TranscriptionJob


class TranscriptionGateway(ABC):
    """Abstract base class for asynchronous transcription providers."""

    @abstractmethod
    async def submit(self, audio_data: bytes) -> str:
        """
        Uploads audio and creates a transcription job for it.

        Args:
            audio_data: Raw audio file bytes.

        Returns:
            The provider's transcription job identifier.

        Raises:
            UploadError: If the audio upload fails.
            SubmitError: If creating the transcription job fails.
            AuthError: If the provider rejects the credentials.
        """
        pass

    @abstractmethod
    async def poll_status(self, transcript_id: str) -> TranscriptionJob:
        """
        Fetches the current state of a transcription job.

        Args:
            transcript_id: Identifier returned by submit.

        Returns:
            Snapshot of the job, with transcript data once completed.

        Raises:
            PollError: If the status request fails.
            AuthError: If the provider rejects the credentials.
        """
        pass
