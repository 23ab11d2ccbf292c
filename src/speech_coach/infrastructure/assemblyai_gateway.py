"""AssemblyAI implementation of the TranscriptionGateway interface."""

import httpx
from pydantic import ValidationError

from speech_coach.domain.models import TranscriptionJob
from speech_coach.exceptions import (
    AuthError,
    PollError,
    SubmitError,
    TranscriptionGatewayError,
    UploadError,
)
from speech_coach.logging import setup_logging

from .interfaces import TranscriptionGateway

logger = setup_logging()


class AssemblyAIGateway(TranscriptionGateway):
    """Drives AssemblyAI's upload, transcript and status endpoints."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def submit(self, audio_data: bytes) -> str:
        upload_url = await self._upload(audio_data)
        return await self._create_transcript(upload_url)

    async def poll_status(self, transcript_id: str) -> TranscriptionJob:
        payload = await self._request(
            PollError, "GET", f"/transcript/{transcript_id}"
        )
        try:
            job = TranscriptionJob.model_validate({**payload, "id": transcript_id})
        except ValidationError as e:
            logger.exception(
                "Unexpected transcript payload",
                extra={"transcript_id": transcript_id},
            )
            raise PollError(
                f"Invalid status payload for transcript '{transcript_id}'", cause=e
            ) from e

        logger.info(
            "Transcript status fetched",
            extra={"transcript_id": transcript_id, "status": job.status.value},
        )
        return job

    async def _upload(self, audio_data: bytes) -> str:
        payload = await self._request(UploadError, "POST", "/upload", content=audio_data)
        upload_url = payload.get("upload_url")
        if not upload_url:
            raise UploadError("Upload response did not include an upload_url")

        logger.info(
            "Audio uploaded to AssemblyAI",
            extra={"size": len(audio_data), "upload_url": upload_url},
        )
        return upload_url

    async def _create_transcript(self, upload_url: str) -> str:
        payload = await self._request(
            SubmitError, "POST", "/transcript", json={"audio_url": upload_url}
        )
        transcript_id = payload.get("id")
        if not transcript_id:
            raise SubmitError("Transcript response did not include an id")

        logger.info("Transcription requested", extra={"transcript_id": transcript_id})
        return transcript_id

    async def _request(
        self,
        error_type: type[TranscriptionGatewayError],
        method: str,
        url: str,
        **kwargs,
    ) -> dict:
        """Sends a request and returns its JSON body, raising error_type on failure."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.exception(
                "AssemblyAI request failed",
                extra={"method": method, "url": url, "stage": error_type.stage},
            )
            raise error_type(f"{method} {url} failed: {e}", cause=e) from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.error(
                "AssemblyAI rejected the API key",
                extra={"url": url, "stage": error_type.stage},
            )
            raise AuthError(error_type.stage)

        try:
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPStatusError, ValueError) as e:
            logger.exception(
                "AssemblyAI returned an error response",
                extra={
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise error_type(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
                cause=e,
            ) from e

        if not isinstance(payload, dict):
            raise error_type(
                f"{method} {url} returned a non-object body",
                status_code=response.status_code,
            )
        return payload
