"""Custom exceptions for the speech-coach service."""

GENERIC_FAILURE_MESSAGE = "An error occurred during analysis."


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"{setting} {reason}")


class SpeechAnalysisError(Exception):
    """Base class for failures surfaced to the API client."""

    status_code = 500
    user_message = GENERIC_FAILURE_MESSAGE


class NoFileError(SpeechAnalysisError):
    """Raised when an analysis request carries no audio file."""

    status_code = 400
    user_message = "No file uploaded."

    def __init__(self):
        super().__init__("No audio file attached to the request")


class TranscriptionGatewayError(SpeechAnalysisError):
    """Raised when a call to the transcription provider fails."""

    stage = "gateway"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.provider_status_code = status_code
        self.cause = cause
        super().__init__(message)


class UploadError(TranscriptionGatewayError):
    """Raised when uploading audio to the provider's storage fails."""

    stage = "upload"


class SubmitError(TranscriptionGatewayError):
    """Raised when creating a transcription job fails."""

    stage = "submit"


class PollError(TranscriptionGatewayError):
    """Raised when fetching a transcription job's status fails."""

    stage = "poll"


class AuthError(TranscriptionGatewayError):
    """Raised when the provider rejects the configured API key."""

    user_message = "API authentication failed. Please check server configuration."

    def __init__(self, stage: str, cause: Exception | None = None):
        self.stage = stage
        super().__init__(
            f"Provider rejected credentials during {stage}", status_code=401, cause=cause
        )


class TranscriptionFailedError(SpeechAnalysisError):
    """Raised when the provider reports a job-level transcription failure."""

    user_message = "Speech transcription failed. Please try again."

    def __init__(self, transcript_id: str, detail: str | None = None):
        self.transcript_id = transcript_id
        self.detail = detail
        super().__init__(f"Transcription failed: {detail}")


class AnalysisTimeoutError(SpeechAnalysisError):
    """Raised when a transcription job does not finish within the poll budget."""

    user_message = "Analysis timed out. Please try with a shorter recording."

    def __init__(self, transcript_id: str, attempts: int):
        self.transcript_id = transcript_id
        self.attempts = attempts
        super().__init__(
            f"Transcription '{transcript_id}' timed out after {attempts} polls"
        )
