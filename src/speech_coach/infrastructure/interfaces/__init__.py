"""Infrastructure interface exports."""

from .transcription_gateway import TranscriptionGateway
from .upload_storage import UploadStorage

__all__ = ["TranscriptionGateway", "UploadStorage"]
