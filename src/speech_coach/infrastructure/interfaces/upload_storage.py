"""Abstract interface for transient upload storage."""

from abc import ABC, abstractmethod
from pathlib import Path

from speech_coach.domain.models import AudioUpload


class UploadStorage(ABC):
    """Abstract base class for short-lived storage of uploaded audio."""

    @abstractmethod
    def save(self, upload: AudioUpload) -> Path:
        """
        Writes an upload to a location unique to this request.

        Args:
            upload: The uploaded audio.

        Returns:
            Path of the stored file.
        """
        pass

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """Returns the stored bytes at path."""
        pass

    @abstractmethod
    def delete(self, path: Path) -> None:
        """
        Removes a stored upload. Missing files are ignored.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        pass
