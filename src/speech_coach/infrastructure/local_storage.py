"""Local filesystem implementation of the UploadStorage interface."""

import os
import tempfile
from pathlib import Path

from speech_coach.domain.models import AudioUpload
from speech_coach.logging import setup_logging

from .interfaces import UploadStorage

logger = setup_logging()

DEFAULT_SUFFIX = ".webm"


class LocalUploadStorage(UploadStorage):
    """Stores each upload in its own temporary file under a base directory."""

    def __init__(self, base_dir: str | Path):
        self._base_dir = Path(base_dir)

    def save(self, upload: AudioUpload) -> Path:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        suffix = os.path.splitext(upload.filename or "")[1] or DEFAULT_SUFFIX
        with tempfile.NamedTemporaryFile(
            dir=self._base_dir, prefix="upload-", suffix=suffix, delete=False
        ) as temp_file:
            path = Path(temp_file.name)
            try:
                temp_file.write(upload.data)
            except OSError:
                logger.exception("Failed to store upload", extra={"path": str(path)})
                temp_file.close()
                path.unlink(missing_ok=True)
                raise
        logger.info(
            "Upload stored",
            extra={
                "path": str(path),
                "original_name": upload.filename,
                "size": len(upload.data),
            },
        )
        return path

    def read(self, path: Path) -> bytes:
        return path.read_bytes()

    def delete(self, path: Path) -> None:
        path.unlink(missing_ok=True)
        logger.info("Temporary upload removed", extra={"path": str(path)})
