"""Infrastructure layer exports."""

from .assemblyai_gateway import AssemblyAIGateway
from .local_storage import LocalUploadStorage

__all__ = ["AssemblyAIGateway", "LocalUploadStorage"]
