"""FastAPI dependency injection configuration."""

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends, Request

from speech_coach.config import AppConfig
from speech_coach.domain import SpeechAnalyzer
from speech_coach.handlers import AnalysisHandler
from speech_coach.infrastructure import AssemblyAIGateway, LocalUploadStorage
from speech_coach.infrastructure.interfaces import TranscriptionGateway, UploadStorage

_analyzer = SpeechAnalyzer()


def get_config(request: Request) -> AppConfig:
    """Returns the configuration the application was created with."""
    return request.app.state.config


ConfigDep = Annotated[AppConfig, Depends(get_config)]


async def get_gateway(config: ConfigDep) -> AsyncGenerator[TranscriptionGateway, None]:
    """Yields an AssemblyAI gateway, closing its HTTP client afterwards."""
    async with httpx.AsyncClient(
        base_url=config.assemblyai.base_url,
        headers={"authorization": config.assemblyai.api_key},
        timeout=config.assemblyai.request_timeout_seconds,
    ) as client:
        yield AssemblyAIGateway(client)


def get_storage(config: ConfigDep) -> UploadStorage:
    """Returns the configured upload storage."""
    return LocalUploadStorage(config.server.upload_dir)


def get_analyzer() -> SpeechAnalyzer:
    """Returns the shared speech analyzer."""
    return _analyzer


def get_handler(
    config: ConfigDep,
    storage: Annotated[UploadStorage, Depends(get_storage)],
    gateway: Annotated[TranscriptionGateway, Depends(get_gateway)],
    analyzer: Annotated[SpeechAnalyzer, Depends(get_analyzer)],
) -> AnalysisHandler:
    """Returns an analysis handler wired to the request's gateway."""
    return AnalysisHandler(storage, gateway, analyzer, config.polling)
