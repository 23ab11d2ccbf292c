"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from speech_coach import __version__
from speech_coach.config import AppConfig
from speech_coach.routes import analyze_router, health_router


def create_app(config: AppConfig) -> FastAPI:
    """Builds the API application around an already-validated configuration."""
    app = FastAPI(
        title="Speech Coach API",
        version=__version__,
        description="Analyze recorded speech and return pacing and fluency feedback.",
    )
    app.state.config = config

    allowed_origins = list(config.server.cors_allow_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials="*" not in allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(analyze_router)
    return app
