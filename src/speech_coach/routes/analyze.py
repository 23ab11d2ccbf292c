"""Speech analysis endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from speech_coach.dependencies import ConfigDep, get_handler
from speech_coach.domain import AudioUpload
from speech_coach.exceptions import GENERIC_FAILURE_MESSAGE, SpeechAnalysisError
from speech_coach.handlers import AnalysisHandler
from speech_coach.logging import setup_logging
from speech_coach.response_models import AnalyzeResponse, ErrorResponse

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["analysis"])

HandlerDep = Annotated[AnalysisHandler, Depends(get_handler)]


def _error_response(
    status_code: int, message: str, error: Exception, include_details: bool
) -> JSONResponse:
    body = ErrorResponse(
        error=message, details=str(error) if include_details else None
    )
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {"audio": {"type": "string", "format": "binary"}},
                    }
                }
            }
        }
    },
)
async def analyze_recording(
    handler: HandlerDep,
    config: ConfigDep,
    request: Request,
):
    """
    Analyzes a recorded speech.

    Transcribes the multipart `audio` file and returns pacing and fluency
    feedback. An `audio` field that is not a file counts as no upload.
    """
    form = await request.form()
    audio = form.get("audio")
    upload = None
    if isinstance(audio, UploadFile):
        upload = AudioUpload(
            data=await audio.read(),
            filename=audio.filename,
            content_type=audio.content_type,
        )

    try:
        result = await handler.process(upload)
    except SpeechAnalysisError as e:
        if e.status_code >= 500:
            logger.exception(
                "Speech analysis failed", extra={"error_type": type(e).__name__}
            )
        else:
            logger.warning("Rejected analysis request", extra={"reason": str(e)})
        return _error_response(
            e.status_code,
            e.user_message,
            e,
            include_details=e.status_code >= 500 and not config.server.is_production,
        )
    except Exception as e:
        logger.exception("Unexpected error during speech analysis")
        return _error_response(
            500,
            GENERIC_FAILURE_MESSAGE,
            e,
            include_details=not config.server.is_production,
        )

    return AnalyzeResponse.from_result(result)
