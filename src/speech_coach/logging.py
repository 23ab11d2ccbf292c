import logging
import os
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "speech-coach"

_configured = False


def setup_logging(level: str | None = None):
    """
    Configures structured JSON logging for the service and returns the root logger.

    Records are written to stdout as JSON with timestamp, level, logger name,
    message, trace_id, span_id and a static service field; anything passed via
    ``extra`` is merged in. Uvicorn's loggers share the same handler so access
    logs come out in the same format.

    Handlers are installed once per process. Later calls only adjust the level
    when one is given explicitly.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL environment variable, then INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    global _configured

    root_logger = logging.getLogger()
    resolved_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    if _configured:
        if level:
            root_logger.setLevel(resolved_level)
        return root_logger

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s",
        static_fields={"service": SERVICE_NAME},
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger.setLevel(resolved_level)
    root_logger.handlers = [stream_handler]

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        server_logger = logging.getLogger(logger_name)
        server_logger.setLevel(resolved_level)
        server_logger.handlers = [stream_handler]
        server_logger.propagate = False

    _configured = True
    return root_logger
