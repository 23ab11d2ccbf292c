"""
Speech Coach Service.

Entry point for the speech analysis API.
"""

import uvicorn
from ddtrace import patch_all

from speech_coach.app import create_app
from speech_coach.config import load_config_or_exit
from speech_coach.logging import setup_logging

patch_all()

logger = setup_logging()

_config = load_config_or_exit()

app = create_app(_config)


def run():
    """Starts the API server."""
    logger.info(
        "Starting speech coach API",
        extra={"host": _config.server.host, "port": _config.server.port},
    )
    uvicorn.run(app, host=_config.server.host, port=_config.server.port, log_config=None)


if __name__ == "__main__":
    run()
