import logging

import uvicorn

from momentry.api.api_run import app
from momentry.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL
from momentry.utilities.logging_config import setup_logging

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    setup_logging(LOG_LEVEL)
    logger.info(f"Momentry API on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_config=None)
