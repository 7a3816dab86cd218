"""Console logging for the API process.

uvicorn is started with ``log_config=None``, so its records propagate to the
root handler installed here and share one format with the app's loggers.
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'

# held at this level or above whatever LOG_LEVEL says
QUIET_LOGGERS = {
    'uvicorn.access': logging.WARNING,
}


def setup_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout, force=True)
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, quiet_level))
