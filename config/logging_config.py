"""
Console logging setup shared by the CLI and the API.
"""

import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Install a single stdout handler on the root logger."""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice (uvicorn reload, tests)
    if logger.handlers:
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
