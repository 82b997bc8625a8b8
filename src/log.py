import logging
import os
import sys

from constants import config

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "launch_catalog") -> logging.Logger:
    """Create the shared application logger"""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)

    level = os.environ.get(config.LOG_LEVEL_ENV_VAR, "INFO").upper()
    log.setLevel(getattr(logging, level, logging.INFO))
    return log


logger = setup_logger()
