# portal/core/logger.py
import logging
import sys

from portal.core.config import CONFIG

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"

_logger = logging.getLogger("college_portal")


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach the stdout handler once and (re)apply the level."""
    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        _logger.addHandler(handler)
        _logger.propagate = False

    _logger.setLevel((level or CONFIG.LOG_LEVEL).upper())
    # connection pool chatter from requests
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return _logger


configure_logging()


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return _logger.getChild(name)
    return _logger
