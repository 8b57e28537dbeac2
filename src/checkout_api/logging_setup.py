from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from checkout_api.config import Settings

LOGGER_NAME = "checkout_api"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        h = logging.StreamHandler()
        if settings.log_json:
            h.setFormatter(JsonFormatter(_FORMAT))
        else:
            h.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(h)
    logger.setLevel(settings.log_level)
    return logger
