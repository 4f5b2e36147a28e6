"""Package logger factory."""

import json
import logging
import sys
import time

ROOT_LOGGER = "schnorrchain"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, UTC timestamps."""

    converter = time.gmtime

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def get_logger(name=ROOT_LOGGER, level=None):
    """
    Return a logger under the ``schnorrchain`` namespace.

    The handler lives on the package root logger only, so module loggers
    (``schnorrchain.delegation`` …) propagate to one structured stream
    and an embedding application can still reconfigure everything by
    touching a single logger.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
