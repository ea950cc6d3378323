import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("exam_scheduler")

if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)

logger.setLevel(os.environ.get("EXAM_SCHEDULER_LOG_LEVEL", "INFO").upper())


def set_log_level(level: str) -> None:
    logger.setLevel(level.upper())
