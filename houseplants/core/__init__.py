"""House Plants Core Package."""

import logging
import sys

QUIET_LOGGERS = ("httpx", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(level: str = "INFO") -> None:
    """Route ``houseplants.*`` records to stdout at ``level``.

    Safe to call more than once: the application logger is configured
    directly, so it works even when the root logger already has handlers.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logger.setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger("houseplants")
