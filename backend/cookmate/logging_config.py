"""Logging configuration helpers."""

import logging


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``cookmate`` logger."""
    logger = logging.getLogger("cookmate")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
