"""Logging setup shared by the web app and its services."""

import logging
import os

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger; later calls only adjust the level."""
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric = getattr(logging, name, logging.INFO)
    logging.basicConfig(level=numeric, format=_FORMAT)
    logging.getLogger().setLevel(numeric)


# Export module-level logger factory
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


configure_logging()
