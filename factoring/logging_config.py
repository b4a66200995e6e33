"""Logger factory for the factoring package."""

import logging

__all__ = ["get_logger"]

_LOGGER_PREFIX = "factoring"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the factoring namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")
