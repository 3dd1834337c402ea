"""Logging setup for the command-line entry point."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure root logging to stderr at the given level.

    Raises:
        ValueError: If the level name is unknown
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: '{log_level}'")
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logging.getLogger("sqlalchemy").setLevel(max(level, logging.WARNING))
