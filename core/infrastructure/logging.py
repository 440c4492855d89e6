"""
Logging infrastructure.

One place that decides the log format for the API process and for
standalone scripts.
"""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once per process.

    Args:
        level: Level name (DEBUG, INFO, WARNING...)
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    # SQL echo goes through its own logger; keep it quiet unless asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger
