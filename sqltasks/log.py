from __future__ import annotations

import logging

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a console handler to the ``sqltasks`` logger.

    Calling it again only adjusts the level.

    Args:
        level: Logging level.

    Returns:
        Logger: The package logger.
    """
    logger = logging.getLogger("sqltasks")
    logger.setLevel(level)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger  # Already configured

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATEFMT))
    handler.setLevel(level)
    logger.addHandler(handler)

    logging.getLogger("mysql.connector").setLevel(logging.WARNING)

    return logger
