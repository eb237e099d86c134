import logging
from typing import Optional

from rich.logging import RichHandler


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a module logger with a rich handler attached once."""
    logger = logging.getLogger(name)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    if level is not None:
        logger.setLevel(level)

    return logger
