"""
Logging setup for agentcore.

Library modules only create loggers with logging.getLogger(__name__) and
never configure handlers. Applications (including the agentcore CLI) call
configure_logging() once to route the "agentcore" logger hierarchy to
stderr.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "agentcore"

_HANDLER_ATTR = "_agentcore_handler"


def configure_logging(level: str | int = "WARNING", rich: bool = True) -> logging.Logger:
    """
    Configure the "agentcore" logger.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Logging level name or number
        rich: Render with rich.logging.RichHandler instead of a plain handler

    Returns:
        The configured "agentcore" logger

    Raises:
        ValueError: If `level` is not a known logging level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_ATTR, False):
            logger.removeHandler(existing)

    handler: logging.Handler
    if rich:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    setattr(handler, _HANDLER_ATTR, True)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
