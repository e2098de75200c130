"""Diagnostic output for shflags.

All modules log to the ``shflags`` logger hierarchy. Nothing is configured
on import; host scripts that want shell-style ``flags:WARNING ...`` lines on
stderr call :func:`configure_logging`.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "shflags"
LOG_FORMAT = "flags:%(levelname)s %(message)s"


def configure_logging(
    level: Union[int, str] = logging.WARNING, stream: Optional[TextIO] = None
) -> logging.Handler:
    """
    Send shflags diagnostics to ``stream`` (stderr by default), prefixed by severity.

    Calling this again replaces the handler installed by the previous call.

    Returns:
        logging.Handler: The installed handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_shflags_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._shflags_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return handler
