# src/codesum/log.py
"""Logging setup for codesum.

The base ``codesum`` logger is configured once, at process start, by the CLI
(or by whoever embeds the library). Pipeline components never configure
logging themselves: they accept a logger argument and otherwise fall back to
``get_logger`` for a namespaced child of the base logger.
"""
import logging
import sys
from typing import Optional, TextIO, Union

from codesum.config import LOGGER_NAME

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

def parse_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """Turn 'debug', 'INFO', '10' or an int into a logging level."""
    if level is None or level == "":
        return default
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved

def setup_logging(level: Union[int, str] = logging.WARNING, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the base 'codesum' logger and return it.

    Calling it again replaces the previous handler, so repeated CLI
    invocations in one process never stack handlers.
    """
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(parse_level(level))

    for handler in list(base.handlers):
        base.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    base.addHandler(handler)
    return base

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the 'codesum' namespace."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
