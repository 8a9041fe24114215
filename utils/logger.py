"""
Logging for the DeepSeek client, the console and the bridge.
Operator-facing; the caller-facing debug channel is events.debug_info.
"""
import logging
import sys
from typing import Optional, TextIO

from config import Config


class ColoredFormatter(logging.Formatter):
    """Prefixes the level name with an ANSI color when writing to a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = True):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)

        # records are shared between handlers, put the plain name back afterwards
        plain = record.levelname
        record.levelname = f"{self.LEVEL_COLORS.get(record.levelno, '')}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def setup_logger(name: str, level: Optional[str] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure a named logger once.

    Args:
        name: Logger name
        level: Level name, defaults to Config.LOG_LEVEL
        stream: Output stream, defaults to stdout

    Returns:
        The logger; repeated calls return it unchanged
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    stream = stream or sys.stdout
    logger.setLevel((level or Config.LOG_LEVEL).upper())
    logger.propagate = False

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        use_color=hasattr(stream, "isatty") and stream.isatty()
    ))
    logger.addHandler(handler)
    return logger


app_logger = setup_logger("deepseek_client")
