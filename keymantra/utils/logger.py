# keymantra/utils/logger.py
import logging
import sys
from typing import Optional
from keymantra.utils.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logger(name: str = "keymantra", level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Builds the application logger: stdout always, plus a file when configured.
    Safe to call again on hot-reload; existing handlers are replaced.
    """
    app_logger = logging.getLogger(name)
    # Unknown level names fall back to INFO.
    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if app_logger.hasHandlers():
        app_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    # Keep records away from the root logger to avoid double printing.
    app_logger.propagate = False
    return app_logger


logger = configure_logger(level=settings.log_level, log_file=settings.log_file)
