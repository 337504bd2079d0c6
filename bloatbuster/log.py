import logging
from logging import FileHandler, Handler, StreamHandler
import os
from typing import List, Optional

logger = logging.getLogger("bloatbuster")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    handler: Optional[Handler] = None,
) -> None:
    """Configure the package logger.

    Args:
        log_level: Name of the logging level (DEBUG, INFO, ...)
        log_file: Path to a file to log to (optional)
        handler: Extra handler, e.g. Textual's devtools handler while the TUI owns the terminal
    """
    handlers: List[Handler] = []

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(file_handler)

    if handler:
        handlers.append(handler)

    # stderr fallback, only used by the headless CLI
    if not handlers:
        stream_handler = StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(stream_handler)

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logger.setLevel(level)
    logger.handlers = handlers
    logger.propagate = False
