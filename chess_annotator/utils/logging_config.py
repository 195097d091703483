# chess_annotator/utils/logging_config.py
"""
Logging configuration for the Chess Annotator application.

`setup_logging` configures the root logger once for the whole run, with a
concise console format and a detailed file format. Console output goes
through `TqdmLoggingHandler` so log lines do not tear the ply progress bar.
"""
import logging
from typing import Iterable, List, Optional

from tqdm import tqdm

from chess_annotator.config import settings

CONSOLE_FORMAT = "%(levelname)-8s - %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TqdmLoggingHandler(logging.Handler):
    """Writes records through `tqdm.write`, above any active progress bar."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record))
            self.flush()
        except Exception:
            self.handleError(record)


def _resolve_level(log_level_str: Optional[str]) -> int:
    name = (log_level_str or settings.DEFAULT_LOG_LEVEL).upper()
    level_val = logging.getLevelName(name)
    if not isinstance(level_val, int):
        logging.warning(f"Invalid log level string: '{name}'. Defaulting to 'INFO'.")
        return logging.INFO
    return level_val


def setup_logging(
    log_level_str: Optional[str] = None,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    extra_handlers: Optional[Iterable[logging.Handler]] = None,
) -> None:
    """
    Configures application-wide logging by manipulating the root logger.

    Args:
        log_level_str: The desired logging level as a string (e.g., "INFO", "DEBUG").
                       If None, defaults to `settings.DEFAULT_LOG_LEVEL`.
        log_file: The path to the log file.
                  If None, defaults to `settings.DEFAULT_LOG_FILENAME`.
        log_to_console: Whether to output logs to the console through tqdm.
        log_to_file: Whether to output logs to the log file.
        extra_handlers: Additional pre-configured handlers to attach.
    """
    level_val = _resolve_level(log_level_str)
    effective_log_file = log_file or settings.DEFAULT_LOG_FILENAME

    root_logger = logging.getLogger()
    root_logger.setLevel(level_val)
    # Clear existing handlers to prevent duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    handlers: List[logging.Handler] = []
    if log_to_console:
        console_handler = TqdmLoggingHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(console_handler)

    if log_to_file:
        file_handler = logging.FileHandler(effective_log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    for handler in extra_handlers or ():
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(handler)

    if not handlers:
        root_logger.addHandler(logging.NullHandler())
        return

    for handler in handlers:
        root_logger.addHandler(handler)

    setup_logger = logging.getLogger(settings.APP_NAME + ".Logging")
    setup_logger.info(f"Logging initialized. Level: {logging.getLevelName(level_val)}.")
    if log_to_file:
        setup_logger.info(f"Logging to file enabled: '{effective_log_file}'.")
