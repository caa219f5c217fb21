import logging
import sys
import os
from typing import Optional
from datetime import datetime
from zoneinfo import ZoneInfo

# ----------------------------------------------------------------------------
# Custom handlers for real-time output
# ----------------------------------------------------------------------------
class FlushingStreamHandler(logging.StreamHandler):
    """Custom StreamHandler that forces immediate flushing for real-time output."""

    def emit(self, record):
        """Emit a record and force flush immediately."""
        try:
            super().emit(record)
            self.flush()
        except Exception:
            self.handleError(record)

class FlushingFileHandler(logging.FileHandler):
    """Custom FileHandler that forces immediate flushing, so no data is lost if a run is interrupted."""

    def emit(self, record):
        """Emit a record and force flush immediately."""
        try:
            super().emit(record)
            self.flush()
        except Exception:
            self.handleError(record)

class HostTimestampFormatter(logging.Formatter):
    """Formatter that stamps records in the host timezone taken from TZ."""

    def formatTime(self, record, datefmt=None):
        tz_name = os.environ.get('TZ', 'UTC')
        try:
            dt = datetime.fromtimestamp(record.created, ZoneInfo(tz_name))
            return dt.strftime(datefmt or DATE_FORMAT)
        except Exception:
            return super().formatTime(record, datefmt)

# ----------------------------------------------------------------------------
# Configuration
# ----------------------------------------------------------------------------
_LEVEL_BY_NAME = {
    'CRITICAL': logging.CRITICAL,
    'ERROR': logging.ERROR,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
}

FILE_LOG_LEVEL = _LEVEL_BY_NAME.get(os.environ.get('THREADBENCH_LOG_LEVEL', 'INFO').upper(), logging.INFO)
CONSOLE_LOG_LEVEL = logging.INFO
FILE_FORMAT = '[%(asctime)s] [%(name)s] [%(threadName)s] [%(levelname)s] %(message)s'
CONSOLE_FORMAT = '%(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# ----------------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------------
def _cleanup_handlers(logger: logging.Logger) -> None:
    """
    Remove and close all handlers attached to the given logger.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        try:
            handler.close()
        except Exception:
            pass

# ----------------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------------
def get_logger(name: str,
               log_file: Optional[str] = None,
               overwrite: bool = True,
               console: bool = True,
               console_level: int = CONSOLE_LOG_LEVEL) -> logging.Logger:
    """
    Create or retrieve a named logger configured with optional console and file handlers.

    Args:
        name:          the logger's name/name-space
        log_file:      path to a file to log into; if None, no file handler is added
        overwrite:     if True, open the file in 'w' mode; otherwise append
        console:       if True, add a console handler; if False, log only to file
        console_level: minimum level shown on the console

    Returns:
        A logging.Logger instance, with propagation disabled.
    """
    logger = logging.getLogger(name)
    # Set to lowest level; handlers control effective levels
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    _cleanup_handlers(logger)

    if console:
        console_handler = FlushingStreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    if log_file:
        mode = 'w' if overwrite else 'a'
        file_handler = FlushingFileHandler(str(log_file), mode=mode)
        file_handler.setLevel(FILE_LOG_LEVEL)
        file_handler.setFormatter(HostTimestampFormatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_file_only_logger(name: str,
                         log_file: str,
                         level: int = logging.INFO) -> logging.Logger:
    """
    Create a file-only logger (no console output).

    Args:
        name: Logger name
        log_file: Path to log file (will append)
        level: Minimum log level

    Returns:
        Logger instance configured with only a file handler
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    _cleanup_handlers(logger)

    file_handler = FlushingFileHandler(str(log_file), mode='a')
    file_handler.setLevel(level)
    file_handler.setFormatter(HostTimestampFormatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    return logger
