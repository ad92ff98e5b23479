import os
import traceback
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_ORDER = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
}


class Slogger:
    log_path = "logs/warehouse_admin.log"
    min_level = LogLevel.INFO

    @classmethod
    def configure(cls, log_path: Optional[str] = None, level: Optional[str] = None):
        """
        Point the logger at a different file and/or change the minimum level.

        Args:
            log_path: File to append log lines to
            level: Name of the lowest level that gets written (e.g. "DEBUG")
        """
        if log_path:
            cls.log_path = os.path.expanduser(log_path)
        if level:
            cls.min_level = LogLevel(level.upper())

    @classmethod
    def _ensure_log_directory(cls):
        """Ensure that the logs directory exists."""
        log_dir = os.path.dirname(cls.log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

    @classmethod
    def _write(cls, line: str):
        cls._ensure_log_directory()
        with open(cls.log_path, "a", encoding="utf-8") as f:
            f.write(line)

    @classmethod
    def log(cls, message: str, level: LogLevel = LogLevel.INFO, context: Optional[Dict[str, Any]] = None):
        """
        Log a message with an optional level and context.

        Args:
            message: The message to log
            level: The log level (DEBUG, INFO, WARNING, ERROR)
            context: Optional dictionary of contextual information
        """
        if _LEVEL_ORDER[level] < _LEVEL_ORDER[cls.min_level]:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_message = f"{timestamp} - {level.value} - {message}"

        if context:
            context_str = " | ".join([f"{k}={v}" for k, v in context.items()])
            log_message += f" | {context_str}"

        cls._write(log_message + "\n")

    @classmethod
    def debug(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a debug message."""
        cls.log(message, LogLevel.DEBUG, context)

    @classmethod
    def info(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an info message."""
        cls.log(message, LogLevel.INFO, context)

    @classmethod
    def warning(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a warning message."""
        cls.log(message, LogLevel.WARNING, context)

    @classmethod
    def error(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an error message."""
        cls.log(message, LogLevel.ERROR, context)

    @classmethod
    def exception(cls, e: Exception, message: str = "Exception occurred", context: Optional[Dict[str, Any]] = None):
        """
        Log an exception with traceback.

        Args:
            e: The exception to log
            message: An optional message describing the context of the exception
            context: Optional dictionary of contextual information
        """
        exc_type = type(e).__name__
        error_context = dict(context or {})
        error_context.update({
            "exception_type": exc_type,
            "exception_message": str(e),
        })

        cls.error(f"{message}: {exc_type} - {e}", error_context)

        # traceback on its own lines so the summary line stays greppable
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cls._write(f"{timestamp} - {LogLevel.ERROR.value} - TRACEBACK:\n{traceback.format_exc()}\n")
