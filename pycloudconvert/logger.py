"""
A simple logger wrapper that provides consistent, verbosity-driven logging across the pycloudconvert package.
"""
import os
import sys
import time
from typing import Optional, Union
from enum import Enum, auto


class LogLevel(Enum):
    """Log levels for controlling verbosity."""
    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


# Verbosity scale of the command line (0-4) mapped onto console levels.
VERBOSITY_LEVELS = {
    0: LogLevel.ERROR,
    1: LogLevel.WARNING,
    2: LogLevel.INFO,
    3: LogLevel.DEBUG,
    4: LogLevel.DEBUG,
}
DEFAULT_VERBOSITY = 2


def level_for_verbosity(verbosity: int) -> LogLevel:
    """Map a 0-4 verbosity value to a LogLevel, clamping out-of-range values."""
    verbosity = min(max(int(verbosity), 0), 4)
    return VERBOSITY_LEVELS[verbosity]


class ConvertLogger:
    """
    A configurable logger that can write to console, file, or both with different log levels.
    """
    def __init__(
        self,
        mode: str = 'console',
        log_file: Optional[str] = None,
        console_level: LogLevel = LogLevel.INFO,
        file_level: LogLevel = LogLevel.DEBUG,
        include_timestamp: bool = True
    ):
        """
        Initialize the logger.

        Args:
            mode: 'console', 'file', or 'both'
            log_file: Path to log file (required if mode is 'file' or 'both')
            console_level: Minimum log level for console output
            file_level: Minimum log level for file output
            include_timestamp: Whether to include timestamps in log messages
        """
        self.mode = mode
        self.log_file = log_file
        self.console_level = console_level
        self.file_level = file_level
        self.include_timestamp = include_timestamp

        if mode not in ['console', 'file', 'both']:
            raise ValueError("mode must be 'console', 'file', or 'both'")

        if mode in ['file', 'both']:
            if not log_file:
                raise ValueError("log_file must be provided when mode is 'file' or 'both'")
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            with open(log_file, 'w') as f:
                f.write('')

    @classmethod
    def from_verbosity(
        cls,
        verbosity: int = DEFAULT_VERBOSITY,
        log_file: Optional[str] = None,
        include_timestamp: bool = True
    ) -> 'ConvertLogger':
        """
        Build a logger whose console level follows a 0-4 verbosity value.

        When log_file is given the logger writes to both console and file,
        and the file receives everything down to DEBUG.
        """
        mode = 'both' if log_file else 'console'
        return cls(
            mode=mode,
            log_file=log_file,
            console_level=level_for_verbosity(verbosity),
            include_timestamp=include_timestamp,
        )

    def isEnabledFor(self, level: LogLevel) -> bool:
        """
        Check if logging is enabled for the specified level.
        Compatible with Python's standard logging interface.
        """
        console_enabled = (self.mode in ['console', 'both']) and (level.value >= self.console_level.value)
        file_enabled = (self.mode in ['file', 'both']) and (level.value >= self.file_level.value)
        return console_enabled or file_enabled

    def _format_message(self, message: str, level: str) -> str:
        """Format the log message with timestamp and level."""
        timestamp = f"[{time.strftime('%Y-%m-%d %H:%M:%S')}] " if self.include_timestamp else ""
        level_str = f"[{level.upper()}] "
        return f"{timestamp}{level_str}{message}"

    def _log_to_console(self, message: str, level: LogLevel) -> None:
        if self.mode in ['console', 'both'] and level.value >= self.console_level.value:
            print(message, file=sys.stderr if level.value >= LogLevel.WARNING.value else sys.stdout)

    def _log_to_file(self, message: str, level: LogLevel) -> None:
        if self.mode in ['file', 'both'] and self.log_file and level.value >= self.file_level.value:
            with open(self.log_file, 'a') as f:
                f.write(message + '\n')

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        """
        Log a message with the specified level.

        Args:
            message: The message to log
            level: The log level (default: INFO)
        """
        formatted_msg = self._format_message(message, level.name.lower())
        self._log_to_console(formatted_msg, level)
        self._log_to_file(formatted_msg, level)

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def warning(self, message: str) -> None:
        self.log(message, LogLevel.WARNING)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def critical(self, message: str) -> None:
        self.log(message, LogLevel.CRITICAL)

    def __call__(self, message: str, level: Union[str, LogLevel] = LogLevel.INFO) -> None:
        """
        Allow the logger instance to be called directly.

        Args:
            message: The message to log
            level: The log level as a string or LogLevel enum (default: 'info')
        """
        if isinstance(level, str):
            level = getattr(LogLevel, level.upper(), LogLevel.INFO)
        self.log(message, level)


def get_logger(verbosity: int = DEFAULT_VERBOSITY) -> ConvertLogger:
    """
    Return a new console logger for the given verbosity.

    There is no shared default instance; callers that care about output
    build one logger and pass it down explicitly.
    """
    return ConvertLogger.from_verbosity(verbosity)
