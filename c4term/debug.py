"""
debug.py - Logging for the terminal Connect Four game

Every module logs through the ``debug`` singleton defined here, tagging each
message with a component name ("board", "session", "cli") so output can be
narrowed to the part of the game being investigated.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, List, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Mapping to standard logging levels
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,  # TRACE is emitted as DEBUG with a prefix
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Manages debug and logging output for the game."""

    def __init__(self, name: str = "c4term", level: DebugLevel = DebugLevel.WARNING):
        self._level = level
        self._log_file: Optional[str] = None
        self._enabled_components: Set[str] = set()  # empty means all components
        self._logger = self._setup_logger(name)
        self._performance_markers: Dict[str, float] = {}

    def _setup_logger(self, name: str) -> logging.Logger:
        """Configure and return the package logger."""
        logger = logging.getLogger(name)
        logger.setLevel(LEVEL_MAP[self._level])
        logger.propagate = False

        # Importing twice (e.g. run.py and -m) must not double every line
        if not any(getattr(h, '_c4term_console', False) for h in logger.handlers):
            # stderr keeps log lines out of the rendered board on stdout
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            console_handler._c4term_console = True
            logger.addHandler(console_handler)

        return logger

    @property
    def level(self) -> DebugLevel:
        return self._level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def configure(self, level: DebugLevel = None,
                  log_file: str = None,
                  components: List[str] = None):
        """
        Configure the debug manager settings.

        Args:
            level: Debug level to set
            log_file: Path to a log file ("" removes file logging)
            components: Components to log for (empty list for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()

            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._enabled_components = set(components)

    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        if self._level == DebugLevel.NONE:
            return False

        if level.value > self._level.value:
            return False

        if component and self._enabled_components and component not in self._enabled_components:
            return False

        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """
        Log a message at the specified level.

        Args:
            level: Debug level for the message
            message: The message to log
            component: Optional component name for filtering
        """
        if not self._should_log(level, component):
            return

        formatted_message = f"[{component}] {message}" if component else message

        if level == DebugLevel.ERROR:
            self._logger.error(formatted_message)
        elif level == DebugLevel.WARNING:
            self._logger.warning(formatted_message)
        elif level == DebugLevel.INFO:
            self._logger.info(formatted_message)
        elif level == DebugLevel.DEBUG:
            self._logger.debug(formatted_message)
        elif level == DebugLevel.TRACE:
            self._logger.debug(f"TRACE: {formatted_message}")

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker_name: str):
        """Start a timer for performance tracking."""
        self._performance_markers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """
        End a timer and log the elapsed time at TRACE level.

        Returns:
            Elapsed time in seconds, or None if the marker was never started
        """
        started = self._performance_markers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a command line name. Returns False for unknown names."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False

        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


# Shared instance used by every module
debug = DebugManager()
