"""
debug.py - Debug and logging support for the Connect Four engine

Wraps the standard logging module with a process-wide DebugManager that
adds a TRACE level, per-component filtering and simple performance timers.
Import the ``debug`` singleton rather than creating new managers.
"""

import logging
import sys
import time
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Set

LOGGER_NAME = "connect_four"


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Logging threshold for each debug level
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Manages debug and logging output for the Connect Four engine."""

    def __init__(self, level: DebugLevel = DebugLevel.INFO):
        self._level = level
        self._enabled = True
        self._log_file: Optional[str] = None
        self._components: Set[str] = set()  # Empty set means all components
        self._timers: Dict[str, float] = {}
        self._logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(LEVEL_MAP[self._level])
        # Several managers share one logger; only the first adds a console handler
        if not any(type(h) is logging.StreamHandler for h in logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
            logger.addHandler(handler)

        return logger

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  enabled: Optional[bool] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None):
        """
        Configure the debug manager.

        Args:
            level: Debug level to set
            enabled: Whether logging is enabled at all
            log_file: Path of a file to mirror log output to ("" disables it)
            components: Components to log for (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            self._set_log_file(log_file)

        if components is not None:
            self._components = set(components)

    def _set_log_file(self, log_file: str):
        for handler in self._logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                self._logger.removeHandler(handler)
                handler.close()

        self._log_file = log_file or None
        if self._log_file:
            handler = logging.FileHandler(self._log_file)
            handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            self._logger.addHandler(handler)

    def is_enabled_for(self, level: DebugLevel, component: Optional[str] = None) -> bool:
        """Check if a message at this level and component would be logged."""
        if not self._enabled or level == DebugLevel.NONE:
            return False
        if level.value > self._level.value:
            return False
        if component and self._components and component not in self._components:
            return False
        return True

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None):
        """
        Log a message at the given level.

        Args:
            level: Debug level of the message
            message: The message to log
            component: Optional component tag used for filtering
        """
        if not self.is_enabled_for(level, component):
            return

        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"

        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, name: str):
        """Start a named performance timer."""
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a named timer and log the elapsed time at DEBUG level.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(name, None)
        if started is None:
            self.warning(f"Timer '{name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.debug(f"Performance [{name}]: {elapsed:.6f} seconds", component)
        return elapsed

    @contextmanager
    def timed(self, name: str, component: Optional[str] = None) -> Iterator[None]:
        """Time the enclosed block with a named timer."""
        self.start_timer(name)
        try:
            yield
        finally:
            self.end_timer(name, component)

    def set_from_string(self, level_str: str):
        """Set the debug level from its name, e.g. from a command-line flag."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return
        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")


debug = DebugManager()
