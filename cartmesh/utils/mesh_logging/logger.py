"""
Logging for cartmesh.

Every module asks for its logger through ``get_logger(__name__)``. Loggers are
created once, cached by name and wired to the current ``LogSettings``: a
stdout handler (colored through colorlog) and, when requested, a plain-text
file handler. ``configure_logging`` swaps the settings and rewires every
logger handed out so far.

Grid code only emits DEBUG records, and the default level is WARNING, so the
library stays silent until a caller opts in.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import ClassVar

import colorlog

RECORD_FORMAT = "%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s"
LOCATION_SUFFIX = " [%(filename)s:%(lineno)d]"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


@dataclass(frozen=True)
class LogSettings:
    """Snapshot of the global logging configuration."""

    level: int = logging.WARNING
    log_file: Path | None = None
    use_colors: bool = True
    include_location: bool = False


class MeshFormatter(logging.Formatter):
    """Plain formatter that delegates to colorlog when colors are on."""

    def __init__(self, use_colors: bool = False, include_location: bool = False):
        self.use_colors = use_colors
        self.include_location = include_location

        fmt = RECORD_FORMAT + (LOCATION_SUFFIX if include_location else "")
        super().__init__(fmt, datefmt=TIMESTAMP_FORMAT)

        self.colored_formatter = (
            colorlog.ColoredFormatter("%(log_color)s" + fmt, datefmt=TIMESTAMP_FORMAT, log_colors=LEVEL_COLORS)
            if use_colors
            else None
        )

    def format(self, record: logging.LogRecord) -> str:
        if self.colored_formatter is not None:
            return self.colored_formatter.format(record)
        return super().format(record)


class MeshLogger:
    """
    Registry of cartmesh loggers.

    ``_loggers`` maps names to the loggers handed out so far. Creation and
    reconfiguration both hold ``_lock``; lookups of an already cached name
    skip it.
    """

    _lock: ClassVar[threading.Lock] = threading.Lock()
    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _settings: ClassVar[LogSettings] = LogSettings()

    @classmethod
    def settings(cls) -> LogSettings:
        return cls._settings

    @classmethod
    def configure(
        cls,
        level: str | int = "INFO",
        log_to_file: bool = False,
        log_file_path: str | Path | None = None,
        use_colors: bool = True,
        include_location: bool = False,
    ):
        """
        Replace the global settings and rewire all cached loggers.

        Args:
            level: Level name ("DEBUG", "info", ...) or numeric level
            log_to_file: Also write records to a file
            log_file_path: Target file; defaults to ./logs/cartmesh_<timestamp>.log
            use_colors: Color console output
            include_location: Append "[file:line]" to each record
        """
        log_file = None
        if log_to_file:
            log_file = Path(log_file_path) if log_file_path is not None else _timestamped_log_file()
            log_file.parent.mkdir(parents=True, exist_ok=True)

        with cls._lock:
            cls._settings = LogSettings(
                level=_resolve_level(level),
                log_file=log_file,
                use_colors=use_colors,
                include_location=include_location,
            )
            for logger in cls._loggers.values():
                cls._attach_handlers(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Cached logger for ``name``, created and wired on first request."""
        logger = cls._loggers.get(name)
        if logger is not None:
            return logger

        with cls._lock:
            # another thread may have won the race
            if name not in cls._loggers:
                logger = logging.getLogger(name)
                # handlers installed by the application win
                if not logger.handlers:
                    cls._attach_handlers(logger)
                cls._loggers[name] = logger
            return cls._loggers[name]

    @classmethod
    def _attach_handlers(cls, logger: logging.Logger):
        settings = cls._settings
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(settings.level)
        logger.propagate = False

        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        handlers[0].setFormatter(MeshFormatter(settings.use_colors, settings.include_location))
        if settings.log_file is not None:
            file_handler = logging.FileHandler(settings.log_file)
            file_handler.setFormatter(MeshFormatter(False, settings.include_location))
            handlers.append(file_handler)

        for handler in handlers:
            handler.setLevel(settings.level)
            logger.addHandler(handler)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level '{level}'")
    return resolved


def _timestamped_log_file() -> Path:
    return Path.cwd() / "logs" / f"cartmesh_{datetime.now():%Y%m%d_%H%M%S}.log"


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Logger for ``name``, or for the calling module when no name is given.
    """
    if name is None:
        import inspect

        caller = inspect.currentframe().f_back
        name = caller.f_globals.get("__name__", "cartmesh") if caller is not None else "cartmesh"

    return MeshLogger.get_logger(name)


def configure_logging(**kwargs):
    """Shortcut for ``MeshLogger.configure(**kwargs)``."""
    MeshLogger.configure(**kwargs)


def configure_development_logging(include_location: bool = True):
    """DEBUG to the console, with source locations."""
    configure_logging(level="DEBUG", use_colors=True, include_location=include_location)
    get_logger("cartmesh.development").debug("Development logging enabled")


class LoggedOperation:
    """
    Log the start and end of a block together with its wall-clock time.

    Exceptions are logged at ERROR and re-raised. ``elapsed`` holds the
    duration in seconds once the block has finished.

    Example:
        >>> with LoggedOperation(logger, "centroids", logging.DEBUG):
        ...     grid.centroids()
    """

    def __init__(self, logger: logging.Logger, operation_name: str, log_level: int = logging.INFO):
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = log_level
        self.elapsed: float | None = None
        self._start = 0.0

    def __enter__(self):
        self.logger.log(self.log_level, "Starting %s", self.operation_name)
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self._start
        if exc_type is None:
            self.logger.log(self.log_level, "Completed %s in %.3fs", self.operation_name, self.elapsed)
        else:
            self.logger.error("Failed %s after %.3fs: %s", self.operation_name, self.elapsed, exc_val)
        return False
