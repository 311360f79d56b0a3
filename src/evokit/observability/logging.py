"""Structured logging for Evokit runs.

Every module logs through a module-level ``structlog.get_logger()``; this
module decides where those events go and how they look.

- dev mode renders colored key=value lines for a terminal
- prod mode renders one JSON object per line
- console output goes to stderr so it never mixes with CLI tables on stdout
- an optional file sink keeps the rendered lines in
  ~/.evokit/logs/evokit.log, rotated at midnight UTC

The engine binds ``generation`` into the context for the duration of each
step, so operator events can be grouped by generation without passing the
index around.

Event naming convention:
    domain.entity.verb_past_tense, e.g. "engine.generation.completed",
    "survivor.population.pruned", "fitness.annealing.temperature_updated"

Usage:
    from evokit.observability import LoggingConfig, LogMode, configure_logging

    configure_logging(LoggingConfig(mode=LogMode.PROD, log_level="DEBUG"))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import partialmethod
import logging
from logging.handlers import TimedRotatingFileHandler
import os
from pathlib import Path
import sys
from typing import Any

from pydantic import BaseModel, Field
import structlog

LOG_MODE_ENV = "EVOKIT_LOG_MODE"
LOG_LEVEL_ENV = "EVOKIT_LOG_LEVEL"
LOG_FILENAME = "evokit.log"


class LogMode(str, Enum):
    """Logging output mode."""

    DEV = "dev"
    PROD = "prod"


class LoggingConfig(BaseModel):
    """Runtime logging settings.

    Attributes:
        mode: dev for console rendering, prod for JSON lines.
        log_level: Minimum level name, e.g. "INFO" or "debug".
        log_dir: Directory of the log file. Defaults to ~/.evokit/logs/.
        max_log_days: Rotated files kept before deletion.
        enable_file_logging: Also write events to log_dir/evokit.log.
    """

    mode: LogMode = Field(default=LogMode.DEV)
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".evokit" / "logs")
    max_log_days: int = Field(default=7, ge=1, le=365)
    enable_file_logging: bool = Field(default=False)

    model_config = {"frozen": True}

    @property
    def level(self) -> int:
        """Numeric level; unknown names fall back to INFO."""
        return logging.getLevelNamesMapping().get(self.log_level.upper(), logging.INFO)


@dataclass
class _LoggingState:
    config: LoggingConfig | None = None
    console_enabled: bool = True


_state = _LoggingState()


def _config_from_env() -> LoggingConfig:
    mode = LogMode.PROD if os.environ.get(LOG_MODE_ENV, "").lower() == "prod" else LogMode.DEV
    return LoggingConfig(mode=mode, log_level=os.environ.get(LOG_LEVEL_ENV, "INFO"))


def _open_log_file(config: LoggingConfig) -> TimedRotatingFileHandler | None:
    if not config.enable_file_logging:
        return None

    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(config.log_dir / LOG_FILENAME),
        when="midnight",
        backupCount=config.max_log_days,
        encoding="utf-8",
        utc=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(config.level)
    return handler


def _processors(mode: LogMode) -> list[Any]:
    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if mode == LogMode.DEV
        else structlog.processors.JSONRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.format_exc_info,
        renderer,
    ]


class _StderrFileLogger:
    """Final structlog sink: stderr (switchable) plus an optional file."""

    def __init__(self, file_handler: TimedRotatingFileHandler | None) -> None:
        self._file_handler = file_handler

    def _emit(self, level: int, message: str) -> None:
        if _state.console_enabled:
            print(message, file=sys.stderr)
        if self._file_handler is not None:
            record = logging.makeLogRecord(
                {
                    "name": "evokit",
                    "levelno": level,
                    "levelname": logging.getLevelName(level),
                    "msg": message,
                }
            )
            self._file_handler.emit(record)

    debug = partialmethod(_emit, logging.DEBUG)
    info = msg = partialmethod(_emit, logging.INFO)
    warning = warn = partialmethod(_emit, logging.WARNING)
    error = exception = partialmethod(_emit, logging.ERROR)
    critical = fatal = partialmethod(_emit, logging.CRITICAL)


def set_console_logging(enabled: bool) -> None:
    """Turn stderr output on or off; the file sink is unaffected."""
    _state.console_enabled = enabled


def is_console_logging_enabled() -> bool:
    return _state.console_enabled


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog for the process.

    Safe to call again; the latest call wins. Loggers bound before a call
    may keep the previous configuration.

    Args:
        config: Logging settings. When None, EVOKIT_LOG_MODE and
            EVOKIT_LOG_LEVEL are read from the environment.
    """
    if config is None:
        config = _config_from_env()

    root = logging.getLogger()
    root.setLevel(config.level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    file_handler = _open_log_file(config)
    if file_handler is not None:
        root.addHandler(file_handler)

    structlog.configure(
        processors=_processors(config.mode),
        wrapper_class=structlog.make_filtering_bound_logger(config.level),
        context_class=dict,
        logger_factory=lambda *_: _StderrFileLogger(file_handler),
        cache_logger_on_first_use=True,
    )
    _state.config = config


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, configuring defaults on first use."""
    if _state.config is None:
        configure_logging()
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Add key-value pairs to every subsequent event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_current_config() -> LoggingConfig | None:
    """The config passed to the last configure_logging() call, if any."""
    return _state.config


def is_configured() -> bool:
    return _state.config is not None


def reset_logging() -> None:
    """Forget the current configuration and restore structlog defaults.

    Intended for tests.
    """
    _state.config = None
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
