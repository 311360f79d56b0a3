"""Observability module for Evokit.

Main components:
- Logging: configure_logging, get_logger, bind_context, unbind_context
"""

from evokit.observability.logging import (
    LoggingConfig,
    LogMode,
    bind_context,
    clear_context,
    configure_logging,
    get_current_config,
    get_logger,
    is_configured,
    is_console_logging_enabled,
    reset_logging,
    set_console_logging,
    unbind_context,
)

__all__ = [
    "LogMode",
    "LoggingConfig",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_current_config",
    "get_logger",
    "is_configured",
    "is_console_logging_enabled",
    "reset_logging",
    "set_console_logging",
    "unbind_context",
]
