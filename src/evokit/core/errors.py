"""Error hierarchy for Evokit.

This module defines the exception hierarchy for Evokit. Every error raised
by the engine signals misuse or bad data; nothing in the core retries.

Exception Hierarchy:
    EvokitError (base)
    ├── ConfigError       - Invalid parameters, config files
    ├── ValidationError   - Bad data at a call site (negative fitness, lengths)
    └── EngineStateError  - Engine driven out of order
"""

from typing import Any


class EvokitError(Exception):
    """Root of every error Evokit raises on purpose.

    Catch this to handle engine, operator and config failures together.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigError(EvokitError):
    """Error from configuration of the engine or its operators.

    Raised when an operator, annealer or fitness policy is constructed with
    invalid parameters, and when configuration loading, parsing, or
    validation fails.

    Attributes:
        config_key: The configuration key that caused the error.
        config_file: Path to the config file if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        config_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


class ValidationError(EvokitError):
    """Error from data handed to an operator.

    Raised at the call site when the data violates an operator's
    precondition: negative fitness for proportionate selection, an empty
    population asked for its best member, parents of unequal length.

    Attributes:
        field: The field that failed validation.
        value: The invalid value.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable error description.
            field: The field that failed validation.
            value: The invalid value.
            details: Optional dict with additional context.
        """
        super().__init__(message, details)
        self.field = field
        self.value = value

    def __str__(self) -> str:
        """Return string representation including the offending field."""
        base = self.message
        if self.field:
            base = f"{base} (field: {self.field}, value: {self.value!r})"
        if self.details:
            base = f"{base} (details: {self.details})"
        return base


class EngineStateError(EvokitError):
    """Error from driving the engine out of order.

    Raised when evolve() is called without bound operators, a second time
    after the operators were consumed, or with an empty seed set.

    Attributes:
        state: The engine state at the time of the error.
    """

    def __init__(
        self,
        message: str,
        *,
        state: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize engine state error.

        Args:
            message: Human-readable error description.
            state: Name of the engine state when the error occurred.
            details: Optional dict with additional context.
        """
        super().__init__(message, details)
        self.state = state
