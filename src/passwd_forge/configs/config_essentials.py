"""
Configuration Essentials Module

This module serves as the type foundation for Passwd Forge's configuration
architecture: shared aliases, hard constants, and the Result/Error pair used
for exception-free error propagation between components.

Key Features:
    - Type aliases for configuration dictionaries and environment mappings
    - Result pattern for functional error propagation
    - Error objects classified by kind, category and severity
    - Bridges from Result failures back to typed exceptions

Error Handling:
    - Every failure carries an ``ErrorKind`` that callers branch on
    - ``Error.context`` keeps the offending key and a printable value
    - ``Result.unwrap()`` raises the exception class matching the kind

Usage Guidelines:
    - Import specific names rather than using wildcard imports
    - Return ``Result`` where a caller is expected to inspect the outcome
    - Raise from ``passwd_forge.exceptions`` where failure is exceptional
"""

import json
import sys
import traceback
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    Final,
    Generic,
    Optional,
    Tuple,
    TypeAlias,
    TypeVar,
    Union,
    cast,
)

from passwd_forge.configs.config_enums import ErrorKind
from passwd_forge.exceptions import EXCEPTIONS_BY_KIND, PasswdForgeError

# ==========================================
# Generic Type Variables
# ==========================================

# Generic type parameter for result values
T = TypeVar("T")

# ==========================================
# Constants
# ==========================================

# Minimum number of words that must survive length filtering
MIN_WORDS: Final[int] = 100

# Shortest word the dictionary loader will keep
MIN_WORD_LENGTH: Final[int] = 4

# Default logger namespace for the whole package
DEFAULT_LOGGER_NAME: Final[str] = "passwd_forge"

# ==========================================
# Basic Type Definitions
# ==========================================

# A generation configuration: schema key -> value
ConfigDict: TypeAlias = Dict[str, Any]

# Type alias for path-like objects
PathLike: TypeAlias = Union[str, Path]

# Environment variable -> (attribute name, converter)
EnvMapping: TypeAlias = Dict[str, Tuple[str, Callable[[str], Any]]]

# ==========================================
# Configuration Errors
# ==========================================


class ConfigError(Exception):
    """Base exception for ambient configuration errors."""

    pass


class EnvVarError(ConfigError):
    """Raised when an environment variable cannot be processed."""

    pass


class LoggingConfigError(ConfigError):
    """Raised when logging configuration is invalid."""

    pass


# ==========================================
# Result and Error Handling Types
# ==========================================


class ErrorCategory(Enum):
    """Categories of errors for systematic handling and reporting."""

    VALIDATION = auto()  # Configuration rejected by the schema
    RESOURCE = auto()  # Dictionary unavailable or too small
    EXTERNAL = auto()  # Pluggable random source misbehaved
    USAGE = auto()  # Bad call-site arguments


class ErrorSeverity(Enum):
    """Severity levels for errors to guide handling strategies."""

    FATAL = auto()  # Built-in defaults cannot form a valid configuration
    ERROR = auto()  # Operation failed completely


CATEGORY_BY_KIND: Final[Dict[ErrorKind, ErrorCategory]] = {
    ErrorKind.UNKNOWN_KEY: ErrorCategory.VALIDATION,
    ErrorKind.TYPE_MISMATCH: ErrorCategory.VALIDATION,
    ErrorKind.VALUE_REJECTED: ErrorCategory.VALIDATION,
    ErrorKind.MISSING_REQUIRED_KEY: ErrorCategory.VALIDATION,
    ErrorKind.CROSS_FIELD_VIOLATION: ErrorCategory.VALIDATION,
    ErrorKind.DICTIONARY_READ_ERROR: ErrorCategory.RESOURCE,
    ErrorKind.INSUFFICIENT_WORDS: ErrorCategory.RESOURCE,
    ErrorKind.RANDOM_SOURCE_ERROR: ErrorCategory.EXTERNAL,
    ErrorKind.RANDOM_SOURCE_EXHAUSTED: ErrorCategory.EXTERNAL,
    ErrorKind.INVALID_ARGUMENT: ErrorCategory.USAGE,
}


def _printable(value: Any) -> Any:
    """Return ``value`` if it is JSON-safe, otherwise its string form."""
    if isinstance(value, (str, int, float, bool, type(None))):
        return value
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return str(value)


@dataclass(frozen=True)
class Error:
    """
    Immutable error object with context for accurate diagnostics.

    Attributes:
        message: Human-readable error message
        kind: Machine-readable error kind
        category: Error category for classification
        severity: Error severity for handling strategy
        context: Additional JSON-safe context, including ``key``/``value``
        trace: Stack trace when created while handling an exception
    """

    message: str
    kind: ErrorKind
    category: ErrorCategory
    severity: ErrorSeverity
    context: Dict[str, Any] = field(default_factory=dict)
    trace: Optional[str] = None

    @property
    def key(self) -> Optional[str]:
        """Configuration key the error relates to, if any."""
        return self.context.get("key")

    @classmethod
    def create(
        cls,
        kind: ErrorKind,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> "Error":
        """
        Factory method for creating errors with standardized formatting.

        Args:
            kind: Machine-readable error kind
            message: Human-readable error description
            context: Optional contextual information (made JSON-safe)
            severity: Error severity for handling strategy

        Returns:
            Fully initialized Error object
        """
        serializable_context: Dict[str, Any] = {}
        if context:
            for k, v in context.items():
                serializable_context[k] = _printable(v)

        trace = traceback.format_exc() if sys.exc_info()[0] is not None else None

        return cls(
            message=message,
            kind=kind,
            category=CATEGORY_BY_KIND[kind],
            severity=severity,
            context=serializable_context,
            trace=trace,
        )

    @classmethod
    def from_exception(cls, exc: PasswdForgeError) -> "Error":
        """Build an Error describing a raised Passwd Forge exception."""
        kind = exc.kind or ErrorKind.INVALID_ARGUMENT
        context: Dict[str, Any] = {}
        if exc.key is not None:
            context["key"] = exc.key
        if exc.value is not None:
            context["value"] = exc.value
        return cls.create(kind, exc.message, context)

    def to_exception(self) -> PasswdForgeError:
        """Return the exception class matching this error's kind."""
        exc_type = EXCEPTIONS_BY_KIND[self.kind]
        return exc_type(self.message, key=self.key, value=self.context.get("value"))


@dataclass(frozen=True)
class Result(Generic[T]):
    """Monadic result type for functional error handling without exceptions.

    Encapsulates either a success value (`value`) or an error object (`error`).

    Attributes:
        value: The success value (present if `is_success` is True).
        error: The error object (present if `is_success` is False).
    """

    value: Optional[T] = None
    error: Optional[Error] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents a successful operation."""
        return self.error is None

    @property
    def is_failure(self) -> bool:
        """Check if the result represents a failed operation."""
        return self.error is not None

    def unwrap(self) -> T:
        """Return the success value, raising the matching exception on failure.

        Raises:
            PasswdForgeError: The subclass matching ``error.kind``.

        Returns:
            The success value of type T.
        """
        if self.error is not None:
            raise self.error.to_exception()
        return cast(T, self.value)

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Create a success Result."""
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> "Result[T]":
        """Create a failure Result using the Error factory."""
        return cls(error=Error.create(kind, message, context, severity))

    @classmethod
    def from_exception(cls, exc: PasswdForgeError) -> "Result[T]":
        """Create a failure Result from a caught Passwd Forge exception."""
        return cls(error=Error.from_exception(exc))


# ==========================================
# Module Exports
# ==========================================

__all__ = [
    # Basic Types
    "ConfigDict",
    "PathLike",
    "EnvMapping",
    # Constants
    "MIN_WORDS",
    "MIN_WORD_LENGTH",
    "DEFAULT_LOGGER_NAME",
    # Config errors
    "ConfigError",
    "EnvVarError",
    "LoggingConfigError",
    # Error Handling
    "ErrorKind",
    "ErrorCategory",
    "ErrorSeverity",
    "CATEGORY_BY_KIND",
    "Error",
    "Result",
]
