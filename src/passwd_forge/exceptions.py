"""
Common exceptions shared across Passwd Forge modules.

This module provides the exception hierarchy used throughout the Passwd Forge
system. Every concrete exception corresponds to exactly one ``ErrorKind`` so
callers can branch on ``exc.kind`` (or the class) rather than message text.
"""

from typing import Any, ClassVar, Dict, Optional, Type

from passwd_forge.configs.config_enums import ErrorKind


class PasswdForgeError(Exception):
    """Base exception for all Passwd Forge errors."""

    kind: ClassVar[Optional[ErrorKind]] = None

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        value: Any = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """
        Initialize with detailed error message and optional context.

        Args:
            message: Error description with context
            key: Configuration key the error relates to, if any
            value: Offending value, if any
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.__cause__ = cause
        self.message = message
        self.key = key
        self.value = value
        self.cause = cause

    def __str__(self) -> str:
        """Provide detailed error message including cause if available."""
        error_msg = self.message
        if self.cause:
            error_msg += f" | Cause: {str(self.cause)}"
        return error_msg


# Configuration validation


class ConfigValidationError(PasswdForgeError):
    """Base exception for configurations rejected by the validator."""

    pass


class UnknownKeyError(ConfigValidationError):
    """Raised when a key is not part of the configuration schema."""

    kind = ErrorKind.UNKNOWN_KEY


class TypeMismatchError(ConfigValidationError):
    """Raised when a value's shape disagrees with its key's schema entry."""

    kind = ErrorKind.TYPE_MISMATCH


class ValueRejectedError(ConfigValidationError):
    """Raised when a correctly shaped value fails its key's predicate."""

    kind = ErrorKind.VALUE_REJECTED


class MissingRequiredKeyError(ConfigValidationError):
    """Raised when a required key is absent from a configuration."""

    kind = ErrorKind.MISSING_REQUIRED_KEY


class CrossFieldViolationError(ConfigValidationError):
    """
    Raised when individually valid keys are inconsistent with each other.

    For example, ``padding_type='ADAPTIVE'`` without ``pad_to_length``.
    """

    kind = ErrorKind.CROSS_FIELD_VIOLATION


# Dictionary


class DictionaryError(PasswdForgeError):
    """Base exception for dictionary loading and filtering."""

    pass


class DictionaryReadError(DictionaryError):
    """Raised when the dictionary resource cannot be opened or read."""

    kind = ErrorKind.DICTIONARY_READ_ERROR


class InsufficientWordsError(DictionaryError):
    """
    Raised when fewer than the minimum number of words survive filtering.

    The floor protects the entropy of generated passwords and is never lowered.
    """

    kind = ErrorKind.INSUFFICIENT_WORDS


# Randomness


class RandomSourceError(PasswdForgeError):
    """Raised when the pluggable random source breaks its contract."""

    kind = ErrorKind.RANDOM_SOURCE_ERROR


class RandomSourceExhaustedError(PasswdForgeError):
    """Raised when the random cache is still empty after a replenish."""

    kind = ErrorKind.RANDOM_SOURCE_EXHAUSTED


# Usage


class InvalidArgumentError(PasswdForgeError):
    """Raised on bad call-site usage, e.g. a non-positive count."""

    kind = ErrorKind.INVALID_ARGUMENT


EXCEPTIONS_BY_KIND: Dict[ErrorKind, Type[PasswdForgeError]] = {
    ErrorKind.UNKNOWN_KEY: UnknownKeyError,
    ErrorKind.TYPE_MISMATCH: TypeMismatchError,
    ErrorKind.VALUE_REJECTED: ValueRejectedError,
    ErrorKind.MISSING_REQUIRED_KEY: MissingRequiredKeyError,
    ErrorKind.CROSS_FIELD_VIOLATION: CrossFieldViolationError,
    ErrorKind.DICTIONARY_READ_ERROR: DictionaryReadError,
    ErrorKind.INSUFFICIENT_WORDS: InsufficientWordsError,
    ErrorKind.RANDOM_SOURCE_ERROR: RandomSourceError,
    ErrorKind.RANDOM_SOURCE_EXHAUSTED: RandomSourceExhaustedError,
    ErrorKind.INVALID_ARGUMENT: InvalidArgumentError,
}
