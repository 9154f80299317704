"""
Logging Configuration System for Passwd Forge
=============================================

This module implements a type-safe configuration for Passwd Forge's logging
infrastructure. It controls log levels, formats and destinations and renders
them into a dictionary understood by ``logging.config.dictConfig``.

Classes:
    - LoggingConfig: Central configuration class with functional modifiers

Usage Examples:
        # Basic configuration
        config = create_default_logging_config()

        # Functional modification pattern
        debug_config = config.with_level(logging.DEBUG)

        # Integration with Python's logging system
        configure_logging(debug_config)

Design Notes:
    - Validation collects every problem before reporting
    - Validation results are returned as Result objects
    - Library modules only ever call ``logging.getLogger(__name__)``; handlers
      are attached here, by the application, never implicitly on import
"""

import logging
import logging.config
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Union

from passwd_forge.configs.config_enums import (
    ErrorKind,
    LogDestination,
    LogFormatTemplate,
)
from passwd_forge.configs.config_essentials import (
    DEFAULT_LOGGER_NAME,
    EnvMapping,
    EnvVarError,
    LoggingConfigError,
    Result,
)

VALID_LOG_LEVELS: FrozenSet[int] = frozenset(
    [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]
)


def _parse_level(value: Union[str, int]) -> int:
    """Convert a level name such as ``"debug"`` or a number into a level int."""
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level name: {value}")
    return level


@dataclass
class LoggingConfig:
    """
    Configuration for the Passwd Forge logging system.

    Attributes:
        level: Logging level threshold (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log message format string
        destination: Where logs should be sent (console, file, both)
        file_path: Path to log file (required for file destinations)
        propagate_to_root: Whether to propagate logs to the root logger
        ENV_VARS: Mapping of environment variables to config attributes

    Usage:
        ```python
        config = LoggingConfig(level=logging.DEBUG)
        result = config.validate()
        if result.is_success:
            configure_logging(config)
        ```
    """

    level: int = logging.WARNING
    format: str = LogFormatTemplate.STANDARD.value
    destination: LogDestination = LogDestination.CONSOLE
    file_path: Optional[str] = None
    propagate_to_root: bool = False

    _last_validation_errors: List[str] = field(default_factory=list, repr=False)

    # Environment variable mapping for configuration overrides
    ENV_VARS: ClassVar[EnvMapping] = {
        "PASSWD_FORGE_LOG_LEVEL": ("level", _parse_level),
        "PASSWD_FORGE_LOG_FILE": ("file_path", str),
        "PASSWD_FORGE_LOG_DESTINATION": ("destination", LogDestination),
    }

    def load_from_env(self) -> None:
        """
        Apply environment variable overrides listed in ``ENV_VARS``.

        Raises:
            EnvVarError: If a variable cannot be converted to the target type
        """
        for env_var, (attr_name, converter) in self.ENV_VARS.items():
            if env_var not in os.environ:
                continue
            raw = os.environ[env_var]
            try:
                setattr(self, attr_name, converter(raw))
            except (ValueError, TypeError) as e:
                raise EnvVarError(
                    f"Invalid value '{raw}' for {env_var}: {str(e)}"
                ) from e

    @property
    def uses_file_logging(self) -> bool:
        """True if logs are written to a file."""
        return self.destination in (LogDestination.FILE, LogDestination.BOTH)

    @property
    def uses_console_logging(self) -> bool:
        """True if logs are written to the console."""
        return self.destination in (LogDestination.CONSOLE, LogDestination.BOTH)

    def with_level(self, level: int) -> "LoggingConfig":
        """
        Create a new configuration with a different log level.

        Args:
            level: New logging level

        Returns:
            New LoggingConfig instance with the updated level
        """
        return replace(self, level=level, _last_validation_errors=[])

    def with_destination(
        self, destination: LogDestination, file_path: Optional[str] = None
    ) -> "LoggingConfig":
        """
        Create a new configuration with a different destination.

        Args:
            destination: New log destination
            file_path: Log file path, kept unchanged when omitted

        Returns:
            New LoggingConfig instance with the updated destination
        """
        return replace(
            self,
            destination=destination,
            file_path=file_path if file_path is not None else self.file_path,
            _last_validation_errors=[],
        )

    def validate(self) -> Result[None]:
        """
        Validate the configuration for consistency and correctness.

        Returns:
            Result indicating success or containing every problem found
        """
        errors: List[str] = []

        if self.level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.level}. Must be one of "
                f"{', '.join(str(level) for level in sorted(VALID_LOG_LEVELS))}"
            )
        if not self.format:
            errors.append("Log format must not be empty")
        if self.uses_file_logging and not self.file_path:
            errors.append(
                f"Destination {self.destination.name} requires file_path to be set"
            )

        self._last_validation_errors = errors.copy()

        if errors:
            return Result[None].failure(
                ErrorKind.INVALID_ARGUMENT,
                "; ".join(errors),
                context={"errors": "; ".join(errors)},
            )
        return Result[None].success(None)

    def get_validation_errors(self) -> List[str]:
        """Get list of validation errors from the last validation run."""
        return self._last_validation_errors.copy()

    def get_python_logging_config(self) -> Dict[str, Any]:
        """
        Convert configuration to Python's logging module configuration dict.

        Returns:
            Dictionary suitable for ``logging.config.dictConfig``
        """
        handlers: Dict[str, Dict[str, Any]] = {}
        if self.uses_console_logging:
            handlers["console"] = {
                "class": "logging.StreamHandler",
                "level": self.level,
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            }
        if self.uses_file_logging and self.file_path:
            handlers["file"] = {
                "class": "logging.FileHandler",
                "level": self.level,
                "formatter": "standard",
                "filename": self.file_path,
                "encoding": "utf-8",
            }

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.format}},
            "handlers": handlers,
            "loggers": {
                DEFAULT_LOGGER_NAME: {
                    "level": self.level,
                    "handlers": list(handlers),
                    "propagate": self.propagate_to_root,
                }
            },
        }

    def create_directory_if_needed(self) -> None:
        """Create the parent directory of ``file_path`` for file logging."""
        if not (self.uses_file_logging and self.file_path):
            return
        try:
            Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LoggingConfigError(
                f"Failed to create log directory for {self.file_path}: {e}"
            ) from e


def create_default_logging_config() -> LoggingConfig:
    """
    Create default logging configuration with environment overrides applied.

    Returns:
        LoggingConfig: Default logging configuration instance
    """
    config = LoggingConfig()
    config.load_from_env()
    return config


def configure_logging(config: Optional[LoggingConfig] = None) -> LoggingConfig:
    """
    Validate and apply a logging configuration to the ``passwd_forge`` logger.

    Args:
        config: Configuration to apply; defaults to the environment-aware default

    Returns:
        The configuration that was applied

    Raises:
        LoggingConfigError: If the configuration does not validate
    """
    config = config or create_default_logging_config()
    result = config.validate()
    if result.is_failure and result.error is not None:
        raise LoggingConfigError(result.error.message)
    config.create_directory_if_needed()
    logging.config.dictConfig(config.get_python_logging_config())
    return config


__all__ = [
    "LoggingConfig",
    "LogFormatTemplate",
    "LogDestination",
    "LoggingConfigError",
    "create_default_logging_config",
    "configure_logging",
]
