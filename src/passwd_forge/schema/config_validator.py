"""
Configuration validation, defaults and cloning.

All functions here are pure with respect to their inputs: they never mutate
the configuration they are given and may be called any number of times.

Validation happens in three stages, stopping at the first failure:

1. every required key is present (a ``None`` value counts as absent)
2. every present key passes ``validate_key`` (known key, right shape,
   predicate holds)
3. cross-field rules hold, checked in this order:
   padding character for any padding, fixed padding counts, adaptive pad
   length, then ``word_length_min <= word_length_max``
"""

import logging
from typing import Any, Mapping, Optional

from passwd_forge.configs.config_enums import ErrorKind, KeyShape, PaddingType
from passwd_forge.configs.config_essentials import (
    ConfigDict,
    Error,
    ErrorSeverity,
    Result,
)
from passwd_forge.configs.forge_settings import ForgeSettings
from passwd_forge.exceptions import InvalidArgumentError
from passwd_forge.randomness.random_cache import basic_random_generator
from passwd_forge.schema.config_schema import (
    CONFIG_SCHEMA,
    get_key_spec,
    required_keys,
    schema_keys,
    shape_matches,
)

logger = logging.getLogger(__name__)


def _is_present(config: Mapping[str, Any], key: str) -> bool:
    return config.get(key) is not None


# ==========================================
# Single keys
# ==========================================


def validate_key(key: Any, value: Any) -> Result[None]:
    """
    Validate the value for a single configuration key.

    Args:
        key: Configuration key name
        value: Candidate value

    Returns:
        Success, or a failure of kind UnknownKey, TypeMismatch or ValueRejected
    """
    spec = get_key_spec(key) if isinstance(key, str) else None
    if spec is None:
        return Result[None].failure(
            ErrorKind.UNKNOWN_KEY,
            f"Unknown configuration key={key!r}",
            {"key": str(key)},
        )

    if not shape_matches(spec.shape, value):
        return Result[None].failure(
            ErrorKind.TYPE_MISMATCH,
            f"Invalid type for key={key}. Expected: {spec.description}",
            {"key": key, "value": value, "expected_shape": spec.shape.value},
        )

    if not spec.validate(value):
        return Result[None].failure(
            ErrorKind.VALUE_REJECTED,
            f"Invalid value for key={key}. Expected: {spec.description}",
            {"key": key, "value": value},
        )

    return Result[None].success(None)


# ==========================================
# Whole configurations
# ==========================================


def _check_cross_field_rules(config: Mapping[str, Any]) -> Result[None]:
    padding_type = config["padding_type"]

    if padding_type != PaddingType.NONE.value and not _is_present(
        config, "padding_character"
    ):
        return Result[None].failure(
            ErrorKind.CROSS_FIELD_VIOLATION,
            f"padding_type='{padding_type}' requires padding_character be set",
            {"key": "padding_character", "padding_type": padding_type},
        )

    if padding_type == PaddingType.FIXED.value:
        for key in ("padding_characters_before", "padding_characters_after"):
            if not _is_present(config, key):
                return Result[None].failure(
                    ErrorKind.CROSS_FIELD_VIOLATION,
                    "padding_type='FIXED' requires padding_characters_before "
                    "& padding_characters_after be set",
                    {"key": key, "padding_type": padding_type},
                )

    if padding_type == PaddingType.ADAPTIVE.value and not _is_present(
        config, "pad_to_length"
    ):
        return Result[None].failure(
            ErrorKind.CROSS_FIELD_VIOLATION,
            "padding_type='ADAPTIVE' requires pad_to_length be set",
            {"key": "pad_to_length", "padding_type": padding_type},
        )

    if config["word_length_min"] > config["word_length_max"]:
        return Result[None].failure(
            ErrorKind.CROSS_FIELD_VIOLATION,
            "word_length_min must not be greater than word_length_max",
            {
                "key": "word_length_max",
                "word_length_min": config["word_length_min"],
                "word_length_max": config["word_length_max"],
            },
        )

    return Result[None].success(None)


def validate_config(config: Any) -> Result[None]:
    """
    Validate a complete configuration.

    Args:
        config: Mapping of configuration keys to values

    Returns:
        Success, or the first failure found (see module docstring for order)
    """
    if not isinstance(config, Mapping):
        return Result[None].failure(
            ErrorKind.INVALID_ARGUMENT,
            f"A configuration must be a mapping, got {type(config).__name__}",
        )

    for key in required_keys():
        if not _is_present(config, key):
            return Result[None].failure(
                ErrorKind.MISSING_REQUIRED_KEY,
                f"Required key={key} not defined",
                {"key": key},
            )

    for key in sorted(config, key=str):
        if config[key] is None and key in CONFIG_SCHEMA:
            continue
        result = validate_key(key, config[key])
        if result.is_failure:
            return result

    return _check_cross_field_rules(config)


def is_valid_config(config: Any) -> bool:
    """Check whether a configuration passes ``validate_config``."""
    return validate_config(config).is_success


# ==========================================
# Copies and defaults
# ==========================================


def _copy_value(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    # scalars are immutable; random sources are shared, not copied
    return value


def copy_config(config: Mapping[str, Any]) -> ConfigDict:
    """
    Copy a configuration without validating it.

    Lists and maps are copied so the result shares no mutable state with
    ``config``; the random source is shared by reference.
    """
    return {
        key: _copy_value(value) for key, value in config.items() if value is not None
    }


def clone_config(config: Any) -> ConfigDict:
    """
    Validate a configuration and return an independent copy of it.

    Args:
        config: Configuration to clone

    Returns:
        A new configuration dictionary equal to ``config``

    Raises:
        ConfigValidationError: The subclass matching the validation failure
        InvalidArgumentError: If config is not a mapping
    """
    validate_config(config).unwrap()
    return copy_config(config)


def _raise_fatal(error: Error, message: str) -> None:
    fatal = Error.create(
        error.kind, f"{message}: {error.message}", error.context, ErrorSeverity.FATAL
    )
    logger.error("%s (key=%s)", fatal.message, fatal.key)
    raise fatal.to_exception()


def default_config(
    overrides: Optional[Mapping[str, Any]] = None,
    settings: Optional[ForgeSettings] = None,
) -> ConfigDict:
    """
    Build the default configuration, optionally with overrides applied.

    Overrides with an unknown key or an invalid value are skipped with a
    warning. The merged result must still validate as a whole.

    Args:
        overrides: Keys to replace in the default configuration
        settings: Ambient defaults; read from the environment when omitted

    Returns:
        A new configuration dictionary

    Raises:
        InvalidArgumentError: If overrides is not a mapping
        ConfigValidationError: If the defaults combined with the accepted
            overrides do not form a valid configuration

    Example:
        ```python
        config = default_config({"dictionary_file_path": "/usr/share/dict/words"})
        ```
    """
    settings = settings or ForgeSettings.from_env()
    config: ConfigDict = {
        "dictionary_file_path": settings.dictionary_file_path,
        "symbol_alphabet": list("!@$%^&*-_+=:|~?"),
        "word_length_min": 4,
        "word_length_max": 8,
        "separator_character": "RANDOM",
        "padding_digits_before": 2,
        "padding_digits_after": 2,
        "padding_type": "FIXED",
        "padding_character": "RANDOM",
        "padding_characters_before": 2,
        "padding_characters_after": 2,
        "case_transform": "NONE",
        "random_function": basic_random_generator,
        "random_increment": settings.random_increment,
        "character_substitutions": {},
    }

    if overrides is None:
        return config
    if not isinstance(overrides, Mapping):
        raise InvalidArgumentError(
            f"Overrides must be a mapping, got {type(overrides).__name__}",
            value=overrides,
        )

    for key, value in overrides.items():
        result = validate_key(key, value)
        if result.is_failure and result.error is not None:
            logger.warning("Skipping override key=%s: %s", key, result.error.message)
            continue
        config[key] = _copy_value(value)

    result = validate_config(config)
    if result.is_failure and result.error is not None:
        _raise_fatal(
            result.error,
            "The default config combined with the specified overrides is invalid",
        )
    return config


# ==========================================
# Rendering
# ==========================================


def _describe_callable(func: Any) -> str:
    name = getattr(func, "__qualname__", None) or type(func).__qualname__
    module = getattr(func, "__module__", None)
    return f"{module}.{name}" if module else name


def config_to_string(config: Mapping[str, Any]) -> str:
    """
    Render a configuration as ``key=value`` lines in sorted key order.

    Keys that are absent or whose value has an unexpected shape are skipped,
    the latter with a warning.

    Args:
        config: Configuration to render

    Returns:
        Multi-line string, one line per present key
    """
    lines = []
    for key in schema_keys():
        value = config.get(key)
        if value is None:
            continue
        spec = CONFIG_SCHEMA[key]
        if not shape_matches(spec.shape, value):
            logger.warning(
                "Unexpected value type for key=%s (expected %s, got %s)",
                key,
                spec.shape.value,
                type(value).__name__,
            )
            continue

        if spec.shape is KeyShape.CHAR_LIST:
            rendered = "[" + ", ".join(sorted(str(item) for item in value)) + "]"
        elif spec.shape is KeyShape.SUBSTITUTION_MAP:
            parts = [f"{k}={value[k]}" for k in sorted(value, key=str)]
            rendered = "{" + ", ".join(parts) + "}"
        elif spec.shape is KeyShape.RANDOM_FN:
            rendered = _describe_callable(value)
        else:
            rendered = str(value)
        lines.append(f"{key}={rendered}\n")
    return "".join(lines)


__all__ = [
    "validate_key",
    "validate_config",
    "is_valid_config",
    "copy_config",
    "clone_config",
    "default_config",
    "config_to_string",
]
