"""
Configuration schema registry.

Defines every recognised generation configuration key together with its
requiredness, expected value shape, validation predicate and description.
The registry is built once at import time and exposed read-only.

Architecture:
    ┌──────────────────┐
    │  CONFIG_SCHEMA   │ ← MappingProxyType, no mutation API
    └────────┬─────────┘
             │ key -> KeySpec
    ┌────────┴─────────┐
    │ required │ shape │ validate │ description
    └──────────────────┘
"""

import os
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, List, Mapping, Optional

from passwd_forge.configs.config_enums import (
    CaseTransform,
    KeyShape,
    PaddingCharacterMode,
    PaddingType,
    SeparatorMode,
)

# Predicate over a candidate value
KeyValidator = Callable[[Any], bool]


@dataclass(frozen=True)
class KeySpec:
    """
    Schema entry for one configuration key.

    Attributes:
        name: Key name as it appears in a configuration
        required: Whether every configuration must define the key
        shape: Expected container shape of the value
        validate: Predicate the value must satisfy once its shape matches
        description: Human-readable description of acceptable values
    """

    name: str
    required: bool
    shape: KeyShape
    validate: KeyValidator
    description: str


# ==========================================
# Shape checks
# ==========================================


def shape_matches(shape: KeyShape, value: Any) -> bool:
    """
    Check whether a value has the container shape a key expects.

    Args:
        shape: Expected shape
        value: Candidate value

    Returns:
        True if the value's shape agrees with ``shape``
    """
    if shape is KeyShape.SCALAR:
        if isinstance(value, bool):
            return False
        return isinstance(value, (str, int, float, os.PathLike))
    if shape is KeyShape.CHAR_LIST:
        return isinstance(value, list)
    if shape is KeyShape.SUBSTITUTION_MAP:
        return isinstance(value, dict)
    if shape is KeyShape.RANDOM_FN:
        return callable(value)
    return False


# ==========================================
# Value predicates
# ==========================================


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_greater_than(bound: int) -> KeyValidator:
    def check(value: Any) -> bool:
        return _is_int(value) and value > bound

    return check


def _int_at_least(bound: int) -> KeyValidator:
    def check(value: Any) -> bool:
        return _is_int(value) and value >= bound

    return check


def _single_char_or(specials: FrozenSet[str]) -> KeyValidator:
    def check(value: Any) -> bool:
        return isinstance(value, str) and (len(value) == 1 or value in specials)

    return check


def _one_of(allowed: FrozenSet[str]) -> KeyValidator:
    def check(value: Any) -> bool:
        return isinstance(value, str) and value in allowed

    return check


def _is_readable_file(value: Any) -> bool:
    if not isinstance(value, (str, os.PathLike)):
        return False
    path = os.fspath(value)
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _is_symbol_alphabet(value: Any) -> bool:
    if len(value) < 5:
        return False
    return all(isinstance(symbol, str) and len(symbol) == 1 for symbol in value)


_WORD_CHAR = re.compile(r"\w")
_NO_WHITESPACE = re.compile(r"\S+")


def _is_substitution_map(value: Any) -> bool:
    for char, replacement in value.items():
        if not (isinstance(char, str) and _WORD_CHAR.fullmatch(char)):
            return False
        if not (isinstance(replacement, str) and _NO_WHITESPACE.fullmatch(replacement)):
            return False
    return True


def _any_callable(value: Any) -> bool:
    # The shape check already guarantees a callable
    return True


def _values(enum_type: Any) -> FrozenSet[str]:
    return frozenset(member.value for member in enum_type)


# ==========================================
# The registry
# ==========================================

_INT_OVER_THREE = "An integer greater than three"
_INT_ZERO_OR_MORE = "An integer greater than or equal to zero"

_KEY_SPECS: List[KeySpec] = [
    KeySpec(
        name="dictionary_file_path",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_is_readable_file,
        description="A path to an existing, readable dictionary file",
    ),
    KeySpec(
        name="symbol_alphabet",
        required=True,
        shape=KeyShape.CHAR_LIST,
        validate=_is_symbol_alphabet,
        description="A list containing at least 5 single-character strings",
    ),
    KeySpec(
        name="word_length_min",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_int_greater_than(3),
        description=_INT_OVER_THREE,
    ),
    KeySpec(
        name="word_length_max",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_int_greater_than(3),
        description=_INT_OVER_THREE,
    ),
    KeySpec(
        name="separator_character",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_single_char_or(_values(SeparatorMode)),
        description="A single character, or the special value 'NONE' or 'RANDOM'",
    ),
    KeySpec(
        name="padding_digits_before",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_int_at_least(0),
        description=_INT_ZERO_OR_MORE,
    ),
    KeySpec(
        name="padding_digits_after",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_int_at_least(0),
        description=_INT_ZERO_OR_MORE,
    ),
    KeySpec(
        name="padding_type",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_one_of(_values(PaddingType)),
        description="One of the values 'NONE', 'FIXED', or 'ADAPTIVE'",
    ),
    KeySpec(
        name="padding_characters_before",
        required=False,
        shape=KeyShape.SCALAR,
        validate=_int_at_least(0),
        description=_INT_ZERO_OR_MORE,
    ),
    KeySpec(
        name="padding_characters_after",
        required=False,
        shape=KeyShape.SCALAR,
        validate=_int_at_least(0),
        description=_INT_ZERO_OR_MORE,
    ),
    KeySpec(
        name="pad_to_length",
        required=False,
        shape=KeyShape.SCALAR,
        validate=_int_at_least(12),
        description="An integer greater than or equal to twelve",
    ),
    KeySpec(
        name="padding_character",
        required=False,
        shape=KeyShape.SCALAR,
        validate=_single_char_or(_values(PaddingCharacterMode)),
        description=(
            "A single character or one of the special values "
            "'NONE', 'RANDOM', or 'SEPARATOR'"
        ),
    ),
    KeySpec(
        name="case_transform",
        required=False,
        shape=KeyShape.SCALAR,
        validate=_one_of(_values(CaseTransform)),
        description=(
            "One of the values 'NONE', 'UPPER', 'LOWER', 'CAPITALISE', "
            "'INVERSE', or 'RANDOM'"
        ),
    ),
    KeySpec(
        name="random_function",
        required=True,
        shape=KeyShape.RANDOM_FN,
        validate=_any_callable,
        description="A callable generating n random numbers between 0 and 1",
    ),
    KeySpec(
        name="random_increment",
        required=True,
        shape=KeyShape.SCALAR,
        validate=_int_at_least(1),
        description="An integer greater than or equal to one",
    ),
    KeySpec(
        name="character_substitutions",
        required=True,
        shape=KeyShape.SUBSTITUTION_MAP,
        validate=_is_substitution_map,
        description=(
            "A dict mapping single word characters to non-empty replacement "
            "strings - can be empty"
        ),
    ),
]

CONFIG_SCHEMA: Mapping[str, KeySpec] = MappingProxyType(
    {spec.name: spec for spec in _KEY_SPECS}
)


def get_key_spec(key: str) -> Optional[KeySpec]:
    """Return the schema entry for ``key``, or None if the key is unknown."""
    return CONFIG_SCHEMA.get(key)


def is_known_key(key: Any) -> bool:
    """Check whether ``key`` is a registered configuration key."""
    return isinstance(key, str) and key in CONFIG_SCHEMA


def schema_keys() -> List[str]:
    """All registered keys in sorted order."""
    return sorted(CONFIG_SCHEMA)


def required_keys() -> List[str]:
    """All required keys in sorted order."""
    return [key for key in schema_keys() if CONFIG_SCHEMA[key].required]


__all__ = [
    "KeySpec",
    "KeyValidator",
    "CONFIG_SCHEMA",
    "shape_matches",
    "get_key_spec",
    "is_known_key",
    "schema_keys",
    "required_keys",
]
