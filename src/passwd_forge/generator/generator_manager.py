"""
Password Generator Manager Module

This module owns the live state of a memorable-password generator: the active
configuration, the dictionary caches derived from it, and the random number
cache password assembly draws from. It features:
- Validation of every configuration before anything is installed
- All-or-nothing installs: configuration and caches are swapped together
- Incremental updates that only rebuild the caches a change affects
- Copies, never internal references, handed to callers
- A single lock spanning each public operation

Usage:
    ```python
    generator = PasswordGenerator(default_config({"dictionary_file_path": path}))
    result = generator.update_config({"word_length_min": 5})
    if result.is_failure:
        print(result.error.message)
    index = generator.next_random_int(len(generator.word_list))
    ```
"""

import logging
import os
import threading
from typing import Any, List, Mapping, Optional, Tuple, final

from passwd_forge.configs.config_enums import ErrorKind
from passwd_forge.configs.config_essentials import ConfigDict, Result
from passwd_forge.dictionary.dictionary_loader import load_dictionary
from passwd_forge.dictionary.word_filter import filter_word_list
from passwd_forge.exceptions import PasswdForgeError
from passwd_forge.randomness.random_cache import RandomNumberCache
from passwd_forge.schema.config_schema import schema_keys
from passwd_forge.schema.config_validator import (
    config_to_string,
    copy_config,
    default_config,
    validate_config,
    validate_key,
)

logger = logging.getLogger(__name__)

# (configuration, full word cache, filtered word cache)
StagedState = Tuple[ConfigDict, List[str], List[str]]


def _same_path(left: Any, right: Any) -> bool:
    return os.fspath(left) == os.fspath(right)


@final
class PasswordGenerator:
    """
    Configuration manager and instance state for password generation.

    The filtered word cache always reflects the active configuration's
    dictionary path and length bounds. The only mutators are ``set_config``
    and ``update_config``; a rejected call leaves the instance exactly as it
    was.

    Attributes:
        debug: When True, state is logged after construction and every
            configuration clone handed out is re-validated
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None, debug: bool = False) -> None:
        """
        Build a generator from a configuration.

        Args:
            config: Configuration to install; ``default_config()`` when omitted
            debug: Enable debug diagnostics

        Raises:
            ConfigValidationError: If the configuration does not validate
            DictionaryReadError: If the dictionary file cannot be read
            InsufficientWordsError: If too few words fit the length bounds
        """
        self._lock = threading.RLock()
        self.debug = debug

        if config is None:
            config = default_config()

        self._config, self._full_words, self._words = self._stage(config)
        self._random_cache = RandomNumberCache(
            self._config["random_function"], self._config["random_increment"]
        )
        logger.info(
            "Initialised password generator with %d usable words",
            len(self._words),
        )

        if self.debug:
            logger.debug(
                "Initialised with the following config:\n%s", self.config_string()
            )
            logger.debug("Cache status:\n%s", self.caches_state())

    def __repr__(self) -> str:
        return (
            f"<PasswordGenerator words={len(self._words)} "
            f"random_pending={len(self._random_cache)}>"
        )

    # ==========================================
    # Installing configurations
    # ==========================================

    @staticmethod
    def _stage(config: Mapping[str, Any]) -> StagedState:
        """
        Validate a configuration and build its caches without touching state.

        Raises:
            PasswdForgeError: The subclass matching the first failure
        """
        validate_config(config).unwrap()
        candidate = copy_config(config)
        full_words = load_dictionary(candidate["dictionary_file_path"])
        words = filter_word_list(
            full_words, candidate["word_length_min"], candidate["word_length_max"]
        ).unwrap()
        return candidate, full_words, words

    def _install(self, staged: StagedState) -> None:
        config, full_words, words = staged
        self._random_cache.rekey(config["random_function"], config["random_increment"])
        self._config = config
        self._full_words = full_words
        self._words = words

    def set_config(self, config: Mapping[str, Any]) -> Result[None]:
        """
        Replace the active configuration.

        Args:
            config: Complete configuration to install

        Returns:
            Success, or the failure that prevented the install (in which case
            nothing changed)
        """
        with self._lock:
            try:
                staged = self._stage(config)
            except PasswdForgeError as e:
                logger.info("Rejected new configuration: %s", e)
                return Result[None].from_exception(e)

            self._install(staged)
            logger.info(
                "Installed new configuration with %d usable words", len(self._words)
            )
            return Result[None].success(None)

    def update_config(self, partial: Mapping[str, Any]) -> Result[None]:
        """
        Alter the active configuration with new values for some keys.

        Unknown keys in ``partial`` are ignored. Dictionary caches are only
        rebuilt when the dictionary path or the length bounds change.

        Args:
            partial: Keys to change and their new values

        Returns:
            Success, or the failure that prevented the update (in which case
            nothing changed)
        """
        if not isinstance(partial, Mapping):
            return Result[None].failure(
                ErrorKind.INVALID_ARGUMENT,
                f"New config keys must be passed as a mapping, got {type(partial).__name__}",
            )

        with self._lock:
            changes: ConfigDict = {}
            for key in schema_keys():
                if partial.get(key) is None:
                    continue
                result = validate_key(key, partial[key])
                if result.is_failure:
                    return result
                changes[key] = partial[key]
                logger.debug("Updated %s to new value", key)
            logger.debug("Updated %d keys", len(changes))

            candidate = copy_config(self._config)
            candidate.update(copy_config(changes))
            result = validate_config(candidate)
            if result.is_failure:
                return result

            full_words, words = self._full_words, self._words
            new_dictionary = not _same_path(
                candidate["dictionary_file_path"], self._config["dictionary_file_path"]
            )
            new_bounds = (
                candidate["word_length_min"] != self._config["word_length_min"]
                or candidate["word_length_max"] != self._config["word_length_max"]
            )
            try:
                if new_dictionary:
                    full_words = load_dictionary(candidate["dictionary_file_path"])
                if new_dictionary or new_bounds:
                    words = filter_word_list(
                        full_words,
                        candidate["word_length_min"],
                        candidate["word_length_max"],
                    ).unwrap()
            except PasswdForgeError as e:
                logger.info("Rejected configuration update: %s", e)
                return Result[None].from_exception(e)

            self._install((candidate, full_words, words))
            if new_dictionary or new_bounds:
                logger.info("Rebuilt word cache: %d usable words", len(words))
            return Result[None].success(None)

    # ==========================================
    # Read access
    # ==========================================

    def get_config(self) -> ConfigDict:
        """
        Return an independent copy of the active configuration.

        Raises:
            ConfigValidationError: In debug mode, if the copy fails validation
        """
        with self._lock:
            clone = copy_config(self._config)
        if self.debug:
            validate_config(clone).unwrap()
        return clone

    @property
    def word_list(self) -> Tuple[str, ...]:
        """Words within the configured length bounds."""
        with self._lock:
            return tuple(self._words)

    @property
    def full_word_list(self) -> Tuple[str, ...]:
        """Every word loaded from the dictionary file."""
        with self._lock:
            return tuple(self._full_words)

    @property
    def random_cache_size(self) -> int:
        """Number of random values buffered and not yet consumed."""
        return len(self._random_cache)

    def config_string(self) -> str:
        """Render the active configuration as ``key=value`` lines."""
        with self._lock:
            return config_to_string(self._config)

    def caches_state(self) -> str:
        """Describe how full the word and random caches are."""
        with self._lock:
            return (
                f"Loaded Words: {len(self._words)} "
                f"(out of {len(self._full_words)} loaded from the file)\n"
                f"Cached Random Numbers: {len(self._random_cache)}\n"
            )

    # ==========================================
    # Randomness
    # ==========================================

    def next_random(self) -> float:
        """
        Next random value in [0, 1] from the random cache.

        Raises:
            RandomSourceError: If a needed refill fails
            RandomSourceExhaustedError: If no value is available after a refill
        """
        with self._lock:
            return self._random_cache.next()

    def next_random_int(self, maximum: int) -> int:
        """
        Random integer in ``[0, maximum)`` drawn from the random cache.

        Raises:
            InvalidArgumentError: If maximum is not a positive integer
            RandomSourceError: If a needed refill fails
        """
        with self._lock:
            return self._random_cache.next_int(maximum)
