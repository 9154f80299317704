"""
Tests for configuration validation, defaults, cloning and rendering.
"""

import logging

import pytest

from passwd_forge.configs.config_enums import ErrorKind
from passwd_forge.configs.config_essentials import ErrorCategory
from passwd_forge.configs.forge_settings import ForgeSettings
from passwd_forge.exceptions import (
    CrossFieldViolationError,
    InvalidArgumentError,
    MissingRequiredKeyError,
    ValueRejectedError,
)
from passwd_forge.randomness.random_cache import basic_random_generator
from passwd_forge.schema.config_schema import required_keys
from passwd_forge.schema.config_validator import (
    clone_config,
    config_to_string,
    default_config,
    is_valid_config,
    validate_config,
    validate_key,
)


# =============================================================================
# validate_key
# =============================================================================


class TestValidateKey:
    def test_valid_value(self):
        assert validate_key("word_length_max", 10).is_success

    def test_unknown_key(self):
        result = validate_key("word_count", 4)
        assert result.is_failure
        assert result.error.kind is ErrorKind.UNKNOWN_KEY
        assert result.error.key == "word_count"

    def test_type_mismatch(self):
        result = validate_key("symbol_alphabet", "!@$%^")
        assert result.error.kind is ErrorKind.TYPE_MISMATCH
        assert result.error.category is ErrorCategory.VALIDATION

    def test_value_rejected_carries_key_and_value(self):
        result = validate_key("word_length_min", 2)
        assert result.error.kind is ErrorKind.VALUE_REJECTED
        assert result.error.key == "word_length_min"
        assert result.error.context["value"] == 2

    def test_bool_is_not_an_integer(self):
        assert validate_key("random_increment", True).error.kind is ErrorKind.TYPE_MISMATCH


# =============================================================================
# validate_config
# =============================================================================


class TestValidateConfig:
    def test_valid_config(self, valid_config):
        assert validate_config(valid_config).is_success
        assert is_valid_config(valid_config)

    @pytest.mark.parametrize("key", required_keys())
    def test_missing_required_key(self, valid_config, key):
        del valid_config[key]
        result = validate_config(valid_config)
        assert result.error.kind is ErrorKind.MISSING_REQUIRED_KEY
        assert result.error.key == key

    def test_none_counts_as_missing(self, valid_config):
        valid_config["padding_type"] = None
        assert validate_config(valid_config).error.kind is ErrorKind.MISSING_REQUIRED_KEY

    def test_invalid_value_propagates(self, valid_config):
        valid_config["case_transform"] = "SHOUT"
        result = validate_config(valid_config)
        assert result.error.kind is ErrorKind.VALUE_REJECTED
        assert result.error.key == "case_transform"

    def test_unknown_key_rejected(self, valid_config):
        valid_config["extra"] = 1
        assert validate_config(valid_config).error.kind is ErrorKind.UNKNOWN_KEY

    def test_not_a_mapping(self):
        assert validate_config(["a"]).error.kind is ErrorKind.INVALID_ARGUMENT

    def test_is_pure(self, valid_config):
        snapshot = dict(valid_config)
        for _ in range(3):
            assert validate_config(valid_config).is_success
        assert valid_config == snapshot


class TestCrossFieldRules:
    def test_padding_requires_padding_character(self, valid_config):
        del valid_config["padding_character"]
        result = validate_config(valid_config)
        assert result.error.kind is ErrorKind.CROSS_FIELD_VIOLATION
        assert result.error.key == "padding_character"

    def test_no_padding_needs_no_padding_keys(self, valid_config):
        valid_config["padding_type"] = "NONE"
        for key in ("padding_character", "padding_characters_before", "padding_characters_after"):
            del valid_config[key]
        assert validate_config(valid_config).is_success

    @pytest.mark.parametrize("key", ["padding_characters_before", "padding_characters_after"])
    def test_fixed_requires_counts(self, valid_config, key):
        del valid_config[key]
        result = validate_config(valid_config)
        assert result.error.kind is ErrorKind.CROSS_FIELD_VIOLATION
        assert result.error.key == key

    def test_adaptive_requires_pad_to_length(self, valid_config):
        valid_config["padding_type"] = "ADAPTIVE"
        result = validate_config(valid_config)
        assert result.error.kind is ErrorKind.CROSS_FIELD_VIOLATION
        assert result.error.key == "pad_to_length"

        valid_config["pad_to_length"] = 12
        assert validate_config(valid_config).is_success

    def test_padding_character_checked_before_counts(self, valid_config):
        del valid_config["padding_character"]
        del valid_config["padding_characters_before"]
        assert validate_config(valid_config).error.key == "padding_character"

    def test_length_range(self, valid_config):
        valid_config["word_length_min"] = 9
        valid_config["word_length_max"] = 5
        result = validate_config(valid_config)
        assert result.error.kind is ErrorKind.CROSS_FIELD_VIOLATION

    def test_equal_bounds_allowed(self, valid_config):
        valid_config["word_length_min"] = 5
        valid_config["word_length_max"] = 5
        assert validate_config(valid_config).is_success


# =============================================================================
# default_config
# =============================================================================


class TestDefaultConfig:
    def test_defaults(self):
        config = default_config(settings=ForgeSettings())
        assert config == {
            "dictionary_file_path": "dict.txt",
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
            "random_increment": 10,
            "character_substitutions": {},
        }

    def test_fresh_copy_each_call(self):
        first = default_config(settings=ForgeSettings())
        first["symbol_alphabet"].append("#")
        assert "#" not in default_config(settings=ForgeSettings())["symbol_alphabet"]

    def test_environment_defaults(self, monkeypatch, dictionary_path):
        monkeypatch.setenv("PASSWD_FORGE_DICTIONARY", dictionary_path)
        monkeypatch.setenv("PASSWD_FORGE_RANDOM_INCREMENT", "25")
        config = default_config()
        assert config["dictionary_file_path"] == dictionary_path
        assert config["random_increment"] == 25

    def test_bad_logging_environment_ignored(self, monkeypatch, dictionary_path):
        monkeypatch.setenv("PASSWD_FORGE_DICTIONARY", dictionary_path)
        monkeypatch.setenv("PASSWD_FORGE_LOG_LEVEL", "loud")
        config = default_config()
        assert config["dictionary_file_path"] == dictionary_path
        assert is_valid_config(config)

    def test_overrides_applied(self, settings):
        config = default_config({"word_length_max": 5, "case_transform": "UPPER"}, settings)
        assert config["word_length_max"] == 5
        assert config["case_transform"] == "UPPER"
        assert is_valid_config(config)

    def test_invalid_overrides_skipped_with_warning(self, settings, caplog):
        with caplog.at_level(logging.WARNING, logger="passwd_forge"):
            config = default_config(
                {"bogus_key": 1, "word_length_min": 2, "word_length_max": 6},
                settings,
            )
        assert "bogus_key" not in config
        assert config["word_length_min"] == 4
        assert config["word_length_max"] == 6
        messages = " ".join(record.getMessage() for record in caplog.records)
        assert "bogus_key" in messages
        assert "word_length_min" in messages

    def test_invalid_merge_is_fatal(self, settings, caplog):
        with caplog.at_level(logging.ERROR, logger="passwd_forge"):
            with pytest.raises(CrossFieldViolationError) as excinfo:
                default_config({"padding_type": "ADAPTIVE"}, settings)
        assert excinfo.value.key == "pad_to_length"
        assert str(excinfo.value).startswith("The default config combined with")
        assert any(
            record.levelno == logging.ERROR and "pad_to_length" in record.getMessage()
            for record in caplog.records
        )

    def test_override_values_are_copied(self, settings):
        alphabet = list("abcdef")
        config = default_config({"symbol_alphabet": alphabet}, settings)
        alphabet.append("g")
        assert config["symbol_alphabet"] == list("abcdef")

    def test_overrides_must_be_mapping(self, settings):
        with pytest.raises(InvalidArgumentError):
            default_config([("word_length_min", 5)], settings)  # type: ignore[arg-type]


# =============================================================================
# clone_config / config_to_string
# =============================================================================


class TestCloneConfig:
    def test_clone_is_equal_and_independent(self, valid_config):
        clone = clone_config(valid_config)
        assert clone == valid_config
        clone["symbol_alphabet"].append("#")
        clone["character_substitutions"]["a"] = "@"
        assert "#" not in valid_config["symbol_alphabet"]
        assert valid_config["character_substitutions"] == {}

    def test_random_function_is_shared(self, valid_config):
        assert clone_config(valid_config)["random_function"] is valid_config["random_function"]

    def test_invalid_config_raises(self, valid_config):
        del valid_config["symbol_alphabet"]
        with pytest.raises(MissingRequiredKeyError):
            clone_config(valid_config)

    def test_rejected_value_raises(self, valid_config):
        valid_config["random_increment"] = 0
        with pytest.raises(ValueRejectedError) as excinfo:
            clone_config(valid_config)
        assert excinfo.value.key == "random_increment"


class TestConfigToString:
    def test_rendering(self, valid_config):
        valid_config["character_substitutions"] = {"s": "$", "a": "@"}
        valid_config["random_function"] = basic_random_generator
        text = config_to_string(valid_config)
        lines = text.splitlines()
        assert lines == sorted(lines)
        assert "word_length_min=4" in lines
        assert "character_substitutions={a=@, s=$}" in lines
        assert (
            "random_function=passwd_forge.randomness.random_cache.basic_random_generator"
            in lines
        )
        assert any(line.startswith("symbol_alphabet=[") for line in lines)

    def test_wrong_shape_skipped(self, valid_config, caplog):
        valid_config["symbol_alphabet"] = "!@$%^"
        with caplog.at_level(logging.WARNING, logger="passwd_forge"):
            text = config_to_string(valid_config)
        assert "symbol_alphabet" not in text
        assert any("symbol_alphabet" in r.getMessage() for r in caplog.records)
