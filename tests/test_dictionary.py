"""
Tests for dictionary loading and word length filtering.
"""

import pytest

from conftest import make_words
from passwd_forge.configs.config_enums import ErrorKind
from passwd_forge.configs.config_essentials import MIN_WORDS
from passwd_forge.dictionary.dictionary_loader import (
    is_dictionary_word,
    load_dictionary,
    parse_words,
)
from passwd_forge.dictionary.word_filter import filter_word_list
from passwd_forge.exceptions import DictionaryReadError, InsufficientWordsError


# =============================================================================
# Loader
# =============================================================================


class TestLoadDictionary:
    def test_skips_comments_blanks_and_short_words(self, tmp_path):
        path = tmp_path / "dict.txt"
        path.write_text("# comment\n\nok\nabcd\nab\n", encoding="utf-8")
        assert load_dictionary(str(path)) == ["abcd"]

    def test_keeps_file_order_and_duplicates(self, write_dictionary):
        path = write_dictionary(["zebra", "apple", "zebra"])
        assert load_dictionary(path) == ["zebra", "apple", "zebra"]

    def test_accepts_path_objects(self, tmp_path):
        path = tmp_path / "dict.txt"
        path.write_text("word\n", encoding="utf-8")
        assert load_dictionary(path) == ["word"]

    def test_handles_crlf_line_endings(self, tmp_path):
        path = tmp_path / "dict.txt"
        path.write_bytes(b"word\r\nmore\r\n")
        assert load_dictionary(path) == ["word", "more"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(DictionaryReadError) as excinfo:
            load_dictionary(str(tmp_path / "missing.txt"))
        assert excinfo.value.kind is ErrorKind.DICTIONARY_READ_ERROR
        assert excinfo.value.key == "dictionary_file_path"

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(DictionaryReadError):
            load_dictionary(tmp_path)

    def test_sample_dictionary(self, dictionary_path):
        assert len(load_dictionary(dictionary_path)) == 270


class TestWordRules:
    @pytest.mark.parametrize(
        "line,kept",
        [
            ("abcd", True),
            ("Zürich", True),
            ("abc", False),
            ("   ", False),
            ("", False),
            ("#abcd", False),
            ("abcd1", False),
            ("well-known", False),
            (" abcd", False),
        ],
    )
    def test_is_dictionary_word(self, line, kept):
        assert is_dictionary_word(line) is kept

    def test_parse_words(self):
        assert parse_words("one\nfour\n#five\nsixty\n") == ["four", "sixty"]


# =============================================================================
# Filter
# =============================================================================


class TestFilterWordList:
    def test_bounds_are_inclusive_and_order_kept(self):
        words = make_words(60, 4) + make_words(50, 6) + make_words(10, 7)
        result = filter_word_list(words, 4, 6)
        assert result.is_success
        assert result.value == make_words(60, 4) + make_words(50, 6)

    def test_ninety_nine_words_fail(self):
        result = filter_word_list(make_words(99, 5), 4, 8)
        assert result.is_failure
        assert result.error.kind is ErrorKind.INSUFFICIENT_WORDS
        with pytest.raises(InsufficientWordsError):
            result.unwrap()

    def test_one_hundred_words_pass(self):
        result = filter_word_list(make_words(100, 5), 4, 8)
        assert result.is_success
        assert len(result.value) == MIN_WORDS

    def test_words_outside_bounds_do_not_count(self):
        words = make_words(99, 5) + make_words(50, 9)
        assert filter_word_list(words, 4, 8).error.kind is ErrorKind.INSUFFICIENT_WORDS

    def test_inverted_bounds(self):
        assert filter_word_list(make_words(200, 5), 8, 4).error.kind is ErrorKind.INVALID_ARGUMENT

    def test_input_untouched(self):
        words = make_words(150, 5) + make_words(10, 9)
        snapshot = list(words)
        filter_word_list(words, 4, 8)
        assert words == snapshot
