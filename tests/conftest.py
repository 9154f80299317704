"""
Pytest configuration for Passwd Forge tests.

Provides dictionary file builders, a deterministic recording random source
and a known-good configuration.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import pytest

from passwd_forge.configs.forge_settings import ForgeSettings
from passwd_forge.schema.config_validator import default_config


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that touch the filesystem end to end"
    )


def make_words(count: int, length: int) -> List[str]:
    """Build ``count`` distinct lowercase alphabetic words of ``length`` letters."""
    words = []
    for index in range(count):
        letters = []
        for position in range(length):
            letters.append(chr(ord("a") + (index // 26**position) % 26))
        words.append("".join(letters))
    return words


class RecordingSource:
    """Deterministic random source that records every request it serves."""

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        self.calls: List[int] = []
        self._values = list(values) if values is not None else None
        self._position = 0

    def __call__(self, count: int) -> List[float]:
        self.calls.append(count)
        batch = []
        for _ in range(count):
            if self._values is None:
                batch.append((self._position % 1000) / 1000)
            else:
                batch.append(self._values[self._position % len(self._values)])
            self._position += 1
        return batch


@pytest.fixture
def write_dictionary(tmp_path: Path) -> Callable[..., str]:
    """Factory writing a dictionary file and returning its path."""

    def _write(words: Iterable[str], name: str = "words.txt", header: str = "") -> str:
        path = tmp_path / name
        path.write_text(header + "\n".join(words) + "\n", encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def dictionary_path(write_dictionary: Callable[..., str]) -> str:
    """
    Dictionary with 120 four-letter, 120 five-letter and 30 nine-letter words,
    plus comments, blank lines and junk the loader must skip.
    """
    words = make_words(120, 4) + make_words(120, 5) + make_words(30, 9)
    header = "# sample dictionary\n\nab\ncat\nnot-a-word\n1234\n"
    return write_dictionary(words, header=header)


@pytest.fixture
def recording_source() -> RecordingSource:
    return RecordingSource()


@pytest.fixture
def settings(dictionary_path: str) -> ForgeSettings:
    return ForgeSettings(dictionary_file_path=dictionary_path)


@pytest.fixture
def valid_config(settings: ForgeSettings, recording_source: RecordingSource) -> Dict[str, Any]:
    """A complete, valid configuration using the sample dictionary."""
    config = default_config(settings=settings)
    config["random_function"] = recording_source
    return config
