# ============================================================================
#                              IMPORTS
# ============================================================================
import logging
import os
from typing import List

from passwd_forge.configs.config_essentials import MIN_WORD_LENGTH, PathLike
from passwd_forge.exceptions import DictionaryReadError

logger = logging.getLogger(__name__)


# ============================================================================
#                           FILE OPERATIONS
# ============================================================================
def read_text_file(file_path: PathLike, encoding: str = "utf-8") -> str:
    """
    Read a whole text file.

    Args:
        file_path: Path to the file
        encoding: Text encoding to use

    Returns:
        The file contents

    Raises:
        DictionaryReadError: If the file cannot be opened, read or decoded
    """
    try:
        with open(file_path, "r", encoding=encoding) as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DictionaryReadError(
            f"Failed to read words file at {os.fspath(file_path)}",
            key="dictionary_file_path",
            value=os.fspath(file_path),
            cause=e,
        ) from e


# ============================================================================
#                           WORD PARSING
# ============================================================================
def is_dictionary_word(line: str) -> bool:
    """
    Decide whether a dictionary line is kept as a word.

    Blank lines, ``#`` comments, and anything that is not purely alphabetic
    with at least MIN_WORD_LENGTH letters are rejected.
    """
    if not line.strip():
        return False
    if line.startswith("#"):
        return False
    return len(line) >= MIN_WORD_LENGTH and line.isalpha()


def parse_words(text: str) -> List[str]:
    """
    Extract dictionary words from raw file contents.

    Args:
        text: Dictionary contents, one word per line

    Returns:
        Kept lines, verbatim and in file order, duplicates included
    """
    return [line for line in text.splitlines() if is_dictionary_word(line)]


def load_dictionary(file_path: PathLike) -> List[str]:
    """
    Load a dictionary file into a list of words.

    Args:
        file_path: Path to a plain text word list

    Returns:
        All words passing basic lexical filtering, in file order

    Raises:
        DictionaryReadError: If the file cannot be opened or read
    """
    words = parse_words(read_text_file(file_path))
    logger.debug("Loaded %d words from %s", len(words), os.fspath(file_path))
    return words
