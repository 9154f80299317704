"""
Word length filtering for dictionary caches.
"""

import logging
from typing import Any, Iterable, List

from passwd_forge.configs.config_enums import ErrorKind
from passwd_forge.configs.config_essentials import MIN_WORDS, Result

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def filter_word_list(
    words: Iterable[str], min_len: int, max_len: int
) -> Result[List[str]]:
    """
    Keep the words whose length lies in ``[min_len, max_len]``.

    Args:
        words: Candidate words, typically the full dictionary cache
        min_len: Shortest acceptable word length
        max_len: Longest acceptable word length

    Returns:
        Success with the surviving words in their original order, or a
        failure of kind InsufficientWords if fewer than MIN_WORDS survive,
        or InvalidArgument if the bounds are not integers with
        ``min_len <= max_len``
    """
    if not (_is_int(min_len) and _is_int(max_len)) or min_len > max_len:
        return Result[List[str]].failure(
            ErrorKind.INVALID_ARGUMENT,
            f"Invalid word length range [{min_len!r}, {max_len!r}]",
            {"word_length_min": min_len, "word_length_max": max_len},
        )

    kept = [word for word in words if min_len <= len(word) <= max_len]

    if len(kept) < MIN_WORDS:
        return Result[List[str]].failure(
            ErrorKind.INSUFFICIENT_WORDS,
            f"Too few valid words in the dictionary file "
            f"(need at least {MIN_WORDS}, got {len(kept)})",
            {
                "value": len(kept),
                "word_length_min": min_len,
                "word_length_max": max_len,
            },
        )

    logger.debug("%d words between %d and %d letters", len(kept), min_len, max_len)
    return Result[List[str]].success(kept)
