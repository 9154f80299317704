"""
Random Number Cache Module

Buffers random fractional values fetched in batches from a pluggable random
source and serves them one at a time in the order they were produced.

Random sources may carry per-call overhead (a remote entropy service, a
hardware device), so the cache always asks for ``increment`` values at once
and never for a single value.

Classes:
    - RandomSource: Protocol every random source satisfies
    - RandomNumberCache: Thread-safe FIFO buffer over a random source
"""

import logging
import math
import random
import threading
from collections import deque
from typing import Any, Deque, Final, List, Protocol, Sequence

from passwd_forge.exceptions import (
    InvalidArgumentError,
    RandomSourceError,
    RandomSourceExhaustedError,
)

logger = logging.getLogger(__name__)

# Number of buckets a fractional value is scaled into by next_int()
RANDOM_INT_SCALE: Final[int] = 1_000_000

# next_int() gives up after max(MIN_INT_DRAWS, INT_DRAWS_PER_INCREMENT * increment)
# rejected draws; a contract-abiding source is rejected at most half the time
MIN_INT_DRAWS: Final[int] = 100
INT_DRAWS_PER_INCREMENT: Final[int] = 4

_SYSTEM_RANDOM = random.SystemRandom()


class RandomSource(Protocol):
    """Contract for pluggable random sources."""

    def __call__(self, count: int) -> Sequence[float]:
        """
        Generate random values.

        Args:
            count: Number of values wanted, at least 1

        Returns:
            Exactly ``count`` values, each in the closed interval [0, 1]
        """
        ...


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def basic_random_generator(count: int) -> List[float]:
    """
    Default random source backed by the operating system's CSPRNG.

    Args:
        count: Number of random values to generate (must be at least 1)

    Returns:
        ``count`` floats in [0, 1)

    Raises:
        InvalidArgumentError: If count is not a positive integer
    """
    if not _is_positive_int(count):
        raise InvalidArgumentError(
            f"Random source must be asked for at least 1 value, got {count!r}",
            value=count,
        )
    return [_SYSTEM_RANDOM.random() for _ in range(count)]


def _is_unit_interval(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if math.isnan(value):
        return False
    return 0 <= value <= 1


class RandomNumberCache:
    """
    Thread-safe FIFO buffer of random values in [0, 1].

    Attributes:
        source: Random source the cache is refilled from
        increment: Number of values requested per refill

    Usage:
        ```python
        cache = RandomNumberCache(basic_random_generator, increment=10)
        value = cache.next()
        index = cache.next_int(len(words))
        ```
    """

    def __init__(self, source: RandomSource, increment: int) -> None:
        """
        Initialize an empty cache bound to a random source.

        Args:
            source: Callable satisfying the RandomSource contract
            increment: Batch size per refill (at least 1)

        Raises:
            InvalidArgumentError: If source is not callable or increment < 1
        """
        self._lock = threading.RLock()
        self._queue: Deque[float] = deque()
        self._source: RandomSource = source
        self._increment = increment
        self.rekey(source, increment)

    def __repr__(self) -> str:
        return f"<RandomNumberCache pending={len(self)} increment={self._increment}>"

    def __len__(self) -> int:
        """Number of values waiting to be consumed."""
        with self._lock:
            return len(self._queue)

    @property
    def source(self) -> RandomSource:
        return self._source

    @property
    def increment(self) -> int:
        return self._increment

    def rekey(self, source: RandomSource, increment: int) -> None:
        """
        Point the cache at a new source and batch size.

        Values already buffered are kept; they will be consumed before any
        value from the new source.

        Args:
            source: Callable satisfying the RandomSource contract
            increment: Batch size per refill (at least 1)

        Raises:
            InvalidArgumentError: If source is not callable or increment < 1
        """
        if not callable(source):
            raise InvalidArgumentError("Random source must be callable", value=source)
        if not _is_positive_int(increment):
            raise InvalidArgumentError(
                f"Random increment must be a positive integer, got {increment!r}",
                key="random_increment",
                value=increment,
            )
        with self._lock:
            self._source = source
            self._increment = increment

    def pending(self) -> List[float]:
        """Copy of the buffered values in consumption order."""
        with self._lock:
            return list(self._queue)

    def clear(self) -> None:
        """Discard all buffered values."""
        with self._lock:
            self._queue.clear()

    def replenish(self) -> None:
        """
        Fetch one batch from the source and append it to the queue.

        The whole batch is checked before anything is appended, so a broken
        batch leaves the queue untouched.

        Raises:
            RandomSourceError: If the source fails, returns the wrong number
                of values, or returns a value outside [0, 1]
        """
        with self._lock:
            requested = self._increment
            try:
                batch = list(self._source(requested))
            except RandomSourceError:
                raise
            except Exception as e:
                raise RandomSourceError(
                    f"Random source failed while generating {requested} values",
                    cause=e,
                ) from e

            if len(batch) != requested:
                raise RandomSourceError(
                    f"Random source returned {len(batch)} values, expected {requested}",
                    key="random_function",
                    value=len(batch),
                )
            for number in batch:
                if not _is_unit_interval(number):
                    raise RandomSourceError(
                        f"Random source returned an invalid value ({number!r})",
                        key="random_function",
                        value=number,
                    )

            self._queue.extend(float(number) for number in batch)
            logger.debug(
                "Replenished random cache with %d values (%d pending)",
                requested,
                len(self._queue),
            )

    def next(self) -> float:
        """
        Pop the oldest buffered value, refilling first if the queue is empty.

        Returns:
            A float in [0, 1]

        Raises:
            RandomSourceError: If a needed refill fails
            RandomSourceExhaustedError: If the queue is empty even after a refill
        """
        with self._lock:
            if not self._queue:
                self.replenish()
            if not self._queue:
                raise RandomSourceExhaustedError(
                    "Random cache is empty after replenishing"
                )
            return self._queue.popleft()

    def next_int(self, maximum: int) -> int:
        """
        Draw a uniformly distributed integer in ``[0, maximum)``.

        Each value is scaled into RANDOM_INT_SCALE buckets; buckets in the
        incomplete tail that would favour small results are rejected and
        another value is drawn.

        Args:
            maximum: Exclusive upper bound, 1 to RANDOM_INT_SCALE

        Returns:
            An integer n with 0 <= n < maximum

        Raises:
            InvalidArgumentError: If maximum is not a positive integer or
                exceeds RANDOM_INT_SCALE
            RandomSourceError: If a refill fails, or if every draw allowed
                lands in the rejected tail
        """
        if not _is_positive_int(maximum):
            raise InvalidArgumentError(
                f"Random limit must be a positive integer, got {maximum!r}",
                value=maximum,
            )
        if maximum > RANDOM_INT_SCALE:
            raise InvalidArgumentError(
                f"Random limit must not exceed {RANDOM_INT_SCALE}, got {maximum}",
                value=maximum,
            )

        limit = RANDOM_INT_SCALE - (RANDOM_INT_SCALE % maximum)
        with self._lock:
            attempts = max(MIN_INT_DRAWS, INT_DRAWS_PER_INCREMENT * self._increment)
            for _ in range(attempts):
                bucket = int(self.next() * RANDOM_INT_SCALE)
                if bucket < limit:
                    return bucket % maximum

        raise RandomSourceError(
            f"Random source produced no usable value below {maximum} "
            f"in {attempts} draws",
            key="random_function",
            value=maximum,
        )


__all__ = [
    "RANDOM_INT_SCALE",
    "MIN_INT_DRAWS",
    "INT_DRAWS_PER_INCREMENT",
    "RandomSource",
    "RandomNumberCache",
    "basic_random_generator",
]
