"""Retry loops with incremental backoff and jitter.

Operations retried here report their own outcome instead of raising: the
callable returns ``(is_final, error)``. ``error`` of None means success,
``is_final`` stops the loop even when an error is returned.

Example:
    >>> from recordkit.execution.retry import IncrementalBackoff
    >>>
    >>> strategy = IncrementalBackoff(jitter=False)
    >>> [strategy.next_delay(attempt) for attempt in range(4)]
    [0.25, 0.5, 1.0, 2.0]
"""

import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from recordkit.core.logging import get_logger
from recordkit.core.timestamps import utc_now

logger = get_logger(__name__)

RetryMethod = Callable[[], tuple[bool, Exception | None]]

# (fixed seconds, maximum extra random seconds) per attempt
INCREMENTS: tuple[tuple[float, float], ...] = (
    (0.25, 0.25),
    (0.5, 0.5),
    (1.0, 1.0),
    (2.0, 1.0),
    (4.0, 1.0),
    (8.0, 1.0),
    (16.0, 1.0),
    (32.0, 2.0),
    (64.0, 2.0),
)


class RetryStrategy(ABC):
    """Abstract base for retry strategies."""

    @abstractmethod
    def next_delay(self, attempt: int) -> float:
        """Calculate delay before next retry attempt.

        Args:
            attempt: Zero-based attempt number (0 = first retry)

        Returns:
            Delay in seconds before next attempt
        """
        ...

    @abstractmethod
    def should_retry(self, attempt: int) -> bool:
        """Determine if another attempt is allowed after ``attempt`` failures."""
        ...


@dataclass
class IncrementalBackoff(RetryStrategy):
    """Stepped backoff from 250ms up to 64s, plus random jitter.

    Attempts beyond the last step keep using it.

    Attributes:
        max_retries: Maximum number of attempts (None = unlimited)
        jitter: Add the random part of each step
    """

    max_retries: int | None = None
    jitter: bool = True

    def next_delay(self, attempt: int) -> float:
        """Fixed part of the step plus up to its variable part."""
        fixed, variable = INCREMENTS[min(max(attempt, 0), len(INCREMENTS) - 1)]
        if self.jitter:
            return fixed + random.uniform(0, variable)
        return fixed

    def should_retry(self, attempt: int) -> bool:
        return self.max_retries is None or attempt < self.max_retries


@dataclass
class ConstantBackoff(RetryStrategy):
    """Constant delay between retries."""

    max_retries: int | None = None
    delay: float = 1.0

    def next_delay(self, attempt: int) -> float:
        """Return constant delay."""
        return self.delay

    def should_retry(self, attempt: int) -> bool:
        return self.max_retries is None or attempt < self.max_retries


def sleep_incremental(attempt: int) -> None:
    """Sleep for the incremental backoff delay of ``attempt``."""
    time.sleep(IncrementalBackoff().next_delay(attempt))


def sleep_until(when: datetime) -> None:
    """Sleep until ``when``; returns at once if it has passed.

    Naive datetimes are compared with local time.
    """
    now = datetime.now() if when.tzinfo is None else utc_now()
    remaining = (when - now).total_seconds()
    if remaining > 0:
        time.sleep(remaining)


def retry_n(method: RetryMethod, retries: int) -> Exception | None:
    """Call ``method`` up to ``retries`` times (at least once).

    Returns:
        None on success, otherwise the error of the final attempt
    """
    return run_with_retry(method, IncrementalBackoff(max_retries=max(retries, 1)))


def retry_unlimited(method: RetryMethod, delay: float = 1.0) -> Exception | None:
    """Call ``method`` until it succeeds or reports a final outcome."""
    return run_with_retry(method, ConstantBackoff(delay=delay))


def run_with_retry(method: RetryMethod, strategy: RetryStrategy) -> Exception | None:
    """Drive ``method`` with ``strategy`` until success, a final result or exhaustion."""
    attempt = 0
    while True:
        is_final, error = method()
        if is_final or error is None:
            return error

        attempt += 1
        if not strategy.should_retry(attempt):
            logger.debug("retry.exhausted", attempts=attempt, error=str(error))
            return error

        delay = strategy.next_delay(attempt - 1)
        logger.debug(
            "retry.attempt_failed",
            attempt=attempt,
            delay_seconds=round(delay, 3),
            error=str(error),
        )
        time.sleep(delay)


__all__ = [
    "INCREMENTS",
    "ConstantBackoff",
    "IncrementalBackoff",
    "RetryMethod",
    "RetryStrategy",
    "retry_n",
    "retry_unlimited",
    "run_with_retry",
    "sleep_incremental",
    "sleep_until",
]
