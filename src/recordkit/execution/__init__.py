"""recordkit Execution -- retry loops for operations that report their outcome.

Resilience
  retry.py   IncrementalBackoff, ConstantBackoff, retry_n, retry_unlimited
"""

from .retry import (
    INCREMENTS,
    ConstantBackoff,
    IncrementalBackoff,
    RetryMethod,
    RetryStrategy,
    retry_n,
    retry_unlimited,
    run_with_retry,
    sleep_incremental,
    sleep_until,
)

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
