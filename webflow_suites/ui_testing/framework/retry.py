# ================================================================================
# Retry Module
# ================================================================================
#
# Bounded retry shared by session creation, navigation and element clicks.
#
# Key Features:
#   - Fixed inter-attempt delay by default (optional backoff multiplier)
#   - Non-retryable exceptions propagate immediately
#   - Exhaustion raises a RetryExhaustedError subclass carrying the attempt
#     count and chained to the last underlying error
#
# ================================================================================

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from webflow_tools.common import RunLogger

from .errors import RetryExhaustedError

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.

    Attributes:
        attempts: Total number of attempts (first try included)
        delay_seconds: Delay between attempts
        backoff_multiplier: Multiplier applied to the delay after each failure
        max_delay_seconds: Upper bound for the delay
    """
    attempts: int = 3
    delay_seconds: float = 1.0
    backoff_multiplier: float = 1.0
    max_delay_seconds: float = 10.0

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {self.attempts}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        delay = self.delay_seconds * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.max_delay_seconds)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    description: str,
    run_logger: RunLogger,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    error_cls: Type[RetryExhaustedError] = RetryExhaustedError,
) -> T:
    """
    Run `operation` until it succeeds or the policy's attempts are spent.

    `operation` is called fresh on every attempt, so nothing from a failed
    attempt is reused by the next one.

    Args:
        operation: Zero-argument coroutine factory
        policy: Attempt count and delay
        description: Human-readable name used in logs and the final error
        run_logger: Logging context of the calling component
        retry_on: Exception types considered transient; others propagate
        error_cls: RetryExhaustedError subclass raised on exhaustion

    Returns:
        Result of the first successful attempt

    Raises:
        error_cls: When every attempt failed
    """
    last_exception = None

    for attempt in range(1, policy.attempts + 1):
        try:
            return await operation()
        except retry_on as e:
            last_exception = e
            if attempt < policy.attempts:
                delay = policy.delay_for(attempt)
                run_logger.warning(
                    f"Attempt {attempt}/{policy.attempts} failed for "
                    f"{description}: {e}. Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)

    run_logger.error(
        f"All {policy.attempts} attempts failed for {description}: {last_exception}"
    )
    raise error_cls(description, policy.attempts, last_exception) from last_exception


__all__ = [
    "RetryPolicy",
    "with_retry",
]
