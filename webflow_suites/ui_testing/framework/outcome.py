"""
================================================================================
Best-Effort Outcomes
================================================================================

Popup suppression, failure screenshots and shutdown must never fail or mask a
test. Instead of raising, they return a BestEffortOutcome: the operation is
always "handled", and any swallowed error travels along as a diagnostic that
has already been logged.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from webflow_tools.common import RunLogger


@dataclass(frozen=True)
class BestEffortOutcome:
    """
    Result of a best-effort operation.

    Attributes:
        operation: Name of the operation
        acted: Whether the operation actually did something
        detail: Short description of what happened
        diagnostic: Logged-but-ignored error message, if any
        value: Optional payload (e.g. screenshot path)
    """
    operation: str
    acted: bool = False
    detail: str = ""
    diagnostic: Optional[str] = None
    value: Any = None

    @property
    def handled(self) -> bool:
        return True

    @property
    def ok(self) -> bool:
        """True when no error was swallowed."""
        return self.diagnostic is None

    @classmethod
    def skipped(cls, operation: str, detail: str) -> "BestEffortOutcome":
        return cls(operation=operation, acted=False, detail=detail)

    @classmethod
    def done(cls, operation: str, detail: str = "", value: Any = None) -> "BestEffortOutcome":
        return cls(operation=operation, acted=True, detail=detail, value=value)

    @classmethod
    def failed(cls, operation: str, error: BaseException) -> "BestEffortOutcome":
        return cls(operation=operation, acted=False, diagnostic=f"{type(error).__name__}: {error}")


async def best_effort(
    operation: str,
    action: Callable[[], Awaitable[BestEffortOutcome]],
    run_logger: RunLogger,
    level: str = "warning",
) -> BestEffortOutcome:
    """
    Run `action`, converting any exception into a logged failed outcome.

    Args:
        operation: Name used in the log line and the outcome
        action: Zero-argument coroutine factory returning an outcome
        run_logger: Logging context of the calling component
        level: Log level for swallowed errors ("warning" or "error")
    """
    try:
        return await action()
    except Exception as e:
        getattr(run_logger, level)(f"{operation} encountered error: {e}")
        return BestEffortOutcome.failed(operation, e)


__all__ = [
    "BestEffortOutcome",
    "best_effort",
]
