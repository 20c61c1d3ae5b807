"""
================================================================================
Harness Errors
================================================================================

Exception hierarchy for the UI harness.

    HarnessError
    ├── ConfigurationError
    │   └── UnsupportedBrowserError      static, never retried
    ├── RetryExhaustedError              transient failure, budget spent
    │   ├── SessionCreationError
    │   ├── NavigationError
    │   └── ElementInteractionError
    ├── ElementNotFoundError             required lookup timed out
    └── SessionNotStartedError

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base class for all harness errors."""
    pass


class ConfigurationError(HarnessError):
    """Raised when the harness configuration is invalid."""
    pass


class UnsupportedBrowserError(ConfigurationError):
    """Raised for a browser name the harness cannot launch."""

    def __init__(self, browser: str):
        self.browser = browser
        super().__init__(f"Unsupported browser: {browser}")


class RetryExhaustedError(HarnessError):
    """
    Raised when a retried operation failed on every attempt.

    Attributes:
        description: What was being attempted
        attempts: Total number of attempts made
        last_error: Error raised by the final attempt
    """

    def __init__(
        self,
        description: str,
        attempts: int,
        last_error: Optional[BaseException] = None,
    ):
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(f"{description} failed after {attempts} attempt(s){detail}")


class SessionCreationError(RetryExhaustedError):
    """Browser session could not be created within the retry budget."""
    pass


class NavigationError(RetryExhaustedError):
    """Page load failed on every attempt."""
    pass


class ElementInteractionError(RetryExhaustedError):
    """Element could not be interacted with within the retry budget."""
    pass


class ElementNotFoundError(HarnessError):
    """Raised when a required element does not appear before the timeout."""

    def __init__(self, locator: str, timeout_ms: int, reason: str = "not found"):
        self.locator = locator
        self.timeout_ms = timeout_ms
        self.reason = reason
        super().__init__(f"Element {reason}: {locator} within {timeout_ms}ms")


class SessionNotStartedError(HarnessError):
    """Raised when a browser session is used before the suite started it."""

    def __init__(self, message: str = "Browser session not initialized"):
        super().__init__(message)


__all__ = [
    "HarnessError",
    "ConfigurationError",
    "UnsupportedBrowserError",
    "RetryExhaustedError",
    "SessionCreationError",
    "NavigationError",
    "ElementInteractionError",
    "ElementNotFoundError",
    "SessionNotStartedError",
]
