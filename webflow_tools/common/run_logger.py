"""
================================================================================
Run Logger
================================================================================

Explicit logging context for harness components.

Components never reach for a module-global logger: each one is handed a
RunLogger at construction time. The process-wide instance returned by
`default_run_logger()` is wired in only at the application boundary
(root conftest, run_tests.py).

Besides the usual leveled methods, RunLogger emits the domain events the
reports are built from: test_start, test_end, step and screenshot.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import allure
from loguru import logger as _loguru_logger


class RunLogger:
    """
    Leveled logger plus test-run domain events, backed by loguru.

    Usage:
        >>> run_logger = RunLogger()
        >>> factory_logger = run_logger.child("session")
        >>> factory_logger.info("Browser started")
        >>> run_logger.test_start("test_login")
        >>> run_logger.step("Enter valid credentials")
        >>> with run_logger.allure_step("Submit login form"):
        ...     ...
    """

    def __init__(self, component: str = "harness", sink: Any = None):
        """
        Args:
            component: Component name bound into every record
            sink: loguru logger to bind from (the global loguru logger if None)
        """
        self.component = component
        self._base = sink if sink is not None else _loguru_logger
        self._logger = self._base.bind(component=component)

    def child(self, component: str) -> "RunLogger":
        """Return a logger for a sub-component sharing the same sink."""
        return RunLogger(component=component, sink=self._base)

    # =========================================================================
    # Leveled events
    # =========================================================================

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.bind(**fields).debug(message)

    def info(self, message: str, **fields: Any) -> None:
        self._logger.bind(**fields).info(message)

    def warning(self, message: str, **fields: Any) -> None:
        self._logger.bind(**fields).warning(message)

    def error(self, message: str, **fields: Any) -> None:
        self._logger.bind(**fields).error(message)

    # =========================================================================
    # Domain events
    # =========================================================================

    def test_start(self, test_name: str) -> None:
        self._logger.bind(event="test_start", test=test_name).info(
            f"▶ Starting test: {test_name}"
        )

    def test_end(self, test_name: str, result: str, duration_ms: Optional[int] = None) -> None:
        record = self._logger.bind(event="test_end", test=test_name, result=result)
        suffix = f" ({duration_ms}ms)" if duration_ms is not None else ""
        if result == "passed":
            record.info(f"✅ Test passed: {test_name}{suffix}")
        else:
            record.error(f"❌ Test {result}: {test_name}{suffix}")

    def step(self, description: str) -> None:
        self._logger.bind(event="step").info(f"→ {description}")

    @contextmanager
    def allure_step(self, description: str) -> Iterator[None]:
        """Log a step and open a matching Allure step around the block."""
        self.step(description)
        with allure.step(description):
            yield

    def screenshot(self, path: str) -> None:
        self._logger.bind(event="screenshot", path=str(path)).info(
            f"📸 Screenshot saved: {path}"
        )


_default: Optional[RunLogger] = None


def default_run_logger() -> RunLogger:
    """Process-wide RunLogger. Use only at the application boundary."""
    global _default
    if _default is None:
        _default = RunLogger()
    return _default


__all__ = [
    "RunLogger",
    "default_run_logger",
]
