"""
================================================================================
Lifecycle Coordinator
================================================================================

Per-suite and per-test setup/teardown around one browser session.

    setup_suite      create the session (once)
    setup_test       start the clock, emit test_start
    teardown_test    duration, failure screenshot (best effort), emit test_end
    teardown_suite   quit the session (never raises)

The coordinator owns its session exclusively; run one coordinator per worker.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from playwright.async_api import Error as PlaywrightError

from webflow_tools.common import RunLogger, get_config
from webflow_tools.report_tools import attach_json, attach_text

from .artifacts import ScreenshotSink
from .element_helper import ElementHelper
from .errors import SessionNotStartedError
from .navigation import NavigationController, NavigationTarget
from .outcome import BestEffortOutcome, best_effort
from .popups import PopupSuppressor
from .retry import RetryPolicy
from .session_config import SessionConfig
from .session_factory import BrowserSession, SessionFactory


@dataclass(frozen=True)
class TestOutcome:
    """
    Result of one test, produced at teardown.

    Attributes:
        name: Test name
        passed: Whether the test passed
        duration_ms: Wall-clock duration
        artifact_path: Failure screenshot, if one was captured
    """
    __test__ = False

    name: str
    passed: bool
    duration_ms: int
    artifact_path: Optional[Path] = None

    @property
    def result(self) -> str:
        return "passed" if self.passed else "failed"


class LifecycleCoordinator:
    """
    Orchestrates the session and test lifecycle for a suite.

    Usage:
        async with LifecycleCoordinator.from_config(run_logger) as coordinator:
            coordinator.setup_test("test_login")
            await coordinator.navigate_to("https://the-internet.herokuapp.com/login")
            ...
            await coordinator.teardown_test("test_login", passed=True)
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        run_logger: RunLogger,
        screenshots: ScreenshotSink,
        navigator: Optional[NavigationController] = None,
        popups: Optional[PopupSuppressor] = None,
        navigation_attempts: int = 3,
    ):
        self.session_factory = session_factory
        self.navigation_attempts = navigation_attempts
        self.screenshots = screenshots
        self.popups = popups or PopupSuppressor(run_logger)
        self.navigator = navigator or NavigationController(run_logger, popups=self.popups)
        self._logger = run_logger.child("lifecycle")
        self._run_logger = run_logger
        self._session: Optional[BrowserSession] = None
        self._elements: Optional[ElementHelper] = None
        self._test_started_at: Optional[float] = None

    @classmethod
    def from_config(
        cls,
        run_logger: RunLogger,
        config: Optional[SessionConfig] = None,
        root: Union[str, Path] = ".",
    ) -> "LifecycleCoordinator":
        """Build a coordinator from config/config.yaml and the environment."""
        factory = SessionFactory(
            config or SessionConfig.from_config(),
            run_logger,
            retry_policy=RetryPolicy(
                attempts=get_config("retry.session_attempts", 3),
                delay_seconds=get_config("retry.session_delay_seconds", 2.0),
            ),
        )
        popups = PopupSuppressor(
            run_logger,
            grace_period=get_config("popups.grace_period_seconds", 0.5),
            settle_period=get_config("popups.settle_period_seconds", 0.5),
        )
        navigator = NavigationController(
            run_logger,
            popups=popups,
            retry_delay=get_config("retry.navigation_delay_seconds", 1.0),
        )
        screenshots = ScreenshotSink(
            Path(root) / get_config("artifacts.screenshot_dir", "screenshots"),
            run_logger,
        )
        return cls(
            factory,
            run_logger,
            screenshots,
            navigator=navigator,
            popups=popups,
            navigation_attempts=get_config("retry.navigation_attempts", 3),
        )

    async def __aenter__(self) -> "LifecycleCoordinator":
        await self.setup_suite()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.teardown_suite()

    # =========================================================================
    # Session Access
    # =========================================================================

    @property
    def session(self) -> BrowserSession:
        if self._session is None:
            raise SessionNotStartedError()
        return self._session

    @property
    def elements(self) -> ElementHelper:
        """ElementHelper bound to the current session."""
        if self._elements is None or self._elements.session is not self.session:
            self._elements = ElementHelper(
                self.session,
                self._run_logger,
                popups=self.popups,
                click_attempts=get_config("retry.click_attempts", 2),
                click_retry_delay=get_config("retry.click_delay_seconds", 0.1),
            )
        return self._elements

    # =========================================================================
    # Suite Lifecycle
    # =========================================================================

    async def setup_suite(self) -> None:
        """Create the suite's browser session."""
        if self._session is not None and not self._session.is_closed:
            self._logger.debug("Session already running, reusing it")
            return

        try:
            self._session = await self.session_factory.create()
        except Exception as e:
            self._logger.error(f"Failed to initialize browser session in suite setup: {e}")
            raise

        self._logger.info("Test suite setup completed successfully")

    async def teardown_suite(self) -> BestEffortOutcome:
        """Quit the session. Never raises."""
        try:
            outcome = await self.session_factory.quit(self._session)
        finally:
            self._session = None
            self._elements = None

        if outcome.ok:
            self._logger.info("Test suite teardown completed")
        return outcome

    # =========================================================================
    # Test Lifecycle
    # =========================================================================

    def setup_test(self, test_name: str) -> None:
        self._test_started_at = time.monotonic()
        self._run_logger.test_start(test_name)

    async def teardown_test(self, test_name: str, passed: bool = True) -> TestOutcome:
        """
        Finish a test: capture a screenshot on failure and report the result.

        A failing screenshot capture is logged and does not change the outcome.
        """
        duration_ms = 0
        if self._test_started_at is not None:
            duration_ms = int((time.monotonic() - self._test_started_at) * 1000)
        self._test_started_at = None

        artifact_path = None
        if not passed and self._session is not None:
            capture = await best_effort(
                "Failure screenshot",
                lambda: self._capture_failure(test_name),
                self._logger,
                level="error",
            )
            artifact_path = capture.value

        outcome = TestOutcome(
            name=test_name,
            passed=passed,
            duration_ms=duration_ms,
            artifact_path=artifact_path,
        )
        self._run_logger.test_end(test_name, outcome.result, duration_ms)
        attach_json({**asdict(outcome), "result": outcome.result}, name="Test outcome")
        self._logger.info(f"Test duration: {duration_ms}ms")
        return outcome

    async def _capture_failure(self, test_name: str) -> BestEffortOutcome:
        data = await self.session.take_screenshot()
        path = self.screenshots.save(data, f"failed_{test_name}")
        attach_text(self.session.current_url, name="Current URL")
        return BestEffortOutcome.done("failure screenshot", str(path), value=path)

    # =========================================================================
    # Session Operations
    # =========================================================================

    async def navigate_to(
        self,
        target: Union[str, NavigationTarget],
        max_retries: Optional[int] = None,
    ) -> None:
        if max_retries is None:
            max_retries = self.navigation_attempts
        await self.navigator.navigate_to(self.session, target, max_retries=max_retries)

    async def handle_popups(self) -> BestEffortOutcome:
        return await self.popups.suppress(self._session)

    async def wait_for_page_ready(self, timeout_ms: int = 10000) -> bool:
        return await self.navigator.wait_for_page_ready(self.session, timeout_ms)

    async def take_screenshot(self, name: Optional[str] = None) -> Path:
        """Save a screenshot of the current page and return its path."""
        data = await self.session.take_screenshot()
        return self.screenshots.save(data, name)

    async def get_page_info(self) -> Dict[str, str]:
        """Current URL and title, or "unknown" values when unavailable."""
        if self._session is None:
            return {"url": "unknown", "title": "unknown"}
        try:
            return {
                "url": self._session.current_url,
                "title": await self._session.title(),
            }
        except PlaywrightError as e:
            self._logger.error(f"Failed to get page info: {e}")
            return {"url": "unknown", "title": "unknown"}


__all__ = [
    "LifecycleCoordinator",
    "TestOutcome",
]
