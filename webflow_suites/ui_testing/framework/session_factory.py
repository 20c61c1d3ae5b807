"""
================================================================================
Session Factory
================================================================================

Browser session lifecycle management for UI automation.

Features:
    - Bounded-retry session creation (browser/driver handshake is flaky)
    - Static validation of the browser name before any attempt
    - Timeout policy applied before the page is handed out
    - Idempotent, non-raising shutdown

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, List, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from webflow_tools.common import RunLogger

from .errors import SessionCreationError
from .outcome import BestEffortOutcome
from .retry import RetryPolicy, with_retry
from .session_config import BrowserKind, SessionConfig, TimeoutPolicy


DEFAULT_SESSION_RETRY = RetryPolicy(attempts=3, delay_seconds=2.0)


async def _start_playwright() -> Playwright:
    return await async_playwright().start()


class BrowserSession:
    """
    Handle to one controlled browser page.

    Owned by the SessionFactory that created it: obtain one through
    `SessionFactory.create()` and release it through `SessionFactory.quit()`.
    The timeout policy is already applied when a session is returned.
    """

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
        config: SessionConfig,
    ):
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page
        self._config = config
        self._closed = False

    @property
    def page(self) -> Page:
        return self._page

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def timeouts(self) -> TimeoutPolicy:
        return self._config.timeouts

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def current_url(self) -> str:
        return self._page.url

    def window_handles(self) -> List[Page]:
        """Open pages of this session; empty once the session is closed."""
        if self._closed:
            return []
        return [p for p in self._context.pages if not p.is_closed()]

    async def title(self) -> str:
        return await self._page.title()

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        """
        Evaluate JavaScript in the page, bounded by the script timeout.

        Raises:
            asyncio.TimeoutError: When the script outlives `timeouts.script_ms`
        """
        return await asyncio.wait_for(
            self._page.evaluate(script, arg),
            timeout=self.timeouts.script_ms / 1000,
        )

    async def take_screenshot(self, full_page: bool = False) -> bytes:
        return await self._page.screenshot(full_page=full_page)

    @property
    def browser_version(self) -> str:
        return self._browser.version or "unknown"

    async def close(self) -> None:
        """Close context and browser, then stop the driver."""
        if self._closed:
            return
        try:
            await self._context.close()
            await self._browser.close()
        finally:
            self._closed = True
            await self._playwright.stop()


class SessionFactory:
    """
    Creates and destroys browser sessions.

    Usage:
        factory = SessionFactory(SessionConfig.from_config(), run_logger)
        session = await factory.create()
        try:
            await session.page.goto("https://example.com")
        finally:
            await factory.quit(session)
    """

    def __init__(
        self,
        config: SessionConfig,
        run_logger: RunLogger,
        retry_policy: Optional[RetryPolicy] = None,
        driver_starter: Optional[Callable[[], Awaitable[Playwright]]] = None,
    ):
        """
        Initialize session factory.

        Args:
            config: Browser and timeout settings
            run_logger: Logging context
            retry_policy: Creation retry budget (3 attempts, 2s apart by default)
            driver_starter: Coroutine factory returning a started Playwright
                driver. Defaults to `async_playwright().start()`.
        """
        self.config = config
        self.retry_policy = retry_policy or DEFAULT_SESSION_RETRY
        self._logger = run_logger.child("session")
        self._driver_starter = driver_starter or _start_playwright

    async def create(self) -> BrowserSession:
        """
        Create a configured browser session.

        Returns:
            BrowserSession with the timeout policy applied

        Raises:
            UnsupportedBrowserError: Unknown browser name, raised before any attempt
            SessionCreationError: Every attempt failed
        """
        kind = self.config.browser_kind

        session = await with_retry(
            lambda: self._create_once(kind),
            self.retry_policy,
            f"Browser session creation ({kind.value})",
            self._logger,
            error_cls=SessionCreationError,
        )

        self._logger.info(
            f"Browser session initialized successfully: {kind.value} "
            f"(headless={self.config.headless}, "
            f"version={session.browser_version})",
            browser=kind.value,
            headless=self.config.headless,
        )
        return session

    async def _create_once(self, kind: BrowserKind) -> BrowserSession:
        """One independent creation attempt; cleans up after itself on failure."""
        playwright = browser = context = None
        try:
            playwright = await self._driver_starter()
            launcher = getattr(playwright, kind.value)
            browser = await launcher.launch(**self.config.launch_options())
            context = await browser.new_context(**self.config.context_options())
            self._apply_timeouts(context)
            page = await context.new_page()
        except Exception:
            await self._discard(playwright, browser, context)
            raise

        return BrowserSession(playwright, browser, context, page, self.config)

    def _apply_timeouts(self, context: BrowserContext) -> None:
        timeouts = self.config.timeouts
        context.set_default_timeout(timeouts.implicit_wait_ms)
        context.set_default_navigation_timeout(timeouts.page_load_ms)

    async def _discard(
        self,
        playwright: Optional[Playwright],
        browser: Optional[Browser],
        context: Optional[BrowserContext],
    ) -> None:
        """Release whatever a failed attempt managed to start."""
        for resource, closer in (
            (context, "close"),
            (browser, "close"),
            (playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                await getattr(resource, closer)()
            except Exception as e:
                self._logger.debug(f"Ignoring cleanup error after failed attempt: {e}")

    async def quit(self, session: Optional[BrowserSession]) -> BestEffortOutcome:
        """
        Close a session. Safe to call repeatedly or with None.

        Close errors are logged and swallowed so that shutdown never masks the
        outcome of the tests that ran on the session.
        """
        if session is None or session.is_closed:
            return BestEffortOutcome.skipped("quit", "No open session")

        try:
            await session.close()
        except Exception as e:
            self._logger.error(f"Error closing browser session: {e}")
            return BestEffortOutcome.failed("quit", e)

        self._logger.info("Browser session closed successfully")
        return BestEffortOutcome.done("quit", "Session closed")


__all__ = [
    "BrowserSession",
    "SessionFactory",
    "DEFAULT_SESSION_RETRY",
]
