"""
================================================================================
Navigation Controller
================================================================================

Page loads with bounded retry and an "already there" short-circuit.

A NavigationTarget is a URL plus an optional path prefix. When the session is
already on a URL that satisfies the target, `navigate_to` issues no page load
at all, so tests that need a hard reload should call `page.reload()` instead.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlsplit

from playwright.async_api import Error as PlaywrightError

from webflow_tools.common import RunLogger

from .errors import NavigationError
from .popups import PopupSuppressor
from .retry import RetryPolicy, with_retry
from .session_factory import BrowserSession


@dataclass(frozen=True)
class NavigationTarget:
    """
    Where to navigate, and when navigation can be skipped.

    Attributes:
        url: Absolute URL to load
        match_prefix: Optional path prefix; any same-origin URL whose path
            starts with it counts as already being at the target
            (e.g. "/login" also accepts "/login?next=/secure" and "/login/sso",
            but not "/login-help")
    """
    url: str
    match_prefix: Optional[str] = None

    def is_satisfied_by(self, current_url: Optional[str]) -> bool:
        if not current_url:
            return False
        if current_url.rstrip("/") == self.url.rstrip("/"):
            return True
        if self.match_prefix is None:
            return False

        current = urlsplit(current_url)
        target = urlsplit(self.url)
        if (current.scheme, current.netloc) != (target.scheme, target.netloc):
            return False
        # Prefix matches whole path segments only: "/login" covers "/login/sso", not "/login-help"
        prefix = self.match_prefix.rstrip("/")
        return current.path == prefix or current.path.startswith(prefix + "/")


def as_target(target: Union[str, NavigationTarget]) -> NavigationTarget:
    if isinstance(target, NavigationTarget):
        return target
    return NavigationTarget(url=target)


class NavigationController:
    """
    Issues page loads against a session.

    Usage:
        navigator = NavigationController(run_logger, popups=PopupSuppressor(run_logger))
        await navigator.navigate_to(
            session,
            NavigationTarget("https://the-internet.herokuapp.com/login", match_prefix="/login"),
        )
    """

    def __init__(
        self,
        run_logger: RunLogger,
        popups: Optional[PopupSuppressor] = None,
        retry_delay: float = 1.0,
    ):
        """
        Args:
            run_logger: Logging context
            popups: Suppressor run after each successful load (None disables)
            retry_delay: Fixed delay in seconds between load attempts
        """
        self.popups = popups
        self.retry_delay = retry_delay
        self._logger = run_logger.child("navigation")

    async def navigate_to(
        self,
        session: BrowserSession,
        target: Union[str, NavigationTarget],
        max_retries: int = 2,
    ) -> None:
        """
        Load `target` unless the session is already there.

        Args:
            session: Active browser session
            target: URL or NavigationTarget
            max_retries: Total number of load attempts

        Raises:
            NavigationError: Every attempt failed (chained to the last error)
        """
        target = as_target(target)

        if target.is_satisfied_by(session.current_url):
            self._logger.debug(f"Already at {session.current_url}, skipping navigation to {target.url}")
            return

        attempt = 0

        async def load() -> None:
            nonlocal attempt
            attempt += 1
            self._logger.step(f"Navigate to: {target.url} (attempt {attempt})")
            await session.page.goto(target.url)

        await with_retry(
            load,
            RetryPolicy(attempts=max_retries, delay_seconds=self.retry_delay),
            f"Navigation to {target.url}",
            self._logger,
            error_cls=NavigationError,
        )

        if self.popups is not None:
            await self.popups.suppress(session)

    async def wait_for_page_ready(
        self,
        session: BrowserSession,
        timeout_ms: int = 10000,
    ) -> bool:
        """
        Wait until `document.readyState` is "complete".

        Returns:
            False (after logging a warning) if the page is not ready in time
        """
        try:
            await session.page.wait_for_function(
                "document.readyState === 'complete'",
                timeout=timeout_ms,
            )
            return True
        except PlaywrightError as e:
            self._logger.warning(f"Page ready timeout after {timeout_ms}ms: {e}")
            return False


__all__ = [
    "NavigationTarget",
    "NavigationController",
    "as_target",
]
