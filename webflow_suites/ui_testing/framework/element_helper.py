# ================================================================================
# Element Helper Module
# ================================================================================
#
# Element lookup and interaction helpers for a BrowserSession.
#
# Key Features:
#   - Explicit timeouts on every lookup (session implicit wait by default)
#   - Existence checks and text reads that degrade to False / a default
#   - Concurrent form filling
#   - Click with bounded retry, re-locating the element on every attempt
#   - Allure step integration
#
# ================================================================================

import asyncio
import time
from typing import Dict, List, Optional

import allure
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from webflow_tools.common import RunLogger

from .errors import ElementInteractionError, ElementNotFoundError
from .popups import PopupSuppressor
from .retry import RetryPolicy, with_retry
from .session_factory import BrowserSession


class By:
    """
    Builders for Playwright selector strings.

    Example:
        By.id("username")               -> "id=username"
        By.css("button[type='submit']") -> "css=button[type='submit']"
        By.xpath("//h2")                -> "xpath=//h2"
    """

    @staticmethod
    def css(selector: str) -> str:
        return f"css={selector}"

    @staticmethod
    def xpath(expression: str) -> str:
        return f"xpath={expression}"

    @staticmethod
    def id(element_id: str) -> str:
        return f"id={element_id}"

    @staticmethod
    def name(name: str) -> str:
        return f"css=[name='{name}']"

    @staticmethod
    def text(text: str) -> str:
        return f"text={text}"


class ElementHelper:
    """
    Element interaction methods bound to one browser session.

    Example:
        elements = ElementHelper(session, run_logger)
        await elements.fill_form({"#username": "tomsmith", "#password": "secret"})
        await elements.click_element("button[type='submit']")
        assert await elements.element_exists(".flash.success")
    """

    def __init__(
        self,
        session: BrowserSession,
        run_logger: RunLogger,
        popups: Optional[PopupSuppressor] = None,
        click_attempts: int = 2,
        click_retry_delay: float = 0.1,
    ):
        """
        Args:
            session: Active browser session
            run_logger: Logging context
            popups: Suppressor run after form fills and clicks (None disables)
            click_attempts: Default total attempts for click_element
            click_retry_delay: Fixed delay in seconds between click attempts
        """
        self.session = session
        self.popups = popups
        self.click_attempts = click_attempts
        self.click_retry_delay = click_retry_delay
        self._logger = run_logger.child("elements")

    @property
    def page(self) -> Page:
        return self.session.page

    def _resolve_timeout(self, timeout_ms: Optional[int]) -> int:
        if timeout_ms is None:
            return self.session.timeouts.implicit_wait_ms
        return timeout_ms

    async def find_element(self, locator: str, timeout_ms: Optional[int] = None) -> Locator:
        """
        Wait for the first element matching `locator` to be attached.

        Args:
            locator: Playwright selector
            timeout_ms: Wait limit; the session's implicit wait if None.
                0 or less checks once without waiting.

        Raises:
            ElementNotFoundError: Nothing matched before the timeout
        """
        timeout_ms = self._resolve_timeout(timeout_ms)
        element = self.page.locator(locator).first
        if timeout_ms <= 0:
            if await element.count() == 0:
                raise ElementNotFoundError(locator, 0)
            return element
        try:
            await element.wait_for(state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(locator, timeout_ms) from e
        return element

    async def find_elements(
        self,
        locators: List[str],
        timeout_ms: Optional[int] = None,
    ) -> List[Optional[Locator]]:
        """Look up several elements at once; misses come back as None."""

        async def find_or_none(locator: str) -> Optional[Locator]:
            try:
                return await self.find_element(locator, timeout_ms)
            except ElementNotFoundError:
                return None

        return list(await asyncio.gather(*(find_or_none(loc) for loc in locators)))

    async def element_exists(self, locator: str, timeout_ms: int = 1000) -> bool:
        """Check if an element exists without raising for a missing one."""
        try:
            await self.find_element(locator, timeout_ms)
            return True
        except ElementNotFoundError:
            return False

    async def get_element_text(
        self,
        locator: str,
        default: str = "",
        timeout_ms: Optional[int] = None,
    ) -> str:
        """Visible text of an element, or `default` if it cannot be read."""
        try:
            element = await self.find_element(locator, timeout_ms)
            return await element.inner_text()
        except (ElementNotFoundError, PlaywrightError) as e:
            self._logger.debug(f"Returning default text for {locator}: {e}")
            return default

    @allure.step("Fill form")
    async def fill_form(self, field_map: Dict[str, str]) -> None:
        """
        Clear and fill every field in `field_map` ({selector: value}).

        Fields are issued concurrently; the session still delivers the
        commands one at a time.
        """

        async def fill_field(locator: str, value: str) -> None:
            element = await self.find_element(locator)
            await element.clear()
            await element.fill(value)

        self._logger.step(f"Fill form fields: {', '.join(field_map)}")
        results = await asyncio.gather(
            *(fill_field(loc, value) for loc, value in field_map.items()),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            for extra in errors[1:]:
                self._logger.warning(f"Additional form field failure: {extra}")
            raise errors[0]

        if self.popups is not None:
            await self.popups.suppress(self.session)

    @allure.step("Click element: {locator}")
    async def click_element(
        self,
        locator: str,
        max_retries: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Find and click an element, retrying with a fresh lookup each time.

        Args:
            locator: Playwright selector
            max_retries: Total number of attempts (click_attempts if None)
            timeout_ms: Lookup timeout per attempt

        Raises:
            ElementInteractionError: Every attempt failed
        """

        async def click() -> None:
            element = await self.find_element(locator, timeout_ms)
            await element.click()

        if max_retries is None:
            max_retries = self.click_attempts

        self._logger.step(f"Click: {locator}")
        await with_retry(
            click,
            RetryPolicy(attempts=max_retries, delay_seconds=self.click_retry_delay),
            f"Click on {locator}",
            self._logger,
            error_cls=ElementInteractionError,
        )

        if self.popups is not None:
            await self.popups.suppress(self.session)

    async def wait_for_clickable(
        self,
        locator: str,
        timeout_ms: int = 5000,
        poll_interval: float = 0.1,
    ) -> Locator:
        """
        Wait until an element exists and is enabled.

        Raises:
            ElementNotFoundError: Not found, or still disabled at the deadline
        """
        deadline = time.monotonic() + timeout_ms / 1000
        element = await self.find_element(locator, timeout_ms)

        while not await element.is_enabled():
            if time.monotonic() >= deadline:
                raise ElementNotFoundError(locator, timeout_ms, reason="not clickable")
            await asyncio.sleep(poll_interval)

        return element


__all__ = [
    "By",
    "ElementHelper",
]
