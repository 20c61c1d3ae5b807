"""
In-memory stand-ins for the parts of the async Playwright API the harness
uses. Lets the framework be exercised without launching a browser.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from webflow_suites.ui_testing.framework.retry import RetryPolicy

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
NO_DELAY = RetryPolicy(attempts=3, delay_seconds=0)

LOGIN_URL = "https://app.test/login"
SECURE_URL = "https://app.test/secure"


@dataclass
class FakeElement:
    text: str = ""
    visible: bool = True
    enabled: bool = True
    appear_after: float = 0.0
    value: str = ""
    clicks: int = 0
    cleared: int = 0
    click_error: Optional[Exception] = None


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: int = 0):
        self.page = page
        self.selector = selector
        self.index = index

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    def _matches(self) -> List[FakeElement]:
        return self.page.dom.get(self.selector, [])

    def _element(self) -> FakeElement:
        matches = self._matches()
        if self.index >= len(matches):
            raise PlaywrightError(f"No element for {self.selector}")
        return matches[self.index]

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.lookups.append(self.selector)
        timeout_s = (timeout if timeout is not None else self.page.default_timeout) / 1000

        pending_failures = self.page.lookup_failures.get(self.selector, 0)
        if pending_failures:
            self.page.lookup_failures[self.selector] = pending_failures - 1
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

        matches = self._matches()
        if self.index >= len(matches) or matches[self.index].appear_after > timeout_s:
            await asyncio.sleep(timeout_s)
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

        await asyncio.sleep(matches[self.index].appear_after)

    async def count(self) -> int:
        if self.page.locator_error is not None:
            raise self.page.locator_error
        return len(self._matches())

    async def all(self) -> List["FakeLocator"]:
        return [FakeLocator(self.page, self.selector, i) for i in range(len(self._matches()))]

    async def is_visible(self) -> bool:
        return self._element().visible

    async def is_enabled(self) -> bool:
        return self._element().enabled

    async def click(self, **kwargs: Any) -> None:
        element = self._element()
        if element.click_error is not None:
            raise element.click_error
        element.clicks += 1
        self.page.clicked.append((self.selector, self.index))

    async def clear(self) -> None:
        element = self._element()
        element.value = ""
        element.cleared += 1

    async def fill(self, value: str, **kwargs: Any) -> None:
        element = self._element()
        # Completion order follows appear_after, not issue order
        await asyncio.sleep(element.appear_after)
        element.value = value
        self.page.fill_order.append(self.selector)

    async def inner_text(self) -> str:
        return self._element().text


class FakePage:
    def __init__(self, dom: Optional[Dict[str, List[FakeElement]]] = None):
        self.dom: Dict[str, List[FakeElement]] = dom if dom is not None else {}
        self.routes: Dict[str, Dict[str, List[FakeElement]]] = {}
        self.url = "about:blank"
        self.title_text = ""
        self.closed = False
        self.default_timeout = 30000
        self.goto_calls: List[str] = []
        self.goto_failures = 0
        self.lookups: List[str] = []
        self.lookup_failures: Dict[str, int] = {}
        self.locator_calls: List[str] = []
        self.locator_error: Optional[Exception] = None
        self.clicked: List[Any] = []
        self.fill_order: List[str] = []
        self.ready = True
        self.screenshot_error: Optional[Exception] = None
        self.script_delay = 0.0
        self.script_result: Any = None

    def locator(self, selector: str) -> FakeLocator:
        self.locator_calls.append(selector)
        return FakeLocator(self, selector)

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.goto_calls.append(url)
        if self.goto_failures:
            self.goto_failures -= 1
            raise PlaywrightError("net::ERR_CONNECTION_RESET")
        self.url = url
        if url in self.routes:
            self.dom = self.routes[url]

    async def title(self) -> str:
        return self.title_text

    def is_closed(self) -> bool:
        return self.closed

    async def screenshot(self, **kwargs: Any) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return PNG_BYTES

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        await asyncio.sleep(self.script_delay)
        return self.script_result

    async def wait_for_function(self, expression: str, timeout: Optional[float] = None) -> bool:
        if not self.ready:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")
        return True

    async def wait_for_url(self, pattern: str, timeout: Optional[float] = None) -> None:
        return None


class FakeContext:
    def __init__(self, driver: "FakeDriver", options: Dict[str, Any]):
        self.driver = driver
        self.options = options
        self.pages: List[FakePage] = []
        self.default_timeout: Optional[float] = None
        self.navigation_timeout: Optional[float] = None
        self.timeouts_at_page_creation = None
        self.closed = False

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.navigation_timeout = timeout

    async def new_page(self) -> FakePage:
        self.timeouts_at_page_creation = (self.default_timeout, self.navigation_timeout)
        page = self.driver.page
        if self.default_timeout is not None:
            page.default_timeout = self.default_timeout
        self.pages.append(page)
        return page

    async def close(self) -> None:
        if self.driver.close_error is not None:
            raise self.driver.close_error
        self.closed = True
        for page in self.pages:
            page.closed = True


class FakeBrowser:
    version = "120.0.6099.28"

    def __init__(self, driver: "FakeDriver"):
        self.driver = driver
        self.contexts: List[FakeContext] = []
        self.closed = False

    async def new_context(self, **options: Any) -> FakeContext:
        context = FakeContext(self.driver, options)
        self.contexts.append(context)
        self.driver.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True


class FakeBrowserType:
    def __init__(self, driver: "FakeDriver", name: str):
        self.driver = driver
        self.name = name

    async def launch(self, **options: Any) -> FakeBrowser:
        self.driver.launches.append((self.name, options))
        if self.driver.launch_failures:
            self.driver.launch_failures -= 1
            raise PlaywrightError("Browser closed unexpectedly during startup")
        browser = FakeBrowser(self.driver)
        self.driver.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, driver: "FakeDriver"):
        self.driver = driver
        self.chromium = FakeBrowserType(driver, "chromium")
        self.firefox = FakeBrowserType(driver, "firefox")
        self.webkit = FakeBrowserType(driver, "webkit")
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True


@dataclass
class FakeDriver:
    """
    Driver starter passed to SessionFactory. Every call starts a new
    FakePlaywright; all of them share the page and failure counters.
    """
    page: FakePage = field(default_factory=FakePage)
    launch_failures: int = 0
    close_error: Optional[Exception] = None
    started: List[FakePlaywright] = field(default_factory=list)
    launches: List[Any] = field(default_factory=list)
    browsers: List[FakeBrowser] = field(default_factory=list)
    contexts: List[FakeContext] = field(default_factory=list)

    async def __call__(self) -> FakePlaywright:
        playwright = FakePlaywright(self)
        self.started.append(playwright)
        return playwright
