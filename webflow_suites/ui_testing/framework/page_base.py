"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation on top of the
LifecycleCoordinator.

Provides:
    - URL handling and "already there" navigation targets
    - Element helpers bound to the suite session
    - Screenshot shortcut

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import allure

from webflow_tools.common import get_config

from .element_helper import ElementHelper
from .lifecycle import LifecycleCoordinator
from .navigation import NavigationTarget


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"
            MATCH_PREFIX = "/login"

            async def login(self, username: str, password: str):
                await self.elements.fill_form({"#username": username, "#password": password})
                await self.elements.click_element("button[type='submit']")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    MATCH_PREFIX: Optional[str] = None
    PAGE_TITLE: str = ""

    def __init__(self, coordinator: LifecycleCoordinator, base_url: str = ""):
        """
        Initialize page object.

        Args:
            coordinator: Suite coordinator owning the browser session
            base_url: Application base URL (`ui.base_url` config, UI_BASE_URL env, if empty)
        """
        self.coordinator = coordinator
        if not base_url:
            base_url = get_config("ui.base_url", "https://the-internet.herokuapp.com")
        self.base_url = base_url.rstrip("/")

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def target(self) -> NavigationTarget:
        return NavigationTarget(self.url, match_prefix=self.MATCH_PREFIX)

    @property
    def elements(self) -> ElementHelper:
        return self.coordinator.elements

    @property
    def current_url(self) -> str:
        return self.coordinator.session.current_url

    async def open(self) -> "BasePage":
        """Navigate to this page and wait until the document is complete."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.coordinator.navigate_to(self.target)
            await self.coordinator.wait_for_page_ready()
        return self

    async def heading(self, default: str = "") -> str:
        return await self.elements.get_element_text("h2", default=default)

    async def wait_for_url(self, url_pattern: str, timeout_ms: int = 10000) -> None:
        """
        Wait for URL to match pattern.

        Args:
            url_pattern: URL glob (e.g. "**/secure**")
            timeout_ms: Timeout in milliseconds
        """
        with allure.step(f"Wait for URL: {url_pattern}"):
            await self.coordinator.session.page.wait_for_url(url_pattern, timeout=timeout_ms)

    async def screenshot(self, name: str) -> Path:
        return await self.coordinator.take_screenshot(name)


__all__ = [
    "BasePage",
]
