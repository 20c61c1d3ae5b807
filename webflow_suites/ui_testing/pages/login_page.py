"""
================================================================================
Login Page Object
================================================================================

Login form of the application under test.

Selectors target the public demo app (UI_BASE_URL, default
https://the-internet.herokuapp.com). Point UI_BASE_URL at another deployment
with the same form to reuse the suite.

================================================================================
"""

from __future__ import annotations

import os
from typing import Dict, Optional

import allure

from webflow_suites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object."""

    URL_PATH = "/login"
    MATCH_PREFIX = "/login"
    PAGE_TITLE = "The Internet"

    USERNAME_INPUT = "#username"
    PASSWORD_INPUT = "#password"
    SUBMIT_BUTTON = "button[type='submit']"
    FLASH_SUCCESS = ".flash.success"
    FLASH_ERROR = ".flash.error"

    FORM_FIELDS = {
        "username": USERNAME_INPUT,
        "password": PASSWORD_INPUT,
        "submit": SUBMIT_BUTTON,
    }

    @allure.step("Check login form fields")
    async def form_fields_present(self, timeout_ms: int = 2000) -> Dict[str, bool]:
        """Existence result for each login form field."""
        return {
            name: await self.elements.element_exists(selector, timeout_ms)
            for name, selector in self.FORM_FIELDS.items()
        }

    async def verify_form_displayed(self) -> bool:
        return all((await self.form_fields_present()).values())

    @allure.step("Login (username={username})")
    async def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        wait_secure_area: bool = True,
    ) -> None:
        """
        Perform login.

        Args:
            username: Defaults to the UI_USERNAME env var
            password: Defaults to the UI_PASSWORD env var
            wait_secure_area: Wait for the /secure URL after submitting
        """
        if username is None:
            username = os.getenv("UI_USERNAME", "tomsmith")
        if password is None:
            password = os.getenv("UI_PASSWORD", "SuperSecretPassword!")

        await self.open()
        await self.elements.fill_form({
            self.USERNAME_INPUT: username,
            self.PASSWORD_INPUT: password,
        })
        await self.elements.click_element(self.SUBMIT_BUTTON)

        if wait_secure_area:
            await self.wait_for_url("**/secure**")

    async def success_message(self) -> str:
        return await self.elements.get_element_text(self.FLASH_SUCCESS)

    async def error_message(self) -> str:
        return await self.elements.get_element_text(self.FLASH_ERROR)
