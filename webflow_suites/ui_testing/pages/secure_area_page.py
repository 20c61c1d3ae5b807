"""
================================================================================
Secure Area Page Object
================================================================================

Post-login landing page ("dashboard") of the application under test.

================================================================================
"""

from __future__ import annotations

import allure

from webflow_suites.ui_testing.framework.page_base import BasePage


class SecureAreaPage(BasePage):
    """Secure area page object."""

    URL_PATH = "/secure"
    PAGE_TITLE = "Secure Area"

    LOGOUT_LINK = "a[href='/logout']"

    async def verify_loaded(self) -> bool:
        return "/secure" in self.current_url and (await self.heading()).strip() == self.PAGE_TITLE

    async def logout_label(self) -> str:
        return await self.elements.get_element_text(self.LOGOUT_LINK)

    @allure.step("Logout")
    async def logout(self) -> None:
        await self.elements.click_element(self.LOGOUT_LINK)
        await self.wait_for_url("**/login**", timeout_ms=8000)
