"""
================================================================================
Popup Suppressor
================================================================================

Best-effort dismissal of browser dialogs that render asynchronously after a
navigation or interaction (password-manager prompts and the like).

Each PopupSignature pairs a detection selector with a dismiss-control
selector. A `suppress()` call acts on at most one popup: the first signature
that matches, and the first of its dismiss controls that is both visible and
enabled. Call again to clear stacked popups.

Invocation points:
    - after every successful navigation (NavigationController)
    - after ElementHelper.fill_form and ElementHelper.click_element
    - on demand via LifecycleCoordinator.handle_popups

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Sequence

from playwright.async_api import Page

from webflow_tools.common import RunLogger

from .outcome import BestEffortOutcome, best_effort
from .session_factory import BrowserSession


@dataclass(frozen=True)
class PopupSignature:
    """
    One class of dismissible dialog.

    Attributes:
        name: Human-readable popup name
        detect: Selector matching the dialog itself
        dismiss: Selector matching candidate dismiss controls
    """
    name: str
    detect: str
    dismiss: str


PASSWORD_CHANGE_POPUP = PopupSignature(
    name="password change prompt",
    detect=(
        "xpath=//*[contains(text(), 'Change your password') "
        "or contains(text(), 'Update your password')]"
    ),
    dismiss=(
        "xpath=//button[text()='OK' or text()='Ok' or text()='Cancel' "
        "or @aria-label='OK' or @aria-label='Close']"
    ),
)

DEFAULT_POPUP_SIGNATURES: Sequence[PopupSignature] = (PASSWORD_CHANGE_POPUP,)


class PopupSuppressor:
    """
    Dismisses known popups without ever failing the caller.

    Usage:
        suppressor = PopupSuppressor(run_logger)
        outcome = await suppressor.suppress(session)
        if outcome.acted:
            ...
    """

    def __init__(
        self,
        run_logger: RunLogger,
        signatures: Sequence[PopupSignature] = DEFAULT_POPUP_SIGNATURES,
        grace_period: float = 0.5,
        settle_period: float = 0.5,
    ):
        """
        Args:
            run_logger: Logging context
            signatures: Popups to look for, in priority order
            grace_period: Seconds to wait for an asynchronous dialog to render
            settle_period: Seconds to wait after dismissing
        """
        self.signatures = tuple(signatures)
        self.grace_period = grace_period
        self.settle_period = settle_period
        self._logger = run_logger.child("popups")

    async def suppress(self, session: Optional[BrowserSession]) -> BestEffortOutcome:
        """Look for one known popup and dismiss it. Never raises."""
        if session is None:
            return BestEffortOutcome.skipped("popup suppression", "No session")

        return await best_effort(
            "Popup handling",
            lambda: self._suppress(session),
            self._logger,
        )

    async def _suppress(self, session: BrowserSession) -> BestEffortOutcome:
        if not session.window_handles():
            self._logger.warning("No browser windows available for popup handling")
            return BestEffortOutcome.skipped("popup suppression", "No open windows")

        await asyncio.sleep(self.grace_period)

        page = session.page
        for signature in self.signatures:
            if await page.locator(signature.detect).count() == 0:
                continue

            self._logger.step(f"Detected {signature.name}, attempting to dismiss")
            if await self._dismiss(page, signature):
                self._logger.step("Popup dismissed successfully")
                await asyncio.sleep(self.settle_period)
                return BestEffortOutcome.done("popup suppression", signature.name)

            self._logger.warning(f"No visible, enabled dismiss control for {signature.name}")
            return BestEffortOutcome.skipped("popup suppression", signature.name)

        return BestEffortOutcome.skipped("popup suppression", "No popup detected")

    async def _dismiss(self, page: Page, signature: PopupSignature) -> bool:
        # Only visible, enabled controls are clicked
        for control in await page.locator(signature.dismiss).all():
            if await control.is_visible() and await control.is_enabled():
                await control.click()
                return True
        return False


__all__ = [
    "PopupSignature",
    "PopupSuppressor",
    "PASSWORD_CHANGE_POPUP",
    "DEFAULT_POPUP_SIGNATURES",
]
