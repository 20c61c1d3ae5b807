"""
================================================================================
Session Configuration
================================================================================

Immutable description of the browser session a suite runs against.

    SessionConfig
        browser / headless / ci          which browser and how to launch it
        window_width / window_height     viewport geometry
        disabled_features                Chromium --disable-features flags
        timeouts: TimeoutPolicy          implicit wait, page load, script

Built once at suite start (usually via `SessionConfig.from_config()`), never
mutated after the session is created.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from webflow_tools.common import get_config

from .errors import UnsupportedBrowserError


class BrowserKind(str, Enum):
    """Browsers the harness can launch through Playwright."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


BROWSER_ALIASES: Dict[str, BrowserKind] = {
    "chromium": BrowserKind.CHROMIUM,
    "chrome": BrowserKind.CHROMIUM,
    "firefox": BrowserKind.FIREFOX,
    "webkit": BrowserKind.WEBKIT,
    "safari": BrowserKind.WEBKIT,
}

CHROMIUM_BASE_ARGS: Tuple[str, ...] = (
    "--disable-extensions",
    "--disable-plugins",
    "--disable-web-security",
    "--allow-running-insecure-content",
)

# Extra Chromium flags for CI runners (no sandbox, no shared memory, quiet)
CHROMIUM_CI_ARGS: Tuple[str, ...] = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-background-networking",
    "--disable-client-side-phishing-detection",
    "--disable-default-apps",
    "--disable-hang-monitor",
    "--disable-popup-blocking",
    "--disable-prompt-on-repost",
    "--disable-sync",
    "--metrics-recording-only",
    "--no-first-run",
    "--safebrowsing-disable-auto-update",
    "--password-store=basic",
    "--use-mock-keychain",
)

FIREFOX_CI_PREFS: Dict[str, Any] = {
    "media.volume_scale": "0.0",
    "dom.webnotifications.enabled": False,
    "browser.safebrowsing.downloads.enabled": False,
}


def resolve_browser(name: str) -> BrowserKind:
    """
    Map a configured browser name onto a BrowserKind.

    Raises:
        UnsupportedBrowserError: For names the harness cannot launch
    """
    kind = BROWSER_ALIASES.get((name or "").strip().lower())
    if kind is None:
        raise UnsupportedBrowserError(name)
    return kind


@dataclass(frozen=True)
class TimeoutPolicy:
    """
    Timeouts applied to a session when it is created.

    Attributes:
        implicit_wait_ms: Default wait for element lookups
        page_load_ms: Ceiling for page loads
        script_ms: Ceiling for script execution
    """
    implicit_wait_ms: int = 10000
    page_load_ms: int = 30000
    script_ms: int = 30000

    def __post_init__(self) -> None:
        # Playwright reads a timeout of 0 as "wait forever"
        for name in ("implicit_wait_ms", "page_load_ms", "script_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")


@dataclass(frozen=True)
class SessionConfig:
    """Immutable browser session settings."""
    browser: str = "chromium"
    headless: bool = False
    ci: bool = False
    window_width: int = 1920
    window_height: int = 1080
    disabled_features: Tuple[str, ...] = ("VizDisplayCompositor",)
    timeouts: TimeoutPolicy = field(default_factory=TimeoutPolicy)

    @property
    def browser_kind(self) -> BrowserKind:
        return resolve_browser(self.browser)

    @classmethod
    def from_config(cls) -> "SessionConfig":
        """
        Build a SessionConfig from config/config.yaml and the environment.

        Honors BROWSER, HEADLESS and CI (see webflow_tools.common.global_config).
        """
        return cls(
            browser=str(get_config("browser.name", "chromium")),
            headless=get_config("browser.headless", False),
            ci=get_config("browser.ci", False),
            window_width=get_config("browser.window_width", 1920),
            window_height=get_config("browser.window_height", 1080),
            timeouts=TimeoutPolicy(
                implicit_wait_ms=get_config("timeouts.implicit_wait_ms", 10000),
                page_load_ms=get_config("timeouts.page_load_ms", 30000),
                script_ms=get_config("timeouts.script_ms", 30000),
            ),
        )

    def launch_args(self) -> List[str]:
        """Command-line arguments for the browser process."""
        kind = self.browser_kind
        if kind is BrowserKind.CHROMIUM:
            args = [
                f"--window-size={self.window_width},{self.window_height}",
                *CHROMIUM_BASE_ARGS,
            ]
            if self.disabled_features:
                args.append(f"--disable-features={','.join(self.disabled_features)}")
            if self.ci:
                args.extend(CHROMIUM_CI_ARGS)
            return args
        if kind is BrowserKind.FIREFOX:
            return [f"--width={self.window_width}", f"--height={self.window_height}"]
        return []

    def launch_options(self) -> Dict[str, Any]:
        """Keyword arguments for `BrowserType.launch()`."""
        options: Dict[str, Any] = {
            "headless": self.headless,
            "args": self.launch_args(),
        }
        if self.ci and self.browser_kind is BrowserKind.FIREFOX:
            options["firefox_user_prefs"] = dict(FIREFOX_CI_PREFS)
        return options

    def context_options(self) -> Dict[str, Any]:
        """Keyword arguments for `Browser.new_context()`."""
        return {
            "viewport": {"width": self.window_width, "height": self.window_height},
            "ignore_https_errors": True,
        }


__all__ = [
    "BrowserKind",
    "TimeoutPolicy",
    "SessionConfig",
    "resolve_browser",
]
