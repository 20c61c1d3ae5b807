"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based session lifecycle harness.

Components:
    - session_factory: Browser session creation (bounded retry) and shutdown
    - navigation: Page loads with retry and "already there" short-circuit
    - popups: Best-effort dismissal of asynchronous browser dialogs
    - element_helper: Element lookup/interaction with explicit timeouts
    - lifecycle: Suite/test setup and teardown with failure screenshots
    - retry: Shared bounded-retry utility

Author: Automation Team
License: MIT
================================================================================
"""

from .artifacts import ScreenshotSink, ensure_run_directories
from .element_helper import By, ElementHelper
from .errors import (
    ConfigurationError,
    ElementInteractionError,
    ElementNotFoundError,
    HarnessError,
    NavigationError,
    RetryExhaustedError,
    SessionCreationError,
    SessionNotStartedError,
    UnsupportedBrowserError,
)
from .lifecycle import LifecycleCoordinator, TestOutcome
from .navigation import NavigationController, NavigationTarget
from .outcome import BestEffortOutcome
from .page_base import BasePage
from .popups import PopupSignature, PopupSuppressor
from .retry import RetryPolicy, with_retry
from .session_config import BrowserKind, SessionConfig, TimeoutPolicy
from .session_factory import BrowserSession, SessionFactory

__all__ = [
    "BasePage",
    "BestEffortOutcome",
    "BrowserKind",
    "BrowserSession",
    "By",
    "ConfigurationError",
    "ElementHelper",
    "ElementInteractionError",
    "ElementNotFoundError",
    "HarnessError",
    "LifecycleCoordinator",
    "NavigationController",
    "NavigationError",
    "NavigationTarget",
    "PopupSignature",
    "PopupSuppressor",
    "RetryExhaustedError",
    "RetryPolicy",
    "ScreenshotSink",
    "SessionConfig",
    "SessionCreationError",
    "SessionFactory",
    "SessionNotStartedError",
    "TestOutcome",
    "TimeoutPolicy",
    "UnsupportedBrowserError",
    "ensure_run_directories",
    "with_retry",
]
