"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the live browser suites.

Key Features:
- One browser session per test run, owned by a LifecycleCoordinator
- Per-test start/end events and failure screenshots
- Page Object fixtures

================================================================================
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from webflow_suites.ui_testing.framework import LifecycleCoordinator
from webflow_suites.ui_testing.pages import LoginPage, SecureAreaPage
from webflow_tools.common import RunLogger, default_run_logger


# ================================================================================
# Coordinator Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def run_logger() -> RunLogger:
    return default_run_logger()


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def coordinator(run_logger: RunLogger) -> AsyncGenerator[LifecycleCoordinator, None]:
    """
    Session-scoped coordinator.

    Starts the browser once for the whole run and quits it at the end.
    """
    coordinator = LifecycleCoordinator.from_config(run_logger)
    await coordinator.setup_suite()
    yield coordinator
    await coordinator.teardown_suite()


@pytest_asyncio.fixture(loop_scope="session", autouse=True)
async def _test_lifecycle(
    request: pytest.FixtureRequest,
    coordinator: LifecycleCoordinator,
) -> AsyncGenerator[None, None]:
    """Emit test start/end events and capture a screenshot on failure."""
    test_name = request.node.name
    coordinator.setup_test(test_name)
    yield
    report = getattr(request.node, "rep_call", None)
    passed = report is not None and report.passed
    await coordinator.teardown_test(test_name, passed=passed)


@pytest_asyncio.fixture(loop_scope="session")
async def logged_out(coordinator: LifecycleCoordinator) -> None:
    """Drop session cookies and leave the current page so the test starts unauthenticated."""
    page = coordinator.session.page
    await page.context.clear_cookies()
    await page.goto("about:blank")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(coordinator: LifecycleCoordinator, logged_out: None) -> LoginPage:
    return LoginPage(coordinator)


@pytest.fixture
def secure_area_page(coordinator: LifecycleCoordinator) -> SecureAreaPage:
    return SecureAreaPage(coordinator)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase report on the item as `rep_<phase>`."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
