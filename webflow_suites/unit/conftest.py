"""
Fixtures for framework unit tests.

Everything runs against the in-memory fakes in `fakes.py`; no browser is
launched and no network is touched.
"""

from typing import Any, Dict, List

import pytest
import pytest_asyncio
from loguru import logger

from webflow_suites.ui_testing.framework import (
    ElementHelper,
    NavigationController,
    PopupSuppressor,
    SessionConfig,
    SessionFactory,
    TimeoutPolicy,
)
from webflow_suites.unit.fakes import LOGIN_URL, NO_DELAY, FakeDriver, FakeElement, FakePage
from webflow_tools.common import RunLogger, reload_config


@pytest.fixture(autouse=True)
def _fresh_config():
    """Reload configuration after each test so env overrides never leak."""
    yield
    reload_config()


@pytest.fixture
def log_records() -> List[Dict[str, Any]]:
    """Collect loguru records emitted during the test."""
    records: List[Dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def run_logger() -> RunLogger:
    return RunLogger(component="unit")


@pytest.fixture
def login_dom() -> Dict[str, List[FakeElement]]:
    return {
        "#username": [FakeElement()],
        "#password": [FakeElement()],
        "button[type='submit']": [FakeElement(text="Login")],
        "h2": [FakeElement(text="Login Page")],
    }


@pytest.fixture
def page(login_dom) -> FakePage:
    fake_page = FakePage(dom=login_dom)
    fake_page.routes[LOGIN_URL] = login_dom
    return fake_page


@pytest.fixture
def driver(page) -> FakeDriver:
    return FakeDriver(page=page)


@pytest.fixture
def session_config() -> SessionConfig:
    return SessionConfig(
        browser="chromium",
        headless=True,
        timeouts=TimeoutPolicy(implicit_wait_ms=200, page_load_ms=5000, script_ms=300),
    )


@pytest.fixture
def factory(session_config, run_logger, driver) -> SessionFactory:
    return SessionFactory(session_config, run_logger, retry_policy=NO_DELAY, driver_starter=driver)


@pytest_asyncio.fixture
async def session(factory):
    browser_session = await factory.create()
    yield browser_session
    await factory.quit(browser_session)


@pytest.fixture
def popups(run_logger) -> PopupSuppressor:
    return PopupSuppressor(run_logger, grace_period=0, settle_period=0)


@pytest.fixture
def navigator(run_logger, popups) -> NavigationController:
    return NavigationController(run_logger, popups=popups, retry_delay=0)


@pytest.fixture
def elements(session, run_logger, popups) -> ElementHelper:
    return ElementHelper(session, run_logger, popups=popups, click_retry_delay=0)
