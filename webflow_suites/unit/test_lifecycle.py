import pytest
from playwright.async_api import Error as PlaywrightError

from webflow_suites.ui_testing.framework import (
    LifecycleCoordinator,
    NavigationTarget,
    ScreenshotSink,
    SessionConfig,
    SessionCreationError,
    SessionFactory,
    SessionNotStartedError,
    TimeoutPolicy,
)
from webflow_suites.unit.fakes import LOGIN_URL, NO_DELAY, PNG_BYTES, FakeDriver, FakeElement


@pytest.fixture
def coordinator(factory, run_logger, navigator, popups, tmp_path) -> LifecycleCoordinator:
    return LifecycleCoordinator(
        factory,
        run_logger,
        ScreenshotSink(tmp_path / "screenshots", run_logger, attach_to_allure=False),
        navigator=navigator,
        popups=popups,
    )


@pytest.mark.asyncio
async def test_login_flow_end_to_end(run_logger, tmp_path):
    driver = FakeDriver()
    driver.page.routes[LOGIN_URL] = {
        "#username": [FakeElement()],
        "#password": [FakeElement()],
        "button[type='submit']": [FakeElement(text="Login")],
    }
    config = SessionConfig(browser="chromium", headless=True, timeouts=TimeoutPolicy(implicit_wait_ms=500))
    coordinator = LifecycleCoordinator(
        SessionFactory(config, run_logger, retry_policy=NO_DELAY, driver_starter=driver),
        run_logger,
        ScreenshotSink(tmp_path, run_logger, attach_to_allure=False),
    )
    coordinator.popups.grace_period = 0
    coordinator.popups.settle_period = 0

    await coordinator.setup_suite()
    await coordinator.navigate_to(NavigationTarget(LOGIN_URL, match_prefix="/login"))
    results = [
        await coordinator.elements.element_exists(selector)
        for selector in ("#username", "#password", "button[type='submit']")
    ]
    outcome = await coordinator.teardown_suite()

    assert results == [True, True, True]
    assert driver.launches[0][1]["headless"] is True
    assert outcome.acted and outcome.ok
    assert driver.started[0].stopped


@pytest.mark.asyncio
async def test_session_required_before_use(coordinator):
    with pytest.raises(SessionNotStartedError):
        coordinator.session

    with pytest.raises(SessionNotStartedError):
        await coordinator.navigate_to(LOGIN_URL)


@pytest.mark.asyncio
async def test_setup_suite_creates_single_session(coordinator, driver):
    await coordinator.setup_suite()
    first = coordinator.session
    await coordinator.setup_suite()

    assert coordinator.session is first
    assert len(driver.started) == 1
    await coordinator.teardown_suite()


@pytest.mark.asyncio
async def test_setup_suite_propagates_creation_failure(run_logger, session_config, tmp_path):
    driver = FakeDriver(launch_failures=99)
    coordinator = LifecycleCoordinator(
        SessionFactory(session_config, run_logger, retry_policy=NO_DELAY, driver_starter=driver),
        run_logger,
        ScreenshotSink(tmp_path, run_logger, attach_to_allure=False),
    )

    with pytest.raises(SessionCreationError):
        await coordinator.setup_suite()


@pytest.mark.asyncio
async def test_teardown_suite_is_safe_without_session(coordinator):
    outcome = await coordinator.teardown_suite()
    assert outcome.handled and not outcome.acted


@pytest.mark.asyncio
async def test_passing_test_has_no_artifact(coordinator):
    await coordinator.setup_suite()
    coordinator.setup_test("test_passes")

    outcome = await coordinator.teardown_test("test_passes", passed=True)

    assert outcome.passed
    assert outcome.result == "passed"
    assert outcome.artifact_path is None
    assert outcome.duration_ms >= 0
    await coordinator.teardown_suite()


@pytest.mark.asyncio
async def test_failing_test_captures_screenshot(coordinator, tmp_path):
    await coordinator.setup_suite()
    coordinator.setup_test("Login Page Tests should log in")

    outcome = await coordinator.teardown_test("Login Page Tests should log in", passed=False)

    assert not outcome.passed
    assert outcome.artifact_path.parent == tmp_path / "screenshots"
    assert outcome.artifact_path.name.startswith("failed_Login_Page_Tests_should_log_in_")
    assert outcome.artifact_path.read_bytes() == PNG_BYTES
    await coordinator.teardown_suite()


@pytest.mark.asyncio
async def test_screenshot_failure_does_not_change_outcome(coordinator, page, log_records):
    await coordinator.setup_suite()
    page.screenshot_error = PlaywrightError("Target closed")
    coordinator.setup_test("test_fails")

    outcome = await coordinator.teardown_test("test_fails", passed=False)

    assert not outcome.passed
    assert outcome.artifact_path is None
    assert any("Failure screenshot" in r["message"] and r["level"].name == "ERROR" for r in log_records)
    await coordinator.teardown_suite()


@pytest.mark.asyncio
async def test_test_events_are_logged(coordinator, log_records):
    coordinator.setup_test("test_events")
    await coordinator.teardown_test("test_events", passed=True)

    events = [r["extra"].get("event") for r in log_records]
    assert events[:2] == ["test_start", "test_end"]


@pytest.mark.asyncio
async def test_page_info(coordinator, page):
    assert await coordinator.get_page_info() == {"url": "unknown", "title": "unknown"}

    await coordinator.setup_suite()
    await coordinator.navigate_to(LOGIN_URL)
    page.title_text = "The Internet"

    assert await coordinator.get_page_info() == {"url": LOGIN_URL, "title": "The Internet"}
    await coordinator.teardown_suite()


@pytest.mark.asyncio
async def test_async_context_manager_owns_session(coordinator, driver):
    async with coordinator as running:
        assert running.session.page is driver.page
        assert (await running.handle_popups()).handled

    with pytest.raises(SessionNotStartedError):
        coordinator.session
    assert driver.started[0].stopped
