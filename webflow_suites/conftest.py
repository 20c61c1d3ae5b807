"""
================================================================================
Root Pytest Configuration
================================================================================

Registers project-wide markers and gates the live browser suites.

Live UI suites drive a real browser against UI_BASE_URL and are skipped unless
RUN_LIVE_UI=1 is set.

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests against in-memory fakes"
    )
    config.addinivalue_line(
        "markers", "ui: Browser-driven UI tests"
    )
    config.addinivalue_line(
        "markers", "live: Needs a real browser and network access (RUN_LIVE_UI=1)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by directory and skip live suites unless enabled."""
    run_live = os.getenv("RUN_LIVE_UI", "").lower() in ("1", "true", "yes")
    skip_live = pytest.mark.skip(reason="Live UI suite; set RUN_LIVE_UI=1 to run")

    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.live)
            if not run_live:
                item.add_marker(skip_live)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Web Flow Automation Harness",
        "=" * 60,
        "",
    ]
