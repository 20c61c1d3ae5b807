"""
================================================================================
Webflow Tools
================================================================================

Shared infrastructure for the web flow automation harness.

Modules:
    - common: Configuration loading and the loguru-based run logger
    - report_tools: Allure attachment helpers

Example:
    from webflow_tools.common import get_config, init_logger, default_run_logger

    init_logger()
    run_logger = default_run_logger()
    run_logger.info(f"Browser: {get_config('browser.name', 'chromium')}")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
