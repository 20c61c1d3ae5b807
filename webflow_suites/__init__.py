"""
Test suites package.

Kept importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - the shared UI framework under `webflow_suites.ui_testing.framework`
"""
