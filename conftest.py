"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for the public demo application (no secrets embedded)
  - Create the run directories (screenshots, logs, test-results)
  - Wire the process-wide logger once, at the boundary

Important:
  Credentials below are the public demo credentials of the-internet.herokuapp.com.
  Real projects should load secrets from a secure secret manager in CI/CD.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from webflow_suites.ui_testing.framework.artifacts import ensure_run_directories
from webflow_tools.common import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults(project_root: Path) -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "UI_USERNAME": "tomsmith",
        "UI_PASSWORD": "SuperSecretPassword!",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    ensure_run_directories(project_root)
    init_logger()

    yield
