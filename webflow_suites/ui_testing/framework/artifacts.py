"""
================================================================================
Artifacts
================================================================================

Screenshot sink and run directory bootstrap.

File names embed a sanitized test name and a timestamp so sequential runs and
independent workers never overwrite each other's screenshots.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from webflow_tools.common import RunLogger
from webflow_tools.report_tools import attach_png


RUN_DIRECTORIES = ("screenshots", "logs", "test-results")


def sanitize_name(name: str) -> str:
    """Replace everything but ASCII letters and digits with underscores."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def ensure_run_directories(
    root: Union[str, Path],
    names: Iterable[str] = RUN_DIRECTORIES,
) -> List[Path]:
    """Create the screenshot, log and result directories under `root`."""
    created = []
    for name in names:
        path = Path(root) / name
        path.mkdir(parents=True, exist_ok=True)
        created.append(path)
    return created


class ScreenshotSink:
    """
    Writes screenshot bytes to a directory and attaches them to Allure.

    Usage:
        sink = ScreenshotSink(Path("screenshots"), run_logger)
        path = sink.save(png_bytes, "failed_test_login")
    """

    def __init__(
        self,
        directory: Union[str, Path],
        run_logger: RunLogger,
        attach_to_allure: bool = True,
    ):
        self.directory = Path(directory)
        self.attach_to_allure = attach_to_allure
        self._logger = run_logger

    def unique_path(self, name: Optional[str] = None) -> Path:
        """Path for a new screenshot named `<name>_<timestamp>.png`."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        stem = "screenshot"
        if name:
            stem = sanitize_name(name[:-4] if name.lower().endswith(".png") else name)
        path = self.directory / f"{stem}_{timestamp}.png"
        counter = 1
        while path.exists():
            path = self.directory / f"{stem}_{timestamp}_{counter}.png"
            counter += 1
        return path

    def save(self, data: bytes, name: Optional[str] = None) -> Path:
        """
        Write PNG bytes under a unique name.

        Returns:
            Path of the written file
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.unique_path(name)
        path.write_bytes(data)

        if self.attach_to_allure:
            attach_png(data, name=path.stem)

        self._logger.screenshot(str(path))
        return path


__all__ = [
    "RUN_DIRECTORIES",
    "ScreenshotSink",
    "ensure_run_directories",
    "sanitize_name",
]
