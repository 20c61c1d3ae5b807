"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers for the harness:

    attach_png       screenshots written by ScreenshotSink
    attach_text      page URL captured next to a failure screenshot
    attach_json      per-test outcome record produced at teardown

Attaching outside a running Allure listener is a no-op, so these helpers are
safe to call from plain pytest runs.

Author: Automation Team
License: MIT
================================================================================
"""

import json
from typing import Any

import allure
from allure_commons.types import AttachmentType


def _attach(body: Any, name: str, attachment_type: AttachmentType) -> None:
    allure.attach(body, name=name, attachment_type=attachment_type)


def attach_png(data: bytes, name: str = "Screenshot") -> None:
    """Attach raw PNG bytes."""
    _attach(data, name, AttachmentType.PNG)


def attach_text(text: str, name: str = "Text") -> None:
    _attach(text, name, AttachmentType.TEXT)


def attach_json(data: Any, name: str = "Data") -> None:
    """
    Attach `data` serialized as indented JSON.

    Values JSON cannot encode natively (paths, datetimes) are stringified.
    """
    _attach(json.dumps(data, indent=2, default=str), name, AttachmentType.JSON)
