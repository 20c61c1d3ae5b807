"""Allure report helpers."""

from .allure_utils import attach_json, attach_png, attach_text

__all__ = [
    "attach_json",
    "attach_png",
    "attach_text",
]
