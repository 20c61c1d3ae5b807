"""
================================================================================
Page Objects
================================================================================

Page Object Model classes for the login / secure-area flow.

================================================================================
"""

from .login_page import LoginPage
from .secure_area_page import SecureAreaPage

__all__ = [
    "LoginPage",
    "SecureAreaPage",
]
