"""
G2 portal page objects. The Playwright helper lives in web.playwright_helper
and is imported on demand.
"""

from .g2_handlers import CUSTOM_LOCATORS, G2Handlers
from .generic_methods import GenericMethods
from .left_menu_page import LeftMenuPage

__all__ = ["CUSTOM_LOCATORS", "G2Handlers", "GenericMethods", "LeftMenuPage"]
