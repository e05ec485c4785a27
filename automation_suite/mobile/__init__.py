"""
Android device automation through an Appium server.

The client speaks plain W3C WebDriver HTTP; capabilities come from the JSON
file named by AI_CAPABILITIES_JSON.
"""

from .appium_helper import AppiumHelper
from .appium_http_client import AppiumHTTPClient, AppiumHTTPError, WebDriverElementRef
from .handlers import Mobile
from .mobile_component import MobileComponent

__all__ = [
    "AppiumHTTPClient",
    "AppiumHTTPError",
    "AppiumHelper",
    "Mobile",
    "MobileComponent",
    "WebDriverElementRef",
]
