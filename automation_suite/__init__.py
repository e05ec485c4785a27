"""
Step-definition and page-object layer for BDD UI/mobile test automation.
"""

from __future__ import annotations

from typing import Any

from .actor import Actor, Helper
from .data_resolver import DataResolver
from .data_store import TestDataStore
from .errors import ElementNotFoundError, PollTimeoutError, SlotUnavailableError, StepFailure
from .locators import Locator, locate, xpath_literal
from .polling import poll_until
from .schedule import next_available_slot

__all__ = [
    "Actor",
    "DataResolver",
    "ElementNotFoundError",
    "Helper",
    "Locator",
    "PlaywrightHelper",
    "PollTimeoutError",
    "SlotUnavailableError",
    "StepFailure",
    "TestDataStore",
    "locate",
    "next_available_slot",
    "poll_until",
    "xpath_literal",
]


def __getattr__(name: str) -> Any:
    """
    Lazy exports.

    Playwright is only imported when the web helper is requested, so the
    mobile side can be used without it installed.
    """
    if name == "PlaywrightHelper":
        from .web.playwright_helper import PlaywrightHelper

        return PlaywrightHelper
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
