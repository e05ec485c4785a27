from __future__ import annotations

import copy
import time
from typing import Any, Callable, Mapping, Optional

from ..actor import Helper
from ..errors import ElementNotFoundError, StepFailure
from ..locators import Locator, LocatorLike, is_raw_xpath, xpath_literal
from .appium_http_client import AppiumHTTPClient, WebDriverElementRef

WebDriverLocator = tuple[str, str]


def _text_xpath(text: str, *, exact: bool) -> str:
    literal = xpath_literal(text)
    if exact:
        return f"//*[@text={literal} or @content-desc={literal}]"
    return f"//*[contains(@text, {literal}) or contains(@content-desc, {literal})]"


def to_webdriver_locator(locator: LocatorLike) -> WebDriverLocator:
    """
    Map a suite locator to a WebDriver (using, value) pair.

    Plain strings: XPath when they look like one, "~label" for accessibility
    id, "pkg:id/name" for resource ids, otherwise an exact text/content-desc
    match.
    """
    if isinstance(locator, Locator):
        return "xpath", locator.to_xpath()
    if isinstance(locator, Mapping):
        if "using" in locator and "value" in locator:
            return str(locator["using"]), str(locator["value"])
        if "id" in locator:
            return "id", str(locator["id"])
        if "xpath" in locator:
            return "xpath", str(locator["xpath"])
        raise ValueError(f"Unsupported locator mapping: {dict(locator)!r}")
    text = str(locator)
    if is_raw_xpath(text):
        return "xpath", text
    if text.startswith("~"):
        return "accessibility id", text[1:]
    if ":id/" in text:
        return "id", text
    return "xpath", _text_xpath(text, exact=True)


def scoped_xpath(context: str, xpath: str) -> str:
    """Join `xpath` under `context`; a leading // also matches the context node itself."""
    if xpath.startswith("//"):
        return f"{context}/descendant-or-self::{xpath[2:]}"
    return f"{context}//{xpath.lstrip('/')}"


def _within(locator: LocatorLike, context: Optional[LocatorLike]) -> WebDriverLocator:
    using, value = to_webdriver_locator(locator)
    if context is None:
        return using, value
    ctx_using, ctx_value = to_webdriver_locator(context)
    if using != "xpath" or ctx_using != "xpath":
        raise ValueError("context lookups need XPath-compatible locators")
    return "xpath", scoped_xpath(ctx_value, value)


class AppiumHelper(Helper):
    """Android device actions through an Appium server."""

    name = "Appium"

    def __init__(
        self,
        client: AppiumHTTPClient,
        capabilities: dict[str, Any],
        *,
        poll_s: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self.client = client
        self.capabilities = copy.deepcopy(capabilities)
        self.poll_s = poll_s
        self._clock = clock
        self._sleep = sleep

    @property
    def _always_match(self) -> dict[str, Any]:
        caps = self.capabilities.setdefault("capabilities", {})
        return caps.setdefault("alwaysMatch", {})

    @property
    def current_udid(self) -> Optional[str]:
        return self._always_match.get("appium:udid")

    def ensure_session(self) -> None:
        if not self.client.session_id:
            session_id = self.client.create_session(self.capabilities)
            print(f"  appium session started: {session_id}")

    def use_device(self, udid: str) -> None:
        if self.client.session_id and self.current_udid == udid:
            return
        self._always_match["appium:udid"] = udid
        self._always_match["appium:deviceName"] = udid
        self.client.delete_session()
        self.ensure_session()

    def _find(self, using: str, value: str) -> list[WebDriverElementRef]:
        self.ensure_session()
        return self.client.find_elements(using=using, value=value)

    def _visible(self, using: str, value: str) -> list[WebDriverElementRef]:
        return [element for element in self._find(using, value) if self.client.is_displayed(element)]

    def _first(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> WebDriverElementRef:
        using, value = _within(locator, context)
        elements = self._find(using, value)
        if not elements:
            raise ElementNotFoundError(locator)
        return elements[0]

    def wait_for_element(self, locator: LocatorLike, seconds: float) -> None:
        using, value = to_webdriver_locator(locator)
        deadline = self._clock() + seconds
        while True:
            if self._find(using, value):
                return
            if self._clock() >= deadline:
                raise ElementNotFoundError(locator, timeout_s=seconds)
            self._sleep(self.poll_s)

    def click(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        self.client.click(self._first(locator, context))

    def tap(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        self.click(locator, context)

    def check_option(self, locator: LocatorLike) -> None:
        element = self._first(locator)
        if (self.client.get_element_attribute(element, "checked") or "").lower() != "true":
            self.client.click(element)

    def fill_field(self, locator: LocatorLike, value: Any) -> None:
        element = self._first(locator)
        self.client.clear(element)
        self.client.send_keys(element, text=str(value))

    def append_field(self, locator: LocatorLike, value: Any) -> None:
        self.client.send_keys(self._first(locator), text=str(value))

    def _text_on_screen(self, text: str, context: Optional[LocatorLike] = None) -> bool:
        xpath = _text_xpath(text, exact=False)
        if context is not None:
            xpath = scoped_xpath(to_webdriver_locator(context)[1], xpath)
        return bool(self._visible("xpath", xpath))

    def see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        if not self._text_on_screen(text, context):
            raise StepFailure(f"Text {text!r} was not seen on the device screen")

    def dont_see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        if self._text_on_screen(text, context):
            raise StepFailure(f"Text {text!r} is visible on the device screen")

    def wait_for_text(self, text: str, seconds: float) -> None:
        deadline = self._clock() + seconds
        while not self._text_on_screen(text):
            if self._clock() >= deadline:
                raise StepFailure(f"Text {text!r} did not appear within {seconds:g}s")
            self._sleep(self.poll_s)

    def see_element(self, locator: LocatorLike) -> None:
        if not self._visible(*to_webdriver_locator(locator)):
            raise StepFailure(f"Element {locator!r} is not visible")

    def dont_see_element(self, locator: LocatorLike) -> None:
        if self._visible(*to_webdriver_locator(locator)):
            raise StepFailure(f"Element {locator!r} is visible")

    def see_element_in_dom(self, locator: LocatorLike) -> None:
        if not self._find(*to_webdriver_locator(locator)):
            raise StepFailure(f"Element {locator!r} is not in the view hierarchy")

    def dont_see_element_in_dom(self, locator: LocatorLike) -> None:
        if self._find(*to_webdriver_locator(locator)):
            raise StepFailure(f"Element {locator!r} is in the view hierarchy")

    def is_checked(self, locator: LocatorLike) -> bool:
        return (self.client.get_element_attribute(self._first(locator), "checked") or "").lower() == "true"

    def grab_value_from(self, locator: LocatorLike) -> str:
        return self.client.get_element_text(self._first(locator))

    def tap_point(self, x: int, y: int) -> None:
        self.ensure_session()
        self.client.tap(x=x, y=y)

    def send_device_key_event(self, keycode: int) -> None:
        self.ensure_session()
        self.client.press_keycode(keycode)

    def grab_number_of_visible_elements(self, locator: LocatorLike) -> int:
        return len(self._visible(*to_webdriver_locator(locator)))

    def grab_text_from(self, locator: LocatorLike) -> str:
        return self.client.get_element_text(self._first(locator))

    def grab_text_from_all(self, locator: LocatorLike) -> list[str]:
        return [self.client.get_element_text(element) for element in self._find(*to_webdriver_locator(locator))]

    def grab_attribute_from(self, locator: LocatorLike, attribute: str) -> Optional[str]:
        return self.client.get_element_attribute(self._first(locator), attribute)

    def start_activity(self, app_package: str, app_activity: str) -> None:
        self.ensure_session()
        self.client.start_activity(app_package=app_package, app_activity=app_activity)

    def back(self) -> None:
        self.ensure_session()
        self.client.back()

    def close(self) -> None:
        self.client.delete_session()
