"""
The actor facade every step and page object talks to.

`Actor` owns a set of named helpers (for example "Appium" and "Playwright")
and forwards each UI action to the active one. Helpers are created lazily
from factories, so a web-only scenario never opens an Appium session.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, Sequence

from .errors import StepFailure
from .locators import LocatorLike


class Helper:
    """Base class for automation backends. Unsupported actions raise NotImplementedError."""

    name = "helper"

    def _unsupported(self, action: str) -> NotImplementedError:
        return NotImplementedError(f"{action} is not supported by the {self.name} helper")

    def fill_field(self, locator: LocatorLike, value: Any) -> None:
        raise self._unsupported("fill_field")

    def append_field(self, locator: LocatorLike, value: Any) -> None:
        raise self._unsupported("append_field")

    def click(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        raise self._unsupported("click")

    def check_option(self, locator: LocatorLike) -> None:
        raise self._unsupported("check_option")

    def see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        raise self._unsupported("see")

    def dont_see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        raise self._unsupported("dont_see")

    def wait_for_text(self, text: str, seconds: float) -> None:
        raise self._unsupported("wait_for_text")

    def see_element(self, locator: LocatorLike) -> None:
        raise self._unsupported("see_element")

    def dont_see_element(self, locator: LocatorLike) -> None:
        raise self._unsupported("dont_see_element")

    def see_element_in_dom(self, locator: LocatorLike) -> None:
        raise self._unsupported("see_element_in_dom")

    def dont_see_element_in_dom(self, locator: LocatorLike) -> None:
        raise self._unsupported("dont_see_element_in_dom")

    def is_checked(self, locator: LocatorLike) -> bool:
        raise self._unsupported("is_checked")

    def grab_value_from(self, locator: LocatorLike) -> str:
        raise self._unsupported("grab_value_from")

    def wait_for_element(self, locator: LocatorLike, seconds: float) -> None:
        raise self._unsupported("wait_for_element")

    def tap(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        raise self._unsupported("tap")

    def tap_point(self, x: int, y: int) -> None:
        raise self._unsupported("tap_point")

    def send_device_key_event(self, keycode: int) -> None:
        raise self._unsupported("send_device_key_event")

    def grab_number_of_visible_elements(self, locator: LocatorLike) -> int:
        raise self._unsupported("grab_number_of_visible_elements")

    def grab_text_from(self, locator: LocatorLike) -> str:
        raise self._unsupported("grab_text_from")

    def grab_text_from_all(self, locator: LocatorLike) -> list[str]:
        raise self._unsupported("grab_text_from_all")

    def grab_attribute_from(self, locator: LocatorLike, attribute: str) -> Optional[str]:
        raise self._unsupported("grab_attribute_from")

    def grab_current_url(self) -> str:
        raise self._unsupported("grab_current_url")

    def grab_title(self) -> str:
        raise self._unsupported("grab_title")

    def grab_source(self) -> str:
        raise self._unsupported("grab_source")

    def grab_cookie(self, name: str) -> Optional[dict[str, Any]]:
        raise self._unsupported("grab_cookie")

    # Assertions below are composed from the primitives above.

    def see_checkbox_is_checked(self, locator: LocatorLike) -> None:
        if not self.is_checked(locator):
            raise StepFailure(f"Checkbox {locator!r} is not checked")

    def dont_see_checkbox_is_checked(self, locator: LocatorLike) -> None:
        if self.is_checked(locator):
            raise StepFailure(f"Checkbox {locator!r} is checked")

    def see_in_field(self, locator: LocatorLike, value: Any) -> None:
        actual = self.grab_value_from(locator)
        if actual != str(value):
            raise StepFailure(f"Field {locator!r} holds {actual!r}, expected {str(value)!r}")

    def dont_see_in_field(self, locator: LocatorLike, value: Any) -> None:
        if self.grab_value_from(locator) == str(value):
            raise StepFailure(f"Field {locator!r} holds {str(value)!r}")

    def see_in_current_url(self, fragment: str) -> None:
        url = self.grab_current_url()
        if fragment not in url:
            raise StepFailure(f"Current url {url} does not contain {fragment!r}")

    def see_current_url_equals(self, expected: str) -> None:
        url = self.grab_current_url()
        if url != expected:
            raise StepFailure(f"Current url is {url}, expected {expected}")

    def dont_see_current_url_equals(self, unexpected: str) -> None:
        if self.grab_current_url() == unexpected:
            raise StepFailure(f"Current url is {unexpected}")

    def see_in_title(self, text: str) -> None:
        title = self.grab_title()
        if text not in title:
            raise StepFailure(f"Title {title!r} does not contain {text!r}")

    def dont_see_in_title(self, text: str) -> None:
        title = self.grab_title()
        if text in title:
            raise StepFailure(f"Title {title!r} contains {text!r}")

    def see_title_equals(self, expected: str) -> None:
        title = self.grab_title()
        if title != expected:
            raise StepFailure(f"Title is {title!r}, expected {expected!r}")

    def see_in_source(self, text: str) -> None:
        if text not in self.grab_source():
            raise StepFailure(f"{text!r} is not in the page source")

    def dont_see_in_source(self, text: str) -> None:
        if text in self.grab_source():
            raise StepFailure(f"{text!r} is in the page source")

    def see_cookie(self, name: str) -> None:
        if self.grab_cookie(name) is None:
            raise StepFailure(f"Cookie {name!r} is not set")

    def dont_see_cookie(self, name: str) -> None:
        if self.grab_cookie(name) is not None:
            raise StepFailure(f"Cookie {name!r} is set")

    def see_number_of_elements(self, locator: LocatorLike, count: int) -> None:
        actual = self.grab_number_of_visible_elements(locator)
        if actual != int(count):
            raise StepFailure(f"Expected {count} visible {locator!r} elements, found {actual}")

    def switch_to(self, frame: Optional[LocatorLike] = None) -> None:
        raise self._unsupported("switch_to")

    def switch_to_last_frame(self) -> None:
        raise self._unsupported("switch_to_last_frame")

    def switch_to_next_frame(self) -> None:
        raise self._unsupported("switch_to_next_frame")

    def wait_for_page_load(self) -> None:
        raise self._unsupported("wait_for_page_load")

    def start_activity(self, app_package: str, app_activity: str) -> None:
        raise self._unsupported("start_activity")

    def use_device(self, udid: str) -> None:
        raise self._unsupported("use_device")

    def back(self) -> None:
        raise self._unsupported("back")

    def close(self) -> None:
        return None


HelperFactory = Callable[[], Helper]


class Actor:
    def __init__(
        self,
        helpers: Optional[dict[str, HelperFactory]] = None,
        *,
        default_helper: Optional[str] = None,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self._factories: dict[str, HelperFactory] = dict(helpers or {})
        self._instances: dict[str, Helper] = {}
        self._active = default_helper or next(iter(self._factories), None)
        self._sleep = sleep
        self.reports: list[str] = []

    def register(self, name: str, factory: HelperFactory) -> None:
        self._factories[name] = factory
        if self._active is None:
            self._active = name

    @property
    def active_helper_name(self) -> Optional[str]:
        return self._active

    def switch_helper(self, name: str) -> None:
        if name not in self._factories:
            known = ", ".join(sorted(self._factories)) or "(none)"
            raise StepFailure(f"Unknown helper {name!r}; registered helpers: {known}")
        self._active = name

    def helper_named(self, name: str) -> Helper:
        if name not in self._instances:
            if name not in self._factories:
                raise StepFailure(f"Unknown helper {name!r}")
            self._instances[name] = self._factories[name]()
        return self._instances[name]

    @property
    def helper(self) -> Helper:
        if self._active is None:
            raise StepFailure("No automation helper registered")
        return self.helper_named(self._active)

    def fail(self, message: str) -> None:
        raise StepFailure(message)

    def report(self, message: str) -> None:
        self.reports.append(message)
        print(f"  report: {message}")

    def wait(self, seconds: Any) -> None:
        duration = float(seconds)
        if duration > 0:
            self._sleep(duration)

    def fill_field(self, locator: LocatorLike, value: Any) -> None:
        self.helper.fill_field(locator, value)

    def append_field(self, locator: LocatorLike, value: Any) -> None:
        self.helper.append_field(locator, value)

    def click(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        self.helper.click(locator, context)

    def check_option(self, locator: LocatorLike) -> None:
        self.helper.check_option(locator)

    def see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        self.helper.see(text, context)

    def dont_see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        self.helper.dont_see(text, context)

    def wait_for_text(self, text: str, seconds: float) -> None:
        self.helper.wait_for_text(text, float(seconds))

    def see_element(self, locator: LocatorLike) -> None:
        self.helper.see_element(locator)

    def dont_see_element(self, locator: LocatorLike) -> None:
        self.helper.dont_see_element(locator)

    def see_element_in_dom(self, locator: LocatorLike) -> None:
        self.helper.see_element_in_dom(locator)

    def dont_see_element_in_dom(self, locator: LocatorLike) -> None:
        self.helper.dont_see_element_in_dom(locator)

    def see_checkbox_is_checked(self, locator: LocatorLike) -> None:
        self.helper.see_checkbox_is_checked(locator)

    def dont_see_checkbox_is_checked(self, locator: LocatorLike) -> None:
        self.helper.dont_see_checkbox_is_checked(locator)

    def see_in_field(self, locator: LocatorLike, value: Any) -> None:
        self.helper.see_in_field(locator, value)

    def dont_see_in_field(self, locator: LocatorLike, value: Any) -> None:
        self.helper.dont_see_in_field(locator, value)

    def see_in_current_url(self, fragment: str) -> None:
        self.helper.see_in_current_url(fragment)

    def see_current_url_equals(self, expected: str) -> None:
        self.helper.see_current_url_equals(expected)

    def dont_see_current_url_equals(self, unexpected: str) -> None:
        self.helper.dont_see_current_url_equals(unexpected)

    def see_in_title(self, text: str) -> None:
        self.helper.see_in_title(text)

    def dont_see_in_title(self, text: str) -> None:
        self.helper.dont_see_in_title(text)

    def see_title_equals(self, expected: str) -> None:
        self.helper.see_title_equals(expected)

    def see_in_source(self, text: str) -> None:
        self.helper.see_in_source(text)

    def dont_see_in_source(self, text: str) -> None:
        self.helper.dont_see_in_source(text)

    def see_cookie(self, name: str) -> None:
        self.helper.see_cookie(name)

    def dont_see_cookie(self, name: str) -> None:
        self.helper.dont_see_cookie(name)

    def see_number_of_elements(self, locator: LocatorLike, count: int) -> None:
        self.helper.see_number_of_elements(locator, int(count))

    def wait_for_element(self, locator: LocatorLike, seconds: float) -> None:
        self.helper.wait_for_element(locator, float(seconds))

    def tap(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        self.helper.tap(locator, context)

    def tap_point(self, x: int, y: int) -> None:
        self.helper.tap_point(x, y)

    def touch_perform(self, actions: Sequence[dict[str, Any]]) -> None:
        """Press/release sequences; each press is replayed as a tap at its coordinates."""
        for step in actions:
            if step.get("action") == "press":
                options = step.get("options") or {}
                self.tap_point(int(options["x"]), int(options["y"]))

    def send_device_key_event(self, keycode: int) -> None:
        self.helper.send_device_key_event(keycode)

    def grab_number_of_visible_elements(self, locator: LocatorLike) -> int:
        return self.helper.grab_number_of_visible_elements(locator)

    def grab_text_from(self, locator: LocatorLike) -> str:
        return self.helper.grab_text_from(locator)

    def grab_text_from_all(self, locator: LocatorLike) -> list[str]:
        return self.helper.grab_text_from_all(locator)

    def grab_attribute_from(self, locator: LocatorLike, attribute: str) -> Optional[str]:
        return self.helper.grab_attribute_from(locator, attribute)

    def grab_current_url(self) -> str:
        return self.helper.grab_current_url()

    def switch_to(self, frame: Optional[LocatorLike] = None) -> None:
        self.helper.switch_to(frame)

    def switch_to_last_frame(self) -> None:
        self.helper.switch_to_last_frame()

    def switch_to_next_frame(self) -> None:
        self.helper.switch_to_next_frame()

    def wait_for_page_load(self) -> None:
        self.helper.wait_for_page_load()

    def start_activity(self, app_package: str, app_activity: str) -> None:
        self.helper.start_activity(app_package, app_activity)

    def use_device(self, udid: str) -> None:
        self.helper.use_device(udid)

    def back(self) -> None:
        self.helper.back()

    def close(self) -> None:
        errors: list[Exception] = []
        for name, instance in list(self._instances.items()):
            try:
                instance.close()
            except Exception as e:
                errors.append(e)
                print(f"  close failed for helper {name}: {e}")
        self._instances.clear()
        if errors:
            raise errors[0]
