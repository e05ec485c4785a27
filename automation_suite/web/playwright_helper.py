from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Union

from playwright.sync_api import Browser, BrowserContext, FrameLocator, Locator as PwLocator, Page, Playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..actor import Helper
from ..config import SuiteSettings
from ..errors import ElementNotFoundError, StepFailure
from ..locators import Locator, LocatorLike, is_raw_xpath

_CSS_HINT = re.compile(r"^[#.\[]|[\[\]>=]|^[a-z][\w-]*(?:[.#][\w-]+)+$")

Scope = Union[Page, FrameLocator]


def looks_like_css(text: str) -> bool:
    return bool(_CSS_HINT.search(text))


def to_selector(locator: LocatorLike) -> Optional[str]:
    """Playwright selector for structured and CSS/XPath locators; None for plain text."""
    if isinstance(locator, Locator):
        return f"xpath={locator.to_xpath()}"
    if isinstance(locator, Mapping):
        if "id" in locator:
            return f"id={locator['id']}"
        if "xpath" in locator:
            return f"xpath={locator['xpath']}"
        if "css" in locator:
            return str(locator["css"])
        raise ValueError(f"Unsupported locator mapping: {dict(locator)!r}")
    text = str(locator)
    if is_raw_xpath(text):
        return f"xpath={text}"
    if looks_like_css(text):
        return text
    return None


class PlaywrightHelper(Helper):
    """Browser actions on a Playwright sync Page, scoped to the current frame."""

    name = "Playwright"

    def __init__(self, page: Page, *, owned: Optional[tuple[Any, ...]] = None) -> None:
        self.page = page
        self._scope: Scope = page
        # (playwright, browser, context) when this helper launched them
        self._owned = owned

    @classmethod
    def launch(cls, settings: SuiteSettings) -> "PlaywrightHelper":
        pw: Playwright = sync_playwright().start()
        launcher = getattr(pw, settings.browser)
        browser: Browser = launcher.launch(headless=settings.headless)
        context: BrowserContext = browser.new_context(base_url=settings.base_url) if settings.base_url else browser.new_context()
        page = context.new_page()
        if settings.base_url:
            page.goto(settings.base_url)
        return cls(page, owned=(pw, browser, context))

    def _field(self, locator: LocatorLike) -> PwLocator:
        selector = to_selector(locator)
        if selector is not None:
            return self._scope.locator(selector).first
        text = str(locator)
        return self._scope.get_by_placeholder(text, exact=True).or_(self._scope.get_by_label(text, exact=True)).first

    def _clickable(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> PwLocator:
        scope: Any = self._scope if context is None else self._scope.locator(to_selector(context) or str(context))
        selector = to_selector(locator)
        if selector is not None:
            return scope.locator(selector).first
        text = str(locator)
        return (
            scope.get_by_role("button", name=text, exact=True)
            .or_(scope.get_by_role("link", name=text, exact=True))
            .or_(scope.get_by_text(text, exact=True))
            .first
        )

    def _all(self, locator: LocatorLike) -> PwLocator:
        selector = to_selector(locator)
        if selector is not None:
            return self._scope.locator(selector)
        return self._scope.get_by_text(str(locator))

    def _guarded(self, locator: LocatorLike, action: Any) -> Any:
        try:
            return action()
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(locator) from e

    def fill_field(self, locator: LocatorLike, value: Any) -> None:
        self._guarded(locator, lambda: self._field(locator).fill(str(value)))

    def append_field(self, locator: LocatorLike, value: Any) -> None:
        self._guarded(locator, lambda: self._field(locator).press_sequentially(str(value)))

    def click(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        self._guarded(locator, lambda: self._clickable(locator, context).click())

    def tap(self, locator: LocatorLike, context: Optional[LocatorLike] = None) -> None:
        self.click(locator, context)

    def check_option(self, locator: LocatorLike) -> None:
        self._guarded(locator, lambda: self._clickable(locator).check())

    def wait_for_element(self, locator: LocatorLike, seconds: float) -> None:
        try:
            self._all(locator).first.wait_for(state="attached", timeout=seconds * 1000)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(locator, timeout_s=seconds) from e

    def _visible_count(self, target: PwLocator) -> int:
        return sum(1 for i in range(target.count()) if target.nth(i).is_visible())

    def see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        scope: Any = self._scope if context is None else self._scope.locator(to_selector(context) or str(context))
        if self._visible_count(scope.get_by_text(text)) == 0:
            raise StepFailure(f"Text {text!r} was not seen on the page")

    def dont_see(self, text: str, context: Optional[LocatorLike] = None) -> None:
        scope: Any = self._scope if context is None else self._scope.locator(to_selector(context) or str(context))
        if self._visible_count(scope.get_by_text(text)) > 0:
            raise StepFailure(f"Text {text!r} is visible on the page")

    def wait_for_text(self, text: str, seconds: float) -> None:
        try:
            self._scope.get_by_text(text).first.wait_for(state="visible", timeout=seconds * 1000)
        except PlaywrightTimeoutError as e:
            raise StepFailure(f"Text {text!r} did not appear within {seconds:g}s") from e

    def see_element(self, locator: LocatorLike) -> None:
        if self._visible_count(self._all(locator)) == 0:
            raise StepFailure(f"Element {locator!r} is not visible")

    def dont_see_element(self, locator: LocatorLike) -> None:
        if self._visible_count(self._all(locator)) > 0:
            raise StepFailure(f"Element {locator!r} is visible")

    def see_element_in_dom(self, locator: LocatorLike) -> None:
        if self._all(locator).count() == 0:
            raise StepFailure(f"Element {locator!r} is not in the DOM")

    def dont_see_element_in_dom(self, locator: LocatorLike) -> None:
        if self._all(locator).count() > 0:
            raise StepFailure(f"Element {locator!r} is in the DOM")

    def is_checked(self, locator: LocatorLike) -> bool:
        return self._guarded(locator, lambda: self._field(locator).is_checked())

    def grab_value_from(self, locator: LocatorLike) -> str:
        return self._guarded(locator, lambda: self._field(locator).input_value())

    def grab_number_of_visible_elements(self, locator: LocatorLike) -> int:
        return self._visible_count(self._all(locator))

    def grab_text_from(self, locator: LocatorLike) -> str:
        return self._guarded(locator, lambda: self._all(locator).first.inner_text())

    def grab_text_from_all(self, locator: LocatorLike) -> list[str]:
        return self._all(locator).all_inner_texts()

    def grab_attribute_from(self, locator: LocatorLike, attribute: str) -> Optional[str]:
        return self._guarded(locator, lambda: self._all(locator).first.get_attribute(attribute))

    def grab_current_url(self) -> str:
        return self.page.url

    def grab_title(self) -> str:
        return self.page.title()

    def grab_source(self) -> str:
        return self.page.content()

    def grab_cookie(self, name: str) -> Optional[dict[str, Any]]:
        return next((cookie for cookie in self.page.context.cookies() if cookie["name"] == name), None)

    def switch_to(self, frame: Optional[LocatorLike] = None) -> None:
        if frame is None:
            self._scope = self.page
            return
        self._scope = self._scope.frame_locator(to_selector(frame) or str(frame)).first

    def switch_to_last_frame(self) -> None:
        if self._scope.locator("iframe").count() == 0:
            return
        self._scope = self._scope.frame_locator("iframe").last

    def switch_to_next_frame(self) -> None:
        if self._scope.locator("iframe").count() == 0:
            return
        self._scope = self._scope.frame_locator("iframe").first

    def wait_for_page_load(self) -> None:
        self.page.wait_for_load_state("domcontentloaded")

    def close(self) -> None:
        if self._owned is None:
            return
        pw, browser, context = self._owned
        self._owned = None
        context.close()
        browser.close()
        pw.stop()
