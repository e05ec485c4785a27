from __future__ import annotations

from typing import Any, Optional

from ..actor import Actor
from ..data_resolver import DataResolver
from ..locators import fill_template

# XPath templates; REPLACE_LOCATOR is swapped for the (escaped) label at use time.
CUSTOM_LOCATORS: dict[str, str] = {
    "buttonInSpan": "//span[text()='REPLACE_LOCATOR']",
    "buttonInSpanDialog": "//div[@role='dialog']//span[contains(text(),'REPLACE_LOCATOR')]",
    "buttonInTopMenu": "//li[contains(normalize-space(.), 'REPLACE_LOCATOR')]",
    "buttonInLink": "//a[contains(normalize-space(.), 'REPLACE_LOCATOR')]",
    "buttonLeftMenu": "//div[contains(text(),'REPLACE_LOCATOR')]",
    "buttonLeftChildMenuConfig": "//a[contains(text(),'REPLACE_LOCATOR')]",
    "buttonLeftChildMenu": (
        "//div[contains(@class, 'layout-container')]//div[contains(@class, 'sidebar')]//*[text()='REPLACE_LOCATOR']"
    ),
    "buttonCite": "//button[contains(normalize-space(.), 'REPLACE_LOCATOR')]",
    "buttonTopMenu": "//span[contains(normalize-space(.), 'REPLACE_LOCATOR')]",
    "buttonRadio": ".//label[contains(@class,'el-radio')]//span[text()[normalize-space()='REPLACE_LOCATOR']]",
    "textboxUsingLabel": (
        "//*[contains(concat(' ', normalize-space(@class), ' '), ' el-form-item ')]"
        "[contains(normalize-space(.), 'REPLACE_LOCATOR')]//input"
    ),
    "textboxusingId": "//input[@id='REPLACE_LOCATOR']",
    "customTextAreaLocator": (
        "//*[contains(concat(' ', normalize-space(@class), ' '), ' el-form-item ')]"
        "[contains(normalize-space(.), 'REPLACE_LOCATOR')]//textarea"
    ),
    "checkboxInDialogWindow": (
        "(//div[@role='dialog']//*[contains(@class, 'el-table')]//span[@class='el-checkbox__inner'])[REPLACE_LOCATOR]"
    ),
}


class G2Handlers:
    """
    Element actions for the G2 web portal.

    Every action waits for the page to settle and for the element to exist
    before acting. A `custom` name picks a template from CUSTOM_LOCATORS and
    treats `locator` as the label to substitute; without it, `locator` is a
    locator-repository name or a raw selector.
    """

    def __init__(self, actor: Actor, resolver: DataResolver, *, explicit_wait_s: float) -> None:
        self.actor = actor
        self.resolver = resolver
        self.explicit_wait_s = explicit_wait_s

    def form_custom_locator(self, label: Any, custom: str) -> str:
        template = CUSTOM_LOCATORS.get(custom)
        if template is None:
            self.actor.fail(f"Unknown custom locator {custom!r}")
        return fill_template(template, self.resolver.identify_locator(label))

    def _target(self, locator: Any, custom: Optional[str]) -> Any:
        if custom is not None:
            return self.form_custom_locator(locator, custom)
        return self.resolver.identify_locator(locator)

    def click_on_element(self, locator: Any, custom: Optional[str] = None) -> None:
        target = self._target(locator, custom)
        self.actor.wait_for_page_load()
        self.actor.wait_for_element(target, self.explicit_wait_s)
        self.actor.click(target)
        self.actor.wait_for_page_load()

    def select_radio_or_checkbox(self, locator: Any, custom: Optional[str] = None) -> None:
        target = self._target(locator, custom)
        self.actor.wait_for_page_load()
        self.actor.wait_for_element(target, self.explicit_wait_s)
        self.actor.check_option(target)

    def enter_value(self, locator: Any, value: Any, custom: Optional[str] = None) -> None:
        if custom is not None:
            target = self.form_custom_locator(self.resolver.identify_data(locator), custom)
        else:
            target = self.resolver.identify_locator(locator)
        self.actor.wait_for_page_load()
        self.actor.wait_for_element(target, self.explicit_wait_s)
        self.actor.fill_field(target, value)

    def grab_number_of_visible_elements(self, locator: Any, custom: Optional[str] = None) -> int:
        return self.actor.grab_number_of_visible_elements(self._target(locator, custom))
