"""Tests for the Playwright helper against a mocked Page."""
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from automation_suite.errors import ElementNotFoundError, StepFailure
from automation_suite.locators import locate
from automation_suite.web.playwright_helper import PlaywrightHelper, looks_like_css, to_selector


@pytest.fixture
def page():
    page = MagicMock()
    page.url = "https://portal.example/shipments"
    return page


@pytest.fixture
def helper(page):
    return PlaywrightHelper(page)


def test_to_selector():
    """Test selector mapping for each locator form."""
    assert to_selector(locate("input").at(1)) == "xpath=(//input)[1]"
    assert to_selector({"id": "app__logout"}) == "id=app__logout"
    assert to_selector({"css": "div > a"}) == "div > a"
    assert to_selector("//button[text()='Login']") == "xpath=//button[text()='Login']"
    assert to_selector("#login") == "#login"
    assert to_selector("Enter your username") is None


def test_looks_like_css():
    """Test the CSS heuristic."""
    assert looks_like_css("div.mat-tab-links")
    assert looks_like_css("[name=q]")
    assert not looks_like_css("Login")


def test_fill_field_by_xpath(helper, page):
    """Test filling a structured locator."""
    helper.fill_field(locate("input").with_attr({"placeholder": "Email"}), "a@b.c")
    page.locator.assert_called_with("xpath=//input[@placeholder='Email']")
    page.locator.return_value.first.fill.assert_called_once_with("a@b.c")


def test_fill_field_by_placeholder_text(helper, page):
    """Test that plain text finds a field by placeholder or label."""
    helper.fill_field("Enter your username", "admin")
    page.get_by_placeholder.assert_called_once_with("Enter your username", exact=True)
    page.get_by_placeholder.return_value.or_.return_value.first.fill.assert_called_once_with("admin")


def test_click_by_mapping(helper, page):
    """Test clicking an id mapping."""
    helper.click({"id": "profile__dropdown"})
    page.locator.assert_called_once_with("id=profile__dropdown")
    page.locator.return_value.first.click.assert_called_once_with()


def test_timeout_becomes_element_not_found(helper, page):
    """Test that Playwright timeouts fail the step."""
    page.locator.return_value.first.click.side_effect = PlaywrightTimeoutError("timeout")
    with pytest.raises(ElementNotFoundError):
        helper.click("//missing")


def test_wait_for_element_uses_milliseconds(helper, page):
    """Test the wait timeout conversion."""
    helper.wait_for_element("//jhi-rate-line[1]", 30)
    page.locator.return_value.first.wait_for.assert_called_once_with(state="attached", timeout=30000)


def test_see_counts_visible_matches(helper, page):
    """Test text visibility."""
    matches = page.get_by_text.return_value
    matches.count.return_value = 1
    matches.nth.return_value.is_visible.return_value = False
    with pytest.raises(StepFailure):
        helper.see("Welcome")
    matches.nth.return_value.is_visible.return_value = True
    helper.see("Welcome")


def test_grabs(helper, page):
    """Test text, attribute and URL grabs."""
    target = page.locator.return_value
    target.first.inner_text.return_value = "WO# 881"
    target.all_inner_texts.return_value = ["a", "b"]
    target.first.get_attribute.return_value = "true"
    assert helper.grab_text_from("//span") == "WO# 881"
    assert helper.grab_text_from_all("//span") == ["a", "b"]
    assert helper.grab_attribute_from("//span", "aria-checked") == "true"
    assert helper.grab_current_url() == "https://portal.example/shipments"


def test_frame_switching(helper, page):
    """Test last/next frame navigation and returning to the page."""
    page.locator.return_value.count.return_value = 2
    helper.switch_to_last_frame()
    page.frame_locator.assert_called_with("iframe")
    assert helper._scope is page.frame_locator.return_value.last
    helper.switch_to()
    assert helper._scope is page


def test_frame_switching_without_iframes(helper, page):
    """Test that frame switching is a no-op when the page has no iframe."""
    page.locator.return_value.count.return_value = 0
    helper.switch_to_last_frame()
    assert helper._scope is page


def test_close_stops_owned_resources(page):
    """Test that a launched helper tears everything down."""
    pw, browser, context = MagicMock(), MagicMock(), MagicMock()
    helper = PlaywrightHelper(page, owned=(pw, browser, context))
    helper.close()
    context.close.assert_called_once_with()
    browser.close.assert_called_once_with()
    pw.stop.assert_called_once_with()
    helper.close()
    pw.stop.assert_called_once_with()


def test_wait_for_text_timeout_fails_step(helper, page):
    """Test that a text wait converts seconds and fails on timeout."""
    waiter = page.get_by_text.return_value.first.wait_for
    helper.wait_for_text("Welcome", 30)
    waiter.assert_called_once_with(state="visible", timeout=30000)
    waiter.side_effect = PlaywrightTimeoutError("timeout")
    with pytest.raises(StepFailure, match="did not appear within 30s"):
        helper.wait_for_text("Welcome", 30)


def test_dont_see_and_dom_presence(helper, page):
    """Test negative visibility and DOM presence."""
    matches = page.get_by_text.return_value
    matches.count.return_value = 0
    helper.dont_see("Error")
    matches.count.return_value = 1
    matches.nth.return_value.is_visible.return_value = True
    with pytest.raises(StepFailure):
        helper.dont_see("Error")

    page.locator.return_value.count.return_value = 0
    helper.dont_see_element_in_dom("//div[@class='spinner']")
    with pytest.raises(StepFailure):
        helper.see_element_in_dom("//div[@class='spinner']")


def test_field_value_and_checked_state(helper, page):
    """Test field value and checkbox assertions through the field locator."""
    field = page.locator.return_value.first
    field.input_value.return_value = "3"
    field.is_checked.return_value = True
    helper.see_in_field("//input[@name='qty']", "3")
    helper.see_checkbox_is_checked("//input[@name='terms']")
    with pytest.raises(StepFailure):
        helper.dont_see_checkbox_is_checked("//input[@name='terms']")


def test_title_source_and_cookie(helper, page):
    """Test title, source and cookie assertions."""
    page.title.return_value = "Shipments | Portal"
    page.content.return_value = "<html><body>Shipments</body></html>"
    page.context.cookies.return_value = [{"name": "session", "value": "abc"}]
    helper.see_title_equals("Shipments | Portal")
    helper.see_in_title("Shipments")
    helper.see_in_source("<body>")
    helper.see_cookie("session")
    helper.dont_see_cookie("tracking")
    helper.see_in_current_url("/shipments")
    with pytest.raises(StepFailure):
        helper.see_current_url_equals("https://portal.example/home")
