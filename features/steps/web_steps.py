"""Web portal steps: form fields, Angular Material controls, tabs, dates and schedules."""

from __future__ import annotations

import re
from datetime import date, datetime

from behave import step, use_step_matcher

from automation_suite.locators import locate, xpath_literal
from automation_suite.schedule import calendar_path, next_available_slot

use_step_matcher("re")

REQUEST_ID = re.compile(r"WO#\s(\d+)")
MENU_CHECKBOX = "//div[contains(@class, 'mat-menu-content')]//div[contains(@class, 'mat-checkbox-inner-container')]"
MONTH_YEAR_TOGGLE = "//button[@aria-label='Choose month and year']/span[contains(@class, 'mat-button-wrapper')]"


def today() -> date:
    return date.today()


def now() -> datetime:
    return datetime.now()


def input_at(placeholder: str, position) -> object:
    return locate("input").with_attr({"placeholder": placeholder}).at(int(position))


@step(r'I login to eShipper Portal with user "([^"]*)" and password "([^"]*)"')
def step_login(context, username, password):
    context.actor.fill_field("Enter your username", context.resolver.identify_data(username))
    context.actor.fill_field("Enter your password", context.resolver.identify_data(password))
    context.actor.click("//button[text()='Login']")


@step(r"I logout")
def step_logout(context):
    context.actor.click({"id": "profile__dropdown"})
    context.actor.click({"id": "app__logout"})


@step(r"I select courier service at position (\d+)")
def step_select_courier(context, position):
    locator = f"//jhi-rate-line[{int(position)}]"
    context.actor.wait_for_element(locator, 30)
    context.actor.click(locator)


@step(r'I fill field for "([^"]*)" at position (\d+) with value "([^"]*)"')
def step_fill_field_at(context, placeholder, position, token):
    locator = input_at(placeholder, position)
    value = context.resolver.resolve(token)
    if value != token:
        # later steps can refer to the generated value by its token
        context.test_data.set_field(token, value)
    context.actor.fill_field(locator, value)
    context.actor.wait(1)


@step(r'I fill field for textarea "([^"]*)" at position (\d+) with value "([^"]*)"')
def step_fill_textarea_at(context, placeholder, position, value):
    locator = locate("textarea").with_attr({"placeholder": placeholder}).at(int(position))
    context.actor.wait(1)
    context.actor.fill_field(locator, context.resolver.identify_data(value))


@step(r'I click on input for "([^"]*)" at position (\d+)')
def step_click_input_at(context, placeholder, position):
    context.actor.click(input_at(placeholder, position))


@step(r'I click on list for "([^"]*)" at position (\d+)')
def step_click_list_at(context, placeholder, position):
    context.actor.click(locate("mat-select").with_attr({"placeholder": placeholder}).at(int(position)))


@step(r'I click on input for "([^"]*)"')
def step_click_input(context, placeholder):
    context.actor.click(locate("input").with_attr({"placeholder": placeholder}))


@step(r'I pick "([^"]*)" from option "([^"]*)"')
def step_pick_from_option(context, select, option):
    context.actor.click(context.resolver.identify_locator(select))
    context.actor.click(context.resolver.identify_locator(option))


@step(r'I pick option "([^"]*)" from "([^"]*)"')
def step_pick_option_from(context, option, select):
    context.actor.click(f"//span[contains(text(), {xpath_literal(select)})]")
    label = context.resolver.identify_locator(option)
    context.actor.click(f"//span[contains(text(), {xpath_literal(label)})]")


@step(r'I click on button "([^"]*)"')
def step_click_button(context, label):
    text = context.resolver.identify_locator(label)
    context.actor.click(f"//button[contains(text(), {xpath_literal(text)})]")


@step(r'I click on "([^"]*)"')
def step_click_on_span(context, label):
    context.actor.wait(1)
    text = context.resolver.identify_locator(label)
    context.actor.click(f"//span[text()={xpath_literal(text)}]")


@step(r'I select option "([^"]*)" from "([^"]*)" at position (\d+)')
def step_select_option_at(context, option, select, position):
    dropdown = locate("mat-select").with_attr({"ng-reflect-placeholder": select}).at(int(position))
    context.actor.click(dropdown)
    context.actor.click(locate("span.mat-option-text").with_text(option))


@step(r'I select option "([^"]*)" from (placeholder|name|aria-label) "([^"]*)" at position (\d+)')
def step_select_option_by_attr(context, option, ref, select, position):
    dropdown = locate("mat-select").with_attr({f"ng-reflect-{ref}": select}).at(int(position))
    context.actor.click(dropdown)
    context.actor.click(locate("span.mat-option-text").with_text(context.resolver.identify_data(option)))


@step(r'I select "([^"]*)" from "([^"]*)" dropdown')
def step_select_from_dropdown(context, option, select):
    context.actor.click(context.resolver.identify_locator(select))
    context.actor.click(context.resolver.identify_locator(option))


@step(r'I remove filtered value "([^"]*)"')
def step_remove_filter(context, value):
    text = context.resolver.identify_data(value)
    chip_close = f"//span[normalize-space(text()) = {xpath_literal(text)}]//following-sibling::i"
    context.actor.wait_for_element(chip_close, 15)
    context.actor.click(chip_close)
    context.actor.wait(2)


@step(r"I select (future|current) date at position (\d+)")
def step_select_date(context, kind, position):
    opener = locate("button").with_attr({"aria-label": "Open calendar"}).at(int(position))
    context.actor.click(opener)
    context.actor.click(MONTH_YEAR_TOGGLE)
    for label in calendar_path(today(), future=kind == "future"):
        context.actor.click(
            "//div[contains(@class, 'mat-calendar-body-cell-content') and "
            f"normalize-space(text()) = {xpath_literal(label)}]"
        )


@step(r'I select "([^"]*)" (button|option|dropdown) at position (\d+)')
def step_select_menu_item(context, value, kind, position):
    literal = xpath_literal(value)
    if kind == "button":
        context.actor.click(f"(//button[contains(@class, 'mat-menu-trigger')])[{int(position)}]")
        context.actor.wait(2)
        context.actor.click(f"//button[contains(@class, 'mat-menu-item') and normalize-space(text())={literal}]")
    elif kind == "dropdown":
        context.actor.click(f"//button[contains(@class, 'mat-menu-trigger')]//span[normalize-space(text())={literal}]")
    else:
        context.actor.click(f"//button[contains(@class, 'mat-menu-item')]//span[text()={literal}]")


@step(r'I get request id from "([^"]*)" and store in "([^"]*)"')
def step_store_request_id(context, data, store_var):
    match = REQUEST_ID.search(str(context.resolver.identify_data(data)))
    if match is None:
        context.actor.fail("Request Id not available")
    context.test_data.set_field(store_var, match.group(1))


@step(r'I navigate to "([^"]*)" tab under customer')
def step_navigate_customer_tab(context, label):
    context.actor.click(locate("div.mat-tab-links").find(locate("a").with_text(label)))


@step(r'I navigate to "([^"]*)" tab')
def step_navigate_tab(context, label):
    context.actor.click(locate("div").with_attr({"class": "mat-tab-label-content"}).with_text(label))


@step(r'I click on searched value "([^"]*)" in (dropdown|list)')
def step_click_searched_value(context, value, location):
    text = context.resolver.identify_data(value)
    if location == "dropdown":
        locator = locate("mat-option").find(locate("span").with_text(text))
    else:
        locator = locate("span").with_attr({"class": "mat-tooltip-trigger"}).with_text(text)
    context.actor.click(locator)


@step(r'I search for value "([^"]*)"')
def step_search_for(context, value):
    context.actor.wait(1)
    context.actor.fill_field(
        locate("input").with_attr({"ng-reflect-type": "search"}),
        context.resolver.identify_data(value),
    )


@step(r'I opt for "([^"]*)" at position (\d+)')
def step_opt_for(context, option, position):
    context.actor.fill_field(input_at("Search", position), context.resolver.identify_data(option))
    context.actor.check_option(MENU_CHECKBOX)


@step(r"I click on apply")
def step_click_apply(context):
    context.actor.click("//div[contains(@class, 'mat-menu-content')]//button[text()='Apply']")


@step(r'I calculate future time and store in "([^"]*)"')
def step_calculate_future_time(context, variable):
    context.test_data.set_field(variable, next_available_slot(now()))


@step(r'I toggle "([^"]*)" button')
def step_toggle(context, option):
    toggle = f"//span[text()={xpath_literal(f' {option} ')}]/..//div[contains(@class, 'mat-slide-toggle-bar')]"
    if context.settings.ai_pw:
        context.actor.click(toggle)
    else:
        context.actor.check_option(toggle)
    context.actor.wait(2)
