from __future__ import annotations

from behave import step, use_step_matcher

from automation_suite.locators import xpath_literal

use_step_matcher("re")

HOME_PAGE = "Home"
SIDEBAR_ITEM = (
    "(//div[contains(@class, 'layout-container')]//div[@class='sidebar-item-container']"
    "//span[text()={label}])[{position}]"
)
ORG_SIDEBAR_ITEM = (
    "//div[contains(@class, 'layout-container')]//div[@class='sidebar-container']//li[contains(text(),{label})]"
)


def config_position(context, child_menu: str) -> int:
    """Which of several same-named sidebar entries to use, from "Configuration.<child>" test data."""
    key = f"Configuration.{child_menu}"
    position = context.resolver.identify_data(key)
    if position == key:
        context.actor.fail(f"No sidebar position configured for {child_menu!r} ({key})")
    return int(position)


@step(r'I click on left menu "([^"]*)"')
def step_left_menu(context, left_menu):
    context.left_menu.navigate_to_left_menu(left_menu, "buttonLeftMenu")
    context.actor.report(f"Clicked on left menu {left_menu}")


@step(r'I click on left child menu "([^"]*)" in the "([^"]*)" Page')
def step_left_child_menu(context, child_menu, page):
    if page == HOME_PAGE:
        context.left_menu.navigate_to_left_child_menu(child_menu, "buttonLeftChildMenu")
    else:
        path = SIDEBAR_ITEM.format(label=xpath_literal(child_menu), position=config_position(context, child_menu))
        context.generic.switch_to_left_hand_menu_iframe()
        context.g2.click_on_element(path)
        context.generic.switch_to_current_window_frame()
    context.actor.report(f"Clicked on left child menu {child_menu} in the {page} page")


@step(r'I click on left child menu "([^"]*)" in org of the "([^"]*)" Page')
def step_left_child_menu_org(context, child_menu, page):
    if page == HOME_PAGE:
        context.left_menu.navigate_to_left_child_menu(child_menu, "buttonLeftChildMenu")
    else:
        context.generic.switch_to_left_hand_menu_iframe()
        context.g2.click_on_element(ORG_SIDEBAR_ITEM.format(label=xpath_literal(child_menu)))
        context.generic.switch_to_current_window_frame()
    context.actor.report(f"Clicked on left child menu {child_menu} in the {page} page")


@step(r'I click on Left child menu "([^"]*)" in config')
def step_left_child_menu_config(context, child_menu):
    context.left_menu.navigate_to_left_menu(child_menu, "buttonLeftChildMenuConfig")
    context.actor.report(f"Clicked on left child menu {child_menu}")
