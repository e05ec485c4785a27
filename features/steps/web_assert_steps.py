"""Page assertions: visible text, elements, fields, url, title, source and cookies."""

from __future__ import annotations

import re

from behave import step, use_step_matcher

use_step_matcher("re")

TEXT_WAIT_S = 30
ELEMENT_WAIT_S = 15
URL_PLACEHOLDER = re.compile(r"\$\{?([^}/?#]+)\}?")


def data(context, value):
    return str(context.resolver.identify_data(value))


def locator(context, name):
    return context.resolver.identify_locator(name)


def expand_url(context, url: str) -> str:
    """Replace ${field} placeholders with stored values."""
    return data(context, URL_PLACEHOLDER.sub(lambda m: data(context, m.group(1)), url))


# Longer phrases first where one pattern is a prefix of another.


@step(r'I dont see text "([^"]*)" inside "([^"]*)"')
def step_dont_see_text_inside(context, value, container):
    context.actor.dont_see(data(context, value), locator(context, container))


@step(r'I dont see text "([^"]*)"')
def step_dont_see_text(context, value):
    context.actor.dont_see(data(context, value))


@step(r'I dont see check box "([^"]*)" is checked')
def step_dont_see_checked(context, name):
    context.actor.dont_see_checkbox_is_checked(locator(context, name))


@step(r'I dont see cookie "([^"]*)"')
def step_dont_see_cookie(context, name):
    context.actor.dont_see_cookie(data(context, name))


@step(r'I dont see current url is "([^"]*)"')
def step_dont_see_url(context, url):
    context.actor.dont_see_current_url_equals(expand_url(context, url))


@step(r'I dont see element "([^"]*)" in dom')
def step_dont_see_element_in_dom(context, name):
    context.actor.dont_see_element_in_dom(locator(context, name))


@step(r'I dont see element "([^"]*)"')
def step_dont_see_element(context, name):
    context.actor.dont_see_element(locator(context, name))


@step(r'I dont see "([^"]*)" in source')
def step_dont_see_in_source(context, value):
    context.actor.dont_see_in_source(data(context, value))


@step(r'I dont see "([^"]*)" in title')
def step_dont_see_in_title(context, value):
    context.actor.dont_see_in_title(data(context, value))


@step(r'I dont see "([^"]*)" in "([^"]*)"')
def step_dont_see_in_field(context, value, field):
    context.actor.dont_see_in_field(locator(context, field), data(context, value))


@step(r'I see check box "([^"]*)" is checked')
def step_see_checked(context, name):
    context.actor.see_checkbox_is_checked(locator(context, name))


@step(r'I see cookie "([^"]*)"')
def step_see_cookie(context, name):
    context.actor.see_cookie(data(context, name))


@step(r'I see current url is "([^"]*)"')
def step_see_url(context, url):
    context.actor.see_current_url_equals(expand_url(context, url))


@step(r'I see element "([^"]*)" in dom')
def step_see_element_in_dom(context, name):
    context.actor.see_element_in_dom(locator(context, name))


@step(r'I see element "([^"]*)"')
def step_see_element(context, name):
    target = locator(context, name)
    context.actor.wait_for_element(target, ELEMENT_WAIT_S)
    context.actor.see_element(target)


@step(r'I see title is "([^"]*)"')
def step_see_title(context, value):
    context.actor.see_title_equals(data(context, value))


@step(r'I see text "([^"]*)" in "([^"]*)"')
def step_see_text_in(context, value, container):
    target = locator(context, container)
    context.actor.wait_for_element(target, ELEMENT_WAIT_S)
    context.actor.see(data(context, value), target)


@step(r'I see "([^"]*)" in current url')
def step_see_in_url(context, fragment):
    context.actor.see_in_current_url(data(context, fragment))


@step(r'I see "([^"]*)" in source')
def step_see_in_source(context, value):
    context.actor.see_in_source(data(context, value))


@step(r'I see "([^"]*)" in title')
def step_see_in_title(context, value):
    context.actor.see_in_title(data(context, value))


@step(r'I see "([^"]*)" "(\d+)" times')
def step_see_number_of_elements(context, name, count):
    context.actor.see_number_of_elements(locator(context, name), int(count))


@step(r'I see "([^"]*)" in "([^"]*)"')
def step_see_in_field(context, value, field):
    context.actor.see_in_field(locator(context, field), data(context, value))


@step(r'I see "([^"]*)"')
def step_see_text(context, value):
    context.actor.wait_for_text(data(context, value), TEXT_WAIT_S)
