"""Read values off the active page or screen into the scenario's test data."""

from __future__ import annotations

from behave import step, use_step_matcher

use_step_matcher("re")

VALUE_WAIT_S = 15


@step(r'I get value of "([^"]*)" and store in "([^"]*)"')
def step_store_value(context, name, out_var):
    locator = context.resolver.identify_locator(name)
    context.actor.wait_for_element(locator, VALUE_WAIT_S)
    value = context.actor.grab_text_from(locator)
    context.test_data.set_field(out_var, value)
    context.actor.report(f"Stored value {value} of {name} in {out_var}")


@step(r'I get all values of "([^"]*)" and store it in "([^"]*)"')
def step_store_all_values(context, name, out_var):
    values = context.actor.grab_text_from_all(context.resolver.identify_locator(name))
    context.test_data.set_field(out_var, values)


@step(r'I get attribute "([^"]*)" from "([^"]*)" and store it in "([^"]*)"')
def step_store_attribute(context, attribute, name, out_var):
    value = context.actor.grab_attribute_from(context.resolver.identify_locator(name), attribute)
    context.test_data.set_field(out_var, value)


@step(r'I get current url and store it in "([^"]*)"')
def step_store_current_url(context, out_var):
    context.test_data.set_field(out_var, context.actor.grab_current_url())
