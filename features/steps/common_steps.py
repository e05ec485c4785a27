"""Assertions over stored values and lists; no element interaction."""

from __future__ import annotations

from behave import step, use_step_matcher

use_step_matcher("re")


def data(context, value):
    return context.resolver.identify_data(value) if isinstance(value, str) else value


def data_list(context, name: str) -> list:
    values = data(context, name)
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        context.actor.fail(f"{name} is not a stored list")
    return list(values)


def assert_equal(context, actual, expected) -> None:
    if str(actual) != str(expected):
        context.actor.fail(f"Expected {expected!r} but found {actual!r}")


def assert_contains(context, text, expected) -> None:
    if str(expected) not in str(text):
        context.actor.fail(f"{text!r} does not contain {expected!r}")


@step(r'I generate name "([^"]*)" with value "([^"]*)"')
def step_generate_name(context, out_var, token):
    value = context.resolver.generate_random_numbers(out_var, token)
    context.actor.report(f"Generated random number {value} and stored it in {out_var}")


@step(r'I check value of "([^"]*)" is "([^"]*)"')
def step_check_equal(context, first, second):
    first, second = data(context, first), data(context, second)
    assert_equal(context, first, second)
    context.actor.report(f"Verified two strings {first} and {second} are equal")


@step(r'I check value of "([^"]*)" is not equal to value of "([^"]*)"')
def step_check_not_equal(context, first, second):
    first, second = data(context, first), data(context, second)
    if str(first) == str(second):
        context.actor.fail(f"Expected {first!r} to differ from {second!r}")
    context.actor.report(f"Verified {first} is not equal to {second}")


@step(r'I verify "([^"]*)" contains "([^"]*)"')
def step_verify_contains(context, text, expected):
    assert_contains(context, data(context, text), data(context, expected))


@step(r'I wait for "([^"]*)" ?')
def step_wait_for(context, seconds):
    context.actor.wait(data(context, seconds))


@step(r'I check for the duplicate value in "([^"]*)"')
def step_check_duplicates(context, name):
    values = [str(value) for value in data_list(context, name)]
    duplicates = sorted({value for value in values if values.count(value) > 1})
    if duplicates:
        context.actor.fail(f"The list contains duplicate values: {duplicates}")
    context.actor.report(f"{name} has no duplicate values")


@step(r'I verify "([^"]*)" matched with "([^"]*)" list')
def step_verify_matched_with_list(context, value, name):
    expected = data(context, value)
    for item in data_list(context, name):
        assert_equal(context, data(context, item), expected)


@step(r'I verify text "([^"]*)" contains in "([^"]*)" list')
def step_verify_contains_in_list(context, value, name):
    expected = data(context, value)
    for item in data_list(context, name):
        assert_contains(context, data(context, item), expected)


@step(r'I verify "([^"]*)" exist in "([^"]*)" list')
def step_verify_exists_once(context, value, name):
    expected = data(context, value)
    count = sum(1 for item in data_list(context, name) if item == expected)
    if count != 1:
        context.actor.fail(f"{expected!r} occurs {count} times in {name}, expected exactly once")
    context.actor.report(f"{expected} exists in {name}")
