"""Handset steps: calls, SMS and native navigation through the Appium helper."""

from __future__ import annotations

from behave import step, use_step_matcher

use_step_matcher("re")


@step(r'I dial phone number of "([^"]*)" from "([^"]*)"')
def step_dial_phone_number(context, calling_number, caller_handset):
    context.mobile_component.dial_phone_number(calling_number, caller_handset)


@step(r'I dial special number of "([^"]*)" from "([^"]*)"')
def step_dial_special_number(context, calling_number, caller_handset):
    context.mobile_component.dial_special_number(calling_number, caller_handset)


@step(r'I recieve call on "([^"]*)"')
def step_receive_call(context, receiver_phone):
    context.mobile_component.receive_call(receiver_phone)


@step(r'I pick call on "([^"]*)"')
def step_pick_call(context, customer):
    attempts = context.mobile_component.pick_call(customer)
    context.actor.report(f"Call picked on {customer} after {attempts} attempt(s)")


@step(r'I reject call on "([^"]*)"')
def step_reject_call(context, customer):
    attempts = context.mobile_component.reject_call(customer)
    context.actor.report(f"Call rejected on {customer} after {attempts} attempt(s)")


@step(r'I talk for "([^"]*)"')
def step_talk_for(context, duration):
    context.mobile_component.wait_for_time(duration)


@step(r'I disconnect the call from "([^"]*)"')
def step_disconnect_call(context, customer):
    context.mobile_component.disconnect_call(customer)


@step(r'I check message "([^"]*)" from "([^"]*)" on "([^"]*)"')
def step_check_message(context, message, sms, customer):
    context.mobile_component.check_message(context.resolver.identify_data(message), sms, customer)


@step(r'I verify message "([^"]*)" from "([^"]*)" on "([^"]*)"')
def step_verify_message(context, message, sms, customer):
    context.mobile_component.verify_message(message, sms, customer)


@step(r'I verify item "([^"]*)" in message "([^"]*)"')
def step_verify_item(context, value, message):
    context.mobile_component.verify_items(value, message)


@step(r'I delete the open conversation on "([^"]*)"')
def step_delete_conversation(context, customer):
    context.mobile_component.delete_message(customer)


@step(r'I wait (\d+) seconds for message from "([^"]*)" on "([^"]*)"')
def step_wait_for_message(context, seconds, sender, customer):
    if not context.mobile_component.wait_for_message(int(seconds), sender, customer):
        context.actor.fail(f"No message from {sender} within {seconds} seconds")


@step(r'I capture "([^"]*)" from messages "([^"]*)"')
def step_capture_otp(context, label, messages_var):
    messages = context.resolver.identify_data(messages_var)
    if isinstance(messages, str):
        messages = [messages]
    if context.mobile.capture_otp(label, messages) is None:
        context.actor.fail(f"{label} not found in {messages_var}")


@step(r'app is started in "([^"]*)"')
def step_app_started(context, customer):
    context.mobile_component.start_app(customer)


@step(r'I see "([^"]*)" on "([^"]*)"')
def step_see_on(context, message, receiver_phone):
    context.mobile_component.check_text(context.resolver.identify_data(message), receiver_phone)


@step(r'I click "([^"]*)" on "([^"]*)"')
def step_click_on_device(context, name, receiver_phone):
    context.mobile_component.click_on_text(context.resolver.identify_locator(name), receiver_phone)


@step(r"I navigate to back from native screen")
def step_navigate_back(context):
    context.mobile.navigate_back()


@step(r"I perform multiple back action from mobile")
def step_multiple_back(context):
    context.mobile.navigate_multiple_back()
