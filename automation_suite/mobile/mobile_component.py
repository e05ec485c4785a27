from __future__ import annotations

from ..actor import Actor
from ..data_resolver import DataResolver
from ..errors import PollTimeoutError
from ..polling import poll_until
from .handlers import APPIUM, Mobile

KEYCODE_HOME = 3
KEYCODE_ENTER = 66

ELEMENT_WAIT_S = 30
CALL_POLL_ATTEMPTS = 5
CALL_POLL_INTERVAL_S = 5

ANSWER_POINT = (510, 245)
REJECT_POINT = (185, 245)
SPEAKER_OFF_ICON = '//android.widget.Button[@content-desc="Speaker, is Off"]/android.widget.ImageView'
PHONE_APP_ICON = '//android.widget.TextView[@content-desc="Phone"]'


class MobileComponent:
    """Dialer and messaging workflows on Android handsets."""

    def __init__(self, actor: Actor, resolver: DataResolver, mobile: Mobile) -> None:
        self.actor = actor
        self.resolver = resolver
        self.mobile = mobile

    def _loc(self, name: str):
        return self.resolver.identify_locator(name)

    def _wait_and_tap(self, name: str) -> None:
        self.actor.wait_for_element(self._loc(name), ELEMENT_WAIT_S)
        self.actor.tap(self._loc(name))

    def start_app(self, customer: str) -> None:
        self.actor.switch_helper(APPIUM)
        self.mobile.start_app("dialerapp", customer)

    def _open_dialer_and_call(self, numbers: str, customer: str) -> None:
        self.start_app(customer)
        self.actor.send_device_key_event(KEYCODE_HOME)
        self._wait_and_tap("menu_button")
        self._wait_and_tap("dialer_button")
        self.actor.append_field(self._loc("dialer_input"), self.resolver.identify_data(numbers))
        self.actor.tap(self._loc("dialer_call"))

    def dial_phone_number(self, numbers: str, customer: str) -> None:
        self._open_dialer_and_call(numbers, customer)
        self.actor.wait_for_element(self._loc("end_call_button"), ELEMENT_WAIT_S)

    def dial_special_number(self, numbers: str, customer: str) -> None:
        # USSD/short codes never show an in-call screen
        self._open_dialer_and_call(numbers, customer)

    def receive_call(self, receiver_phone: str) -> None:
        self.actor.switch_helper(APPIUM)
        self.actor.wait(2)
        self.mobile.set_device(receiver_phone)
        self.actor.send_device_key_event(KEYCODE_HOME)
        self.actor.see("Phone")

    def _answer_with_tap(self, customer: str, point: tuple[int, int], expected: str) -> int:
        self.actor.switch_helper(APPIUM)
        self.mobile.set_device(customer)
        self.actor.send_device_key_event(KEYCODE_HOME)
        result = poll_until(
            lambda: self.actor.grab_number_of_visible_elements(expected),
            action=lambda: self.actor.tap_point(*point),
            max_attempts=CALL_POLL_ATTEMPTS,
            interval_s=CALL_POLL_INTERVAL_S,
            sleep=self.actor.wait,
            message="Call not received",
        )
        return result.attempts

    def pick_call(self, customer: str) -> int:
        return self._answer_with_tap(customer, ANSWER_POINT, SPEAKER_OFF_ICON)

    def reject_call(self, customer: str) -> int:
        return self._answer_with_tap(customer, REJECT_POINT, PHONE_APP_ICON)

    def wait_for_time(self, duration) -> None:
        self.actor.wait(duration)

    def disconnect_call(self, customer: str) -> None:
        self.actor.switch_helper(APPIUM)
        self.mobile.set_device(customer)
        self._wait_and_tap("end_call_button")
        self.actor.send_device_key_event(KEYCODE_HOME)

    def check_text(self, message: str, receiver_phone: str) -> None:
        self.actor.switch_helper(APPIUM)
        self.mobile.set_device(receiver_phone)
        self.actor.see(message)

    def click_on_text(self, message: str, receiver_phone: str) -> None:
        self.actor.switch_helper(APPIUM)
        self.mobile.set_device(receiver_phone)
        self.actor.click(message)

    def check_message(self, message: str, sms: str, customer: str) -> None:
        """Open the thread from `sms`, confirm `message` is shown, then delete the thread."""
        self.actor.switch_helper(APPIUM)
        self.mobile.start_app("messageapp", customer)
        self.actor.see(sms)
        self.actor.click(sms)
        self.actor.see(message)
        self.actor.click(self._loc("deletemessage"))
        # the messages app asks twice
        for _ in range(2):
            self.actor.see("Delete")
            self.actor.click("Delete")
        self.actor.send_device_key_event(KEYCODE_HOME)

    def verify_message(self, message: str, sms: str, customer: str) -> None:
        self.actor.switch_helper(APPIUM)
        self.mobile.start_app("messageapp", customer)
        self.actor.wait_for_element(self._loc("message_search"), ELEMENT_WAIT_S)
        self.actor.see_element(self._loc("message_search"))
        self.actor.tap(self._loc("message_search"))
        self.actor.see_element(self._loc("search_text"))
        self.actor.append_field(self._loc("search_text"), sms)
        self.actor.send_device_key_event(KEYCODE_ENTER)
        self.actor.wait_for_element(self._loc("message_title"), ELEMENT_WAIT_S)
        self.actor.tap(sms)
        self.actor.wait_for_element(self._loc("message_text"), ELEMENT_WAIT_S)
        messages = self.actor.grab_text_from_all(self._loc("message_text"))
        expected = str(self.resolver.identify_data(message))
        if messages and expected in messages[0]:
            self.actor.report(f"Message {expected} is seen")
        else:
            self.actor.fail(f"Message {expected} is not seen")

    def has_sender(self, sender: str) -> bool:
        senders = self.actor.grab_text_from_all(self._loc("message_sender"))
        return any(sender in text for text in senders)

    def wait_for_message(self, seconds: int, sender: str, customer: str) -> bool:
        self.actor.switch_helper(APPIUM)
        self.mobile.start_app("messageapp", customer)
        attempts = max(int(seconds) // 2, 1)
        try:
            poll_until(
                lambda: self.has_sender(sender),
                max_attempts=attempts,
                interval_s=2,
                sleep=self.actor.wait,
                message=f"No message from {sender}",
            )
        except PollTimeoutError:
            return False
        return True

    def delete_message(self, customer: str) -> None:
        """Delete the open conversation through the overflow menu."""
        self.actor.switch_helper(APPIUM)
        self.mobile.set_device(customer)
        self.actor.tap(self._loc("more_options"))
        self.actor.tap("Delete conversation", self._loc("text_view"))
        self.actor.see("Delete")
        self.actor.tap(self._loc("delete_button"))

    def verify_items(self, value: str, message: str) -> None:
        text = str(self.resolver.identify_data(message))
        expected = str(self.resolver.identify_data(value))
        if expected in text:
            self.actor.report(f"{expected} is found in message")
        else:
            self.actor.fail(f"{expected} is not found in {text}")
