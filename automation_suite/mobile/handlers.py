from __future__ import annotations

import re
from typing import Optional, Sequence

from ..actor import Actor
from ..data_resolver import DataResolver

APPIUM = "Appium"
OTP_FIELD = "Service_Portal_OTP"


class Mobile:
    """
    Device lifecycle on top of the Appium helper.

    Handsets are looked up in test data as "<device>_udid"; apps are looked up
    in the locator repository as "<app>_package" / "<app>_activity".
    """

    def __init__(self, actor: Actor, resolver: DataResolver) -> None:
        self.actor = actor
        self.resolver = resolver

    def _udid(self, device: str) -> Optional[str]:
        udid = self.resolver.identify_data(f"{device}_udid")
        return None if udid == f"{device}_udid" else str(udid)

    def set_device(self, device: str) -> None:
        udid = self._udid(device)
        if udid is None:
            self.actor.fail(f"Device {device} not found in handset test data")
        self.actor.helper_named(APPIUM).use_device(udid)

    def start_app(self, app_type: str, device: str) -> None:
        self.set_device(device)
        package = self.resolver.identify_locator(f"{app_type}_package")
        activity = self.resolver.identify_locator(f"{app_type}_activity")
        if package == f"{app_type}_package" or activity == f"{app_type}_activity":
            self.actor.fail(f"App {app_type} has no package/activity in the locator repository")
        self.actor.helper_named(APPIUM).start_activity(str(package), str(activity))

    def navigate_back(self) -> None:
        self.actor.helper_named(APPIUM).back()

    def navigate_multiple_back(self, times: int = 3) -> None:
        for _ in range(times):
            self.navigate_back()

    def capture_otp(self, verify_message: str, messages: Sequence[str]) -> Optional[str]:
        """Pull the number after `verify_message` out of the newest message; OTPs are stored."""
        if not messages:
            return None
        match = re.search(rf"(?<={re.escape(verify_message)})[:]?\s?([\d.]+)", str(messages[-1]))
        if match is None:
            print(f"  {verify_message} not found in latest message")
            return None
        value = match.group(1)
        print(f"  {verify_message} - {value}")
        if "OTP" in verify_message:
            self.resolver.store.set_field(OTP_FIELD, value)
        return value
