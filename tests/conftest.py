"""Shared fixtures: a recording helper, a seeded resolver and a full scenario world."""
import random
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "features" / "steps"))

from automation_suite.actor import Actor, Helper
from automation_suite.config import SuiteSettings
from automation_suite.data_resolver import DataResolver
from automation_suite.data_store import TestDataStore
from automation_suite.errors import StepFailure
from automation_suite.scenario import Repositories, build_world


class FakeHelper(Helper):
    """Records every action; visible counts and texts are scripted per locator string."""

    def __init__(self, name):
        self.name = name
        self.calls = []
        self.visible = {}
        self.texts = {}
        self.attributes = {}
        self.url = "https://portal.example/home"
        self.title = "Portal | Home"
        self.source = "<html><body>Home</body></html>"
        self.cookies = {}
        self.closed = False

    def _record(self, action, *args):
        self.calls.append((action,) + args)

    def actions(self, action):
        return [call[1:] for call in self.calls if call[0] == action]

    def fill_field(self, locator, value):
        self._record("fill_field", str(locator), value)

    def append_field(self, locator, value):
        self._record("append_field", str(locator), value)

    def click(self, locator, context=None):
        self._record("click", locator if isinstance(locator, dict) else str(locator))

    def check_option(self, locator):
        self._record("check_option", str(locator))

    def see(self, text, context=None):
        self._record("see", text)
        if self.visible.get(text) == 0:
            raise StepFailure(f"Text {text!r} was not seen")

    def dont_see(self, text, context=None):
        self._record("dont_see", text, context)
        if self.visible.get(text):
            raise StepFailure(f"Text {text!r} is visible")

    def wait_for_text(self, text, seconds):
        self._record("wait_for_text", text, seconds)

    def see_element(self, locator):
        self._record("see_element", str(locator))

    def dont_see_element(self, locator):
        self._record("dont_see_element", str(locator))

    def see_element_in_dom(self, locator):
        self._record("see_element_in_dom", str(locator))

    def dont_see_element_in_dom(self, locator):
        self._record("dont_see_element_in_dom", str(locator))

    def is_checked(self, locator):
        return self.attributes.get((str(locator), "checked")) == "true"

    def grab_value_from(self, locator):
        return self.texts.get(str(locator), "")

    def grab_title(self):
        return self.title

    def grab_source(self):
        return self.source

    def grab_cookie(self, name):
        return self.cookies.get(name)

    def wait_for_element(self, locator, seconds):
        self._record("wait_for_element", str(locator), seconds)

    def tap(self, locator, context=None):
        self._record("tap", str(locator))

    def tap_point(self, x, y):
        self._record("tap_point", x, y)

    def send_device_key_event(self, keycode):
        self._record("send_device_key_event", keycode)

    def grab_number_of_visible_elements(self, locator):
        self._record("grab_number_of_visible_elements", str(locator))
        counts = self.visible.get(str(locator), 0)
        if isinstance(counts, list):
            return counts.pop(0) if counts else 0
        return counts

    def grab_text_from(self, locator):
        self._record("grab_text_from", str(locator))
        return self.texts.get(str(locator), "")

    def grab_text_from_all(self, locator):
        self._record("grab_text_from_all", str(locator))
        return list(self.texts.get(str(locator), []))

    def grab_attribute_from(self, locator, attribute):
        self._record("grab_attribute_from", str(locator), attribute)
        return self.attributes.get((str(locator), attribute))

    def grab_current_url(self):
        return self.url

    def switch_to(self, frame=None):
        self._record("switch_to", frame)

    def switch_to_last_frame(self):
        self._record("switch_to_last_frame")

    def switch_to_next_frame(self):
        self._record("switch_to_next_frame")

    def wait_for_page_load(self):
        self._record("wait_for_page_load")

    def start_activity(self, app_package, app_activity):
        self._record("start_activity", app_package, app_activity)

    def use_device(self, udid):
        self._record("use_device", udid)

    def back(self):
        self._record("back")

    def close(self):
        self.closed = True


@pytest.fixture
def web():
    return FakeHelper("Playwright")


@pytest.fixture
def device():
    return FakeHelper("Appium")


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def actor(web, device, sleeps):
    return Actor({"Playwright": lambda: web, "Appium": lambda: device}, default_helper="Playwright", sleep=sleeps.append)


@pytest.fixture
def repositories():
    data = {
        "Users": {"admin": {"name": "admin@example.com", "password": "s3cret"}},
        "Configuration": {"Rate Plans": 2},
        "alice_udid": "emulator-5554",
        "bob_udid": "emulator-5556",
        "support_number": "+15550100",
        "ExplicitWait": {"Seconds": 12},
    }
    locators = {
        "dialerapp_package": "com.android.dialer",
        "dialerapp_activity": ".main.impl.MainActivity",
        "messageapp_package": "com.google.android.apps.messaging",
        "messageapp_activity": ".ui.ConversationListActivity",
        "menu_button": "//android.widget.ImageView[@content-desc='Apps']",
        "dialer_button": "~Phone",
        "dialer_input": "com.android.dialer:id/digits",
        "dialer_call": "~dial",
        "end_call_button": "~End call",
        "deletemessage": "~Delete",
        "message_search": "~Search",
        "search_text": "com.google.android.apps.messaging:id/search",
        "message_title": "//android.widget.TextView[@resource-id='title']",
        "message_text": "//android.widget.TextView[@resource-id='message_text']",
        "message_sender": "//android.widget.TextView[@resource-id='sender']",
        "more_options": "~More options",
        "text_view": "//android.widget.TextView",
        "delete_button": "android:id/button1",
        "order_status": "//span[@id='order-status']",
        "Shipments": "Shipment list",
    }
    return Repositories(data=data, locators=locators)


@pytest.fixture
def store(repositories):
    return TestDataStore(data=repositories.data, locators=repositories.locators)


@pytest.fixture
def resolver(store):
    return DataResolver(store, rng=random.Random(7))


@pytest.fixture
def settings(tmp_path):
    return SuiteSettings.from_env({"AI_WORKSPACE_DIR": str(tmp_path)})


@pytest.fixture
def world(settings, repositories, actor):
    return build_world(settings, repositories, actor=actor)


@pytest.fixture
def context(world):
    """Stand-in for behave's context: the scenario world's fields as attributes."""
    return SimpleNamespace(**vars(world))
