from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .actor import Actor
from .config import SuiteSettings
from .data_resolver import DataResolver
from .data_store import TestDataStore, load_repository
from .mobile.handlers import Mobile
from .mobile.mobile_component import MobileComponent
from .web.g2_handlers import G2Handlers
from .web.generic_methods import GenericMethods
from .web.left_menu_page import LeftMenuPage

EXPLICIT_WAIT_KEY = "ExplicitWait.Seconds"


@dataclass(frozen=True)
class Repositories:
    data: Mapping[str, Any]
    locators: Mapping[str, Any]

    @classmethod
    def load(cls, settings: SuiteSettings) -> "Repositories":
        return cls(data=load_repository(settings.test_data_dir), locators=load_repository(settings.locator_dir))


@dataclass
class ScenarioWorld:
    """Everything a step needs for one scenario; rebuilt for every scenario."""

    settings: SuiteSettings
    actor: Actor
    test_data: TestDataStore
    resolver: DataResolver
    mobile: Mobile
    mobile_component: MobileComponent
    g2: G2Handlers
    generic: GenericMethods
    left_menu: LeftMenuPage


def default_actor(settings: SuiteSettings) -> Actor:
    """Actor with lazily started Playwright and Appium helpers."""

    def _playwright():
        from .web.playwright_helper import PlaywrightHelper

        return PlaywrightHelper.launch(settings)

    def _appium():
        from .mobile.appium_helper import AppiumHelper
        from .mobile.appium_http_client import AppiumHTTPClient

        return AppiumHelper(AppiumHTTPClient(settings.appium_server_url), settings.load_capabilities())

    return Actor({"Playwright": _playwright, "Appium": _appium}, default_helper="Playwright")


def build_world(settings: SuiteSettings, repositories: Repositories, *, actor: Optional[Actor] = None) -> ScenarioWorld:
    store = TestDataStore(data=repositories.data, locators=repositories.locators)
    resolver = DataResolver(store)
    actor = actor or default_actor(settings)

    explicit_wait = store.get_data(EXPLICIT_WAIT_KEY)
    explicit_wait_s = float(explicit_wait) if explicit_wait is not None else settings.explicit_wait_s

    mobile = Mobile(actor, resolver)
    g2 = G2Handlers(actor, resolver, explicit_wait_s=explicit_wait_s)
    generic = GenericMethods(actor)
    return ScenarioWorld(
        settings=settings,
        actor=actor,
        test_data=store,
        resolver=resolver,
        mobile=mobile,
        mobile_component=MobileComponent(actor, resolver, mobile),
        g2=g2,
        generic=generic,
        left_menu=LeftMenuPage(g2, generic),
    )
