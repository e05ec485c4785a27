from __future__ import annotations

from .g2_handlers import G2Handlers
from .generic_methods import GenericMethods


class LeftMenuPage:
    def __init__(self, handlers: G2Handlers, generic: GenericMethods) -> None:
        self.handlers = handlers
        self.generic = generic

    def navigate_to_left_menu(self, left_menu: str, custom: str = "buttonLeftMenu") -> None:
        self.generic.switch_to_left_hand_menu_iframe()
        self.handlers.click_on_element(left_menu, custom)
        self.generic.switch_to_current_window_frame()

    def navigate_to_left_child_menu(self, child_menu: str, custom: str = "buttonLeftChildMenu") -> None:
        self.generic.switch_to_left_hand_menu_iframe()
        self.handlers.click_on_element(child_menu, custom)
        self.generic.switch_to_current_window_frame()
