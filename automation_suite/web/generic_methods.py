from __future__ import annotations

from ..actor import Actor


class GenericMethods:
    """Frame navigation shared by the G2 pages; the menu and the content live in nested iframes."""

    def __init__(self, actor: Actor) -> None:
        self.actor = actor

    def switch_to_main_page(self) -> None:
        self.actor.wait_for_page_load()
        self.actor.switch_to()

    def switch_to_left_hand_menu_iframe(self) -> None:
        self.switch_to_main_page()
        self.actor.switch_to_last_frame()

    def switch_to_current_window_frame(self) -> None:
        self.switch_to_main_page()
        self.actor.switch_to_last_frame()
        self.actor.switch_to_next_frame()
