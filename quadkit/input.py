"""Input state, key codes and key repeat emulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from quadkit.geometry import Vec2


class KeyCode(Enum):
    UP = auto()
    DOWN = auto()
    RIGHT = auto()
    LEFT = auto()
    BACKSPACE = auto()
    DELETE = auto()
    ENTER = auto()
    TAB = auto()
    HOME = auto()
    END = auto()
    CONTROL = auto()
    ESCAPE = auto()
    A = auto()  # select all
    Z = auto()  # undo
    Y = auto()  # redo
    C = auto()  # copy
    V = auto()  # paste
    X = auto()  # cut


Key = Union[str, KeyCode]
"""A typed character (a one-character string) or a special key."""


@dataclass
class InputCharacter:
    key: Key
    modifier_shift: bool = False
    modifier_ctrl: bool = False


@dataclass
class Input:
    """Mouse and keyboard state for one frame."""

    mouse_position: Vec2 = Vec2()
    mouse_down: bool = False
    mouse_pressed: bool = False
    mouse_released: bool = False
    mouse_wheel: Vec2 = Vec2()
    input_buffer: list[InputCharacter] = field(default_factory=list)
    modifier_ctrl: bool = False
    escape: bool = False
    enter: bool = False
    cursor_grabbed: bool = False
    window_active: bool = False

    def _available(self) -> bool:
        return not self.cursor_grabbed and self.window_active

    def is_mouse_down(self) -> bool:
        return self.mouse_down and self._available()

    def click_down(self) -> bool:
        return self.mouse_pressed and self._available()

    def click_up(self) -> bool:
        return self.mouse_released and self._available()

    def reset(self) -> None:
        """Clear the per-frame events."""
        self.modifier_ctrl = False
        self.escape = False
        self.enter = False
        self.mouse_pressed = False
        self.mouse_released = False
        self.mouse_wheel = Vec2()
        self.input_buffer = []
        self.window_active = False


REPEAT_DELAY = 0.5


class KeyRepeat:
    """Emulates OS key repeat: a held key fires once, then repeatedly after a delay."""

    def __init__(self) -> None:
        self._this_frame: KeyCode | None = None
        self._active: KeyCode | None = None
        self._repeating: KeyCode | None = None
        self._pressed_time = 0.0

    def add_repeat_gap(self, character: KeyCode, time: float) -> bool:
        """Note that ``character`` is held this frame; return whether it should fire."""
        self._this_frame = character
        return (
            self._active is None
            or self._active != character
            or self._repeating == character
        )

    def new_frame(self, time: float) -> None:
        this_frame = self._this_frame
        self._this_frame = None

        if this_frame == self._active and time - self._pressed_time > REPEAT_DELAY:
            self._repeating = self._active

        if this_frame != self._active:
            self._active = this_frame
            self._pressed_time = time
            self._repeating = None