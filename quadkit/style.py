"""Widget styles: colours, margins and background sprites per interaction state."""

from __future__ import annotations

import math
from dataclasses import dataclass

from quadkit.geometry import Color, RectOffset
from quadkit.painter import ElementState

_BLACK = Color.from_rgba(0, 0, 0, 255)
_WHITE = Color.from_rgba(255, 255, 255, 255)

INACTIVE_TEXT_FACTOR = 0.6
INACTIVE_ALPHA_FACTOR = 0.8


def _to_byte(value: float) -> int:
    """Convert like a float-to-u8 cast: truncate, clamp to 0..255, NaN becomes 0."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


@dataclass(frozen=True)
class Style:
    """How one kind of widget looks in each interaction state.

    Background sprites are atlas ids. ``background_margin`` is the part of the
    background that is not stretched (borders); ``margin`` is extra room around
    the content that does not affect the background and may be negative.
    """

    background: int | None = None
    background_hovered: int | None = None
    background_clicked: int | None = None
    color: Color = _WHITE
    color_inactive: Color | None = None
    color_hovered: Color = _WHITE
    color_clicked: Color = _WHITE
    color_selected: Color = _WHITE
    color_selected_hovered: Color = _WHITE
    background_margin: RectOffset | None = None
    margin: RectOffset | None = None
    text_color: Color = _BLACK
    text_color_hovered: Color = _BLACK
    text_color_clicked: Color = _BLACK
    font_size: int = 16
    reverse_background_z: bool = False

    def border_margin(self) -> RectOffset:
        """Background margin and content margin added together."""
        background = self.background_margin or RectOffset()
        margin = self.margin or RectOffset()
        return RectOffset(
            left=background.left + margin.left,
            right=background.right + margin.right,
            top=background.top + margin.top,
            bottom=background.bottom + margin.bottom,
        )

    def resolve_text_color(self, element_state: ElementState) -> Color:
        """Text colour for the state; unfocused text is dimmed."""
        if element_state.clicked:
            return self.text_color_clicked
        if element_state.hovered:
            return self.text_color_hovered
        if element_state.focused:
            return self.text_color
        base = self.text_color
        return Color(
            base.r * INACTIVE_TEXT_FACTOR,
            base.g * INACTIVE_TEXT_FACTOR,
            base.b * INACTIVE_TEXT_FACTOR,
            base.a * INACTIVE_TEXT_FACTOR,
        )

    def resolve_color(self, element_state: ElementState) -> Color:
        """Fill colour for the state."""
        if not element_state.focused:
            if self.color_inactive is not None:
                return self.color_inactive
            base = self.color
            return Color.from_rgba(
                _to_byte(base.r * 255.0),
                _to_byte(base.g * 255.0),
                _to_byte(base.b * 255.0),
                _to_byte(base.a * 255.0 * INACTIVE_ALPHA_FACTOR),
            )
        if element_state.clicked:
            return self.color_clicked
        if element_state.selected and element_state.hovered:
            return self.color_selected_hovered
        if element_state.selected:
            return self.color_selected
        if element_state.hovered:
            return self.color_hovered
        return self.color

    def background_sprite(self, element_state: ElementState) -> int | None:
        """Background sprite for the state, falling back to the plain background."""
        if element_state.clicked and self.background_clicked is not None:
            return self.background_clicked
        if element_state.hovered and self.background_hovered is not None:
            return self.background_hovered
        return self.background