"""Turn drawing primitives into a list of draw commands, honouring a clip zone."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Union

from quadkit.geometry import Color, Rect, RectOffset, Vec2


@dataclass(frozen=True)
class ElementState:
    """Interaction state of a widget, used to pick colours and sprites."""

    focused: bool = False
    hovered: bool = False
    clicked: bool = False
    selected: bool = False


@dataclass(frozen=True)
class DrawCharacter:
    dest: Rect
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> DrawCharacter:
        return DrawCharacter(self.dest.offset(offset), self.source, self.color)


@dataclass(frozen=True)
class DrawRect:
    rect: Rect
    source: Rect
    fill: Color | None = None
    stroke: Color | None = None

    def offset(self, offset: Vec2) -> DrawRect:
        return DrawRect(self.rect.offset(offset), self.source, self.fill, self.stroke)


@dataclass(frozen=True)
class DrawSprite:
    rect: Rect
    source: Rect
    color: Color
    offsets: RectOffset | None = None
    offsets_uv: RectOffset | None = None

    def offset(self, offset: Vec2) -> DrawSprite:
        return DrawSprite(
            self.rect.offset(offset), self.source, self.color, self.offsets, self.offsets_uv
        )


@dataclass(frozen=True)
class DrawTriangle:
    p0: Vec2
    p1: Vec2
    p2: Vec2
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> DrawTriangle:
        return DrawTriangle(
            self.p0 + offset, self.p1 + offset, self.p2 + offset, self.source, self.color
        )


@dataclass(frozen=True)
class DrawLine:
    start: Vec2
    end: Vec2
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> DrawLine:
        return DrawLine(self.start + offset, self.end + offset, self.source, self.color)


@dataclass(frozen=True)
class DrawRawTexture:
    rect: Rect
    texture: Any

    def offset(self, offset: Vec2) -> DrawRawTexture:
        return DrawRawTexture(self.rect.offset(offset), self.texture)


@dataclass(frozen=True)
class Clip:
    rect: Rect | None = None

    def offset(self, offset: Vec2) -> Clip:
        return Clip(None if self.rect is None else self.rect.offset(offset))


DrawCommand = Union[
    DrawCharacter, DrawRect, DrawSprite, DrawTriangle, DrawLine, DrawRawTexture, Clip
]

_BUDGETED = (DrawCharacter, DrawRawTexture, DrawRect, DrawLine, DrawTriangle)


def estimate_triangles_budget(command: DrawCommand) -> tuple[int, int]:
    """Rough (vertices, indices) cost of a command, used to split draw lists."""
    if isinstance(command, _BUDGETED):
        return (10, 10)
    return (0, 0)


class Alignment(Enum):
    LEFT = auto()
    CENTER = auto()


@dataclass(frozen=True)
class LabelParams:
    color: Color = Color(0.0, 0.0, 0.0, 1.0)
    alignment: Alignment = Alignment.LEFT


@dataclass
class Painter:
    """Collects draw commands, dropping those that fall outside the clip zone.

    ``white_source`` is the atlas UV rect of a plain white pixel, used for
    untextured shapes; ``atlas_size`` converts sprite margins to UV units;
    ``dpi_scale`` scales clip rectangles into physical pixels.
    """

    white_source: Rect = Rect(0.0, 0.0, 0.0, 0.0)
    atlas_size: tuple[float, float] = (1.0, 1.0)
    dpi_scale: float = 1.0
    commands: list[DrawCommand] = field(default_factory=list)
    clipping_zone: Rect | None = None

    def clear(self) -> None:
        self.commands.clear()
        self.clipping_zone = None

    def _outside(self, rect: Rect) -> bool:
        return self.clipping_zone is not None and not self.clipping_zone.overlaps(rect)

    def _none_inside(self, *points: Vec2) -> bool:
        zone = self.clipping_zone
        return zone is not None and not any(zone.contains(p) for p in points)

    def draw_raw_texture(self, rect: Rect, texture: Any) -> None:
        if self._outside(rect):
            return
        self.commands.append(DrawRawTexture(rect, texture))

    def draw_rect(self, rect: Rect, stroke: Color | None, fill: Color | None) -> None:
        if self._outside(rect):
            return
        self.commands.append(DrawRect(rect, self.white_source, fill=fill, stroke=stroke))

    def draw_sprite(
        self, rect: Rect, source: Rect, color: Color, margin: RectOffset | None
    ) -> None:
        """Draw a nine-patch sprite whose atlas UV rect is ``source``."""
        if self._outside(rect):
            return
        offsets_uv = None
        if margin is not None:
            width, height = self.atlas_size
            offsets_uv = RectOffset(
                left=margin.left / width,
                right=margin.right / width,
                top=margin.top / height,
                bottom=margin.bottom / height,
            )
        self.commands.append(DrawSprite(rect, source, color, margin, offsets_uv))

    def draw_triangle(self, p0: Vec2, p1: Vec2, p2: Vec2, color: Color) -> None:
        if self._none_inside(p0, p1, p2):
            return
        self.commands.append(DrawTriangle(p0, p1, p2, self.white_source, color))

    def draw_line(self, start: Vec2, end: Vec2, color: Color) -> None:
        if self._none_inside(start, end):
            return
        self.commands.append(DrawLine(start, end, self.white_source, color))

    def clip(self, rect: Rect | None) -> None:
        """Narrow the clip zone to ``rect`` (or clear it with None) and record it."""
        if rect is None:
            self.clipping_zone = None
        else:
            narrowed = None
            if self.clipping_zone is not None:
                narrowed = self.clipping_zone.intersect(rect)
            self.clipping_zone = narrowed if narrowed is not None else rect

        scaled = None
        if self.clipping_zone is not None:
            zone, dpi = self.clipping_zone, self.dpi_scale
            scaled = Rect(zone.x * dpi, zone.y * dpi, zone.w * dpi, zone.h * dpi)
        self.commands.append(Clip(scaled))