"""Small value types for 2D geometry and colours."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """A 2D vector or point."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, factor: float) -> Vec2:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def distance(self, other: Vec2) -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def point(self) -> Vec2:
        """Top-left corner."""
        return Vec2(self.x, self.y)

    def size(self) -> Vec2:
        """Width and height as a vector."""
        return Vec2(self.w, self.h)

    def contains(self, point: Vec2) -> bool:
        """True if the point lies inside; the right and bottom edges are excluded."""
        return self.left <= point.x < self.right and self.top <= point.y < self.bottom

    def overlaps(self, other: Rect) -> bool:
        """True if the two rectangles overlap or touch."""
        return (
            self.left <= other.right
            and self.right >= other.left
            and self.top <= other.bottom
            and self.bottom >= other.top
        )

    def intersect(self, other: Rect) -> Rect | None:
        """The common part of both rectangles, or None if they are disjoint."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right < left or bottom < top:
            return None
        return Rect(left, top, right - left, bottom - top)

    def combine_with(self, other: Rect) -> Rect:
        """The smallest rectangle that holds both rectangles."""
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        w = max(self.right, other.right) - x
        h = max(self.bottom, other.bottom) - y
        return Rect(x, y, w, h)

    def offset(self, offset: Vec2) -> Rect:
        """The same rectangle moved by ``offset``."""
        return Rect(self.x + offset.x, self.y + offset.y, self.w, self.h)


@dataclass(frozen=True)
class RectOffset:
    """Distances from each side of a rectangle."""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in the range 0..1."""

    r: float
    g: float
    b: float
    a: float

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int) -> Color:
        """Build a colour from 0..255 byte components."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)