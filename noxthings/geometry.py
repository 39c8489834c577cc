"""Plain geometric value types: integer and float points and rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """An integer point."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Pointf:
    """A floating point position."""

    x: float = 0.0
    y: float = 0.0

    def point(self) -> Point:
        """Convert to an integer point, truncating towards zero."""
        return Point(int(self.x), int(self.y))

    def add(self, other: Pointf) -> Pointf:
        return Pointf(self.x + other.x, self.y + other.y)

    def sub(self, other: Pointf) -> Pointf:
        return Pointf(self.x - other.x, self.y - other.y)

    def mul(self, v: float) -> Pointf:
        return Pointf(self.x * v, self.y * v)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)


def point2f(p: Point) -> Pointf:
    """Convert an integer point to a float point."""
    return Pointf(float(p.x), float(p.y))


@dataclass(frozen=True)
class Rect:
    """An integer rectangle given by its edges."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    def is_empty(self) -> bool:
        return self.right <= self.left or self.bottom <= self.top


@dataclass(frozen=True)
class Rectf:
    """A float rectangle given by its edges."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def is_empty(self) -> bool:
        return self.right <= self.left or self.bottom <= self.top


def rect_from_pointsf(p1: Pointf, p2: Pointf) -> Rectf:
    """Build the rectangle spanned by two opposite corners."""
    left, right = (p2.x, p1.x) if p1.x >= p2.x else (p1.x, p2.x)
    top, bottom = (p2.y, p1.y) if p1.y >= p2.y else (p1.y, p2.y)
    return Rectf(left=left, top=top, right=right, bottom=bottom)


def intersect_rects(r1: Rect, r2: Rect) -> Rect | None:
    """Return the intersection of two rectangles, or None if it is empty."""
    left = max(r1.left, r2.left)
    right = min(r1.right, r2.right)
    if left >= right:
        return None
    top = max(r1.top, r2.top)
    bottom = min(r1.bottom, r2.bottom)
    if top >= bottom:
        return None
    return Rect(left=left, top=top, right=right, bottom=bottom)