"""
Hit regions for renderers.

Simple containment shapes a ``Renderer.click_area`` can return. Any object
with a ``contains(point)`` method works as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .types import Point


@dataclass(frozen=True)
class Circle:
    """Disc around (x, y); the boundary counts as inside."""

    x: float
    y: float
    radius: float

    def contains(self, point: Point) -> bool:
        dx = point[0] - self.x
        dy = point[1] - self.y
        return dx * dx + dy * dy <= self.radius * self.radius

    @classmethod
    def around(cls, node: Any, radius: float) -> Circle:
        """Disc centered on a node's committed position."""
        return cls(node.x, node.y, radius)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle.

    Attributes:
        x, y: Top-left corner
        width, height: Extent (non-negative)
    """

    x: float
    y: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        px, py = point
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> Rectangle:
        """Rectangle of the given size centered on (cx, cy)."""
        return cls(cx - width / 2, cy - height / 2, width, height)


__all__ = ["Circle", "Rectangle"]
