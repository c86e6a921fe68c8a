"""
Capability contracts between the engine and its collaborators.

The engine never depends on concrete collaborator types; it only calls the
operations below. All of them run synchronously on the engine's scheduler
thread (or the caller's thread for ``click``/``draw``) while the tick lock
is held, so implementations should be cheap and free of side effects.
``has_weight`` and ``weight`` may be called O(n^2) times per tick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Protocol, runtime_checkable

from .types import Event, Point

if TYPE_CHECKING:
    from .node import SpringNode


@runtime_checkable
class WeightFunction(Protocol):
    """
    Weighting strategy that defines the spring system.

    ``has_weight`` and ``weight`` must agree within one tick. Symmetry is
    not required.
    """

    def nodes(self) -> Iterable[SpringNode]:
        """All nodes taking part in the layout, in a stable order."""
        ...

    def has_weight(self, source: SpringNode, target: SpringNode) -> bool:
        """Whether a relation from source to target exists."""
        ...

    def weight(self, source: SpringNode, target: SpringNode) -> float:
        """Ideal distance of the relation (negative: exclusion radius)."""
        ...

    def spring_constant(self) -> float:
        """Global scale applied to every node's displacement each tick."""
        ...


@runtime_checkable
class HitRegion(Protocol):
    """Anything that answers point containment."""

    def contains(self, point: Point) -> bool: ...


@runtime_checkable
class Renderer(Protocol):
    """
    Draws nodes and defines how they react to clicks.

    Implementations may additionally provide ``tooltip_text(node)``
    returning a string or None; the engine looks it up with ``getattr``.
    """

    def draw_node(self, gfx: Any, node: SpringNode) -> None:
        """Draw one node onto the graphics context."""
        ...

    def click_area(self, node: SpringNode) -> Optional[HitRegion]:
        """Region that counts as a hit on the node, None if not clickable."""
        ...

    def clicked_at(self, node: SpringNode) -> None:
        """Called once for every node hit by a click."""
        ...


Observer = Callable[[Event], None]
"""Refresh subscriber, called with the event payload of each notification."""


__all__ = [
    "WeightFunction",
    "HitRegion",
    "Renderer",
    "Observer",
]
