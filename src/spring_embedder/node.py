"""
Spring node: a particle with a committed position and a pending displacement.

Each tick the engine calls ``compute_forces`` on every node first and only
then ``commit`` on every node, so a node's force computation always reads
the positions of the previous tick, independent of iteration order.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Iterable, Optional

import numpy as np

from .types import Point
from .validation import validate_spring_constant, validate_weight

if TYPE_CHECKING:
    from .contracts import WeightFunction


class SpringNode:
    """
    Mutable particle positioned by the spring embedder.

    Attributes:
        index: Stable identity (set by the engine when None). Seeds the
            jitter tie-break, so equal indices give equal nudges.
        x: Committed X coordinate
        y: Committed Y coordinate
        dx: Pending X displacement of the current tick
        dy: Pending Y displacement of the current tick

    Only the engine moves nodes; positions change in ``commit`` and
    ``set_position``, both called under the engine's tick lock.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize node with optional properties."""
        self.index: Optional[int] = kwargs.get("index")
        self._x: float = float(kwargs.get("x", 0.0))
        self._y: float = float(kwargs.get("y", 0.0))
        self._dx: float = 0.0
        self._dy: float = 0.0

        # Copy any additional custom properties (labels, domain objects, ...)
        for key, value in kwargs.items():
            if key not in ("index", "x", "y") and not hasattr(self, key):
                setattr(self, key, value)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def x(self) -> float:
        """Get committed X coordinate."""
        return self._x

    @property
    def y(self) -> float:
        """Get committed Y coordinate."""
        return self._y

    @property
    def pos(self) -> Point:
        """Get committed position as (x, y)."""
        return self._x, self._y

    @property
    def dx(self) -> float:
        """Get pending X displacement (zero outside a tick)."""
        return self._dx

    @property
    def dy(self) -> float:
        """Get pending Y displacement (zero outside a tick)."""
        return self._dy

    # -------------------------------------------------------------------------
    # Physics
    # -------------------------------------------------------------------------

    def compute_forces(self, nodes: Iterable[SpringNode], weights: WeightFunction) -> None:
        """
        Accumulate this tick's displacement from all weighted relations.

        For every other node with ``has_weight(self, other)`` the spring
        term ``0.5 * (delta - delta / dist * d)`` is added, where ``delta``
        points from this node to the other and ``d`` is the ideal distance.
        A negative ``d`` marks an exclusion radius ``|d|``: the pair is
        pushed apart inside it, and the pull towards ``|d|`` fades with
        ``exp(-(dist - |d|)^2)`` outside it.

        Relations with exactly coincident nodes have no direction and are
        skipped. If they were the only contributions, the node receives a
        standard-normal nudge seeded from its index instead.

        The sum is scaled by ``weights.spring_constant()`` and added to the
        pending displacement.

        Args:
            nodes: Current node set (may include this node)
            weights: Weight function defining relations

        Raises:
            InvalidWeightError: If a weight or the spring constant is not finite.
        """
        coincident = False
        disp_x = 0.0
        disp_y = 0.0
        for other in nodes:
            if other is self:
                continue
            if not weights.has_weight(self, other):
                continue
            d = validate_weight(weights.weight(self, other), self, other)
            if other._x == self._x and other._y == self._y:
                coincident = True
                continue

            diff_x = other._x - self._x
            diff_y = other._y - self._y
            dist = math.sqrt(diff_x * diff_x + diff_y * diff_y)
            if d >= 0:
                disp_x += (diff_x - diff_x / dist * d) * 0.5
                disp_y += (diff_y - diff_y / dist * d) * 0.5
            else:
                f = 1.0 if dist <= -d else math.exp(-(dist + d) * (dist + d))
                disp_x += (diff_x + diff_x / dist * d) * 0.5 * f
                disp_y += (diff_y + diff_y / dist * d) * 0.5 * f

        if coincident and disp_x == 0.0 and disp_y == 0.0:
            disp_x, disp_y = self.jitter()

        c = validate_spring_constant(weights.spring_constant())
        self._dx += disp_x * c
        self._dy += disp_y * c

    def jitter(self) -> Point:
        """
        Deterministic tie-break vector for this node.

        Drawn from a standard normal distribution seeded from ``index``, so
        the same node gets the same nudge on every run.

        Raises:
            ValueError: If the node has no index yet.
        """
        if self.index is None:
            raise ValueError("Node has no index; assign one before ticking")
        rng = np.random.default_rng(int(self.index) % (1 << 64))
        jx, jy = rng.standard_normal(2)
        return float(jx), float(jy)

    def add_move(self, dx: float, dy: float) -> None:
        """Add to the pending displacement."""
        self._dx += dx
        self._dy += dy

    def commit(self) -> float:
        """
        Apply the pending displacement and reset it to zero.

        Returns:
            Length of the applied displacement.
        """
        dx = self._dx
        dy = self._dy
        self._x += dx
        self._y += dy
        self._dx = 0.0
        self._dy = 0.0
        return math.sqrt(dx * dx + dy * dy)

    def discard(self) -> None:
        """Drop the pending displacement without moving."""
        self._dx = 0.0
        self._dy = 0.0

    def set_position(self, x: float, y: float) -> None:
        """Place the node at (x, y) and clear its pending displacement."""
        self._x = float(x)
        self._y = float(y)
        self._dx = 0.0
        self._dy = 0.0

    def __repr__(self) -> str:
        return f"SpringNode(index={self.index}, x={self._x:.2f}, y={self._y:.2f})"


__all__ = ["SpringNode"]
