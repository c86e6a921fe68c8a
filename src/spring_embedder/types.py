"""
Common types for the spring embedder.

This module provides the value types shared across the engine:
- Point: 2D coordinate used for hit testing and drag offsets
- EngineState: Scheduler lifecycle states
- EventType: Observer notification kinds
- Event: Event payload for observers
- Link: Relation between two nodes with an ideal length
- LayoutSnapshot: Immutable view of all positions after a tick
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Sequence, TypedDict, Union

import numpy as np

from .validation import ValidationError

Point = tuple[float, float]
"""A 2D point as (x, y)."""


class EngineState(IntEnum):
    """
    Engine lifecycle states.

    - created: Constructed, scheduler not started
    - running: Scheduler thread is advancing the simulation
    - disposed: Terminal; no further ticks or notifications
    """

    created = 0
    running = 1
    disposed = 2


class EventType(IntEnum):
    """
    Observer notification kinds.

    - tick: Fired once per simulation step
    - refresh: Fired when positions change outside a tick (dragging)
    """

    tick = 1
    refresh = 2


class Event(TypedDict, total=False):
    """Event payload passed to observers."""

    type: EventType
    tick: int
    movement: float


class Link:
    """
    Relation connecting two nodes.

    Attributes:
        source: Source node or position in the node list
        target: Target node or position in the node list
        length: Ideal distance (optional, falls back to a default)
    """

    def __init__(
        self,
        source: Union[int, Any],
        target: Union[int, Any],
        length: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize link between two nodes.

        Args:
            source: Source node or its position in the node list (required)
            target: Target node or its position in the node list (required)
            length: Ideal distance (optional)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.source = source
        self.target = target
        self.length = length

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Link({_endpoint_label(self.source)} -> {_endpoint_label(self.target)})"


@dataclass(frozen=True, eq=False)
class LayoutSnapshot:
    """
    Positions of every node as of the end of one tick.

    The positions array is read-only; a new snapshot is published after
    every tick instead of mutating this one.

    Raises:
        ValidationError: If an index appears twice or the number of
            positions does not match the number of indices.

    Attributes:
        tick: Number of ticks completed when the snapshot was taken
        indices: Node indices, in the order of ``positions`` rows
        positions: (n, 2) float64 array of committed positions
    """

    tick: int
    indices: tuple[int, ...]
    positions: np.ndarray
    _rows: dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions = np.array(self.positions, dtype=np.float64).reshape(-1, 2)
        rows = {idx: row for row, idx in enumerate(self.indices)}
        if len(rows) != len(self.indices):
            dupes = sorted(idx for idx, count in Counter(self.indices).items() if count > 1)
            raise ValidationError(f"Duplicate node indices in snapshot: {dupes}")
        if len(positions) != len(self.indices):
            raise ValidationError(
                f"Snapshot has {len(self.indices)} indices but {len(positions)} positions"
            )
        positions.flags.writeable = False
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "_rows", rows)

    @classmethod
    def empty(cls) -> LayoutSnapshot:
        """Snapshot with no nodes, taken before the first tick."""
        return cls(tick=0, indices=(), positions=np.zeros((0, 2)))

    @classmethod
    def capture(cls, tick: int, nodes: Sequence[Any]) -> LayoutSnapshot:
        """Copy the committed positions of ``nodes``."""
        indices = tuple(int(n.index) for n in nodes)
        positions = np.array([(n.x, n.y) for n in nodes], dtype=np.float64)
        return cls(tick=tick, indices=indices, positions=positions)

    def __len__(self) -> int:
        return len(self.indices)

    def position_of(self, index: int) -> Point:
        """
        Get the position of the node with the given index.

        Raises:
            KeyError: If no node with this index is part of the snapshot.
        """
        row = self._rows[index]
        return float(self.positions[row, 0]), float(self.positions[row, 1])

    def centroid(self) -> Point:
        """Mean position of all nodes, (0, 0) when empty."""
        if not self.indices:
            return 0.0, 0.0
        cx, cy = self.positions.mean(axis=0)
        return float(cx), float(cy)

    def bounding_box(self) -> Optional[tuple[float, float, float, float]]:
        """(min_x, min_y, max_x, max_y) of all positions, None when empty."""
        if not self.indices:
            return None
        min_x, min_y = self.positions.min(axis=0)
        max_x, max_y = self.positions.max(axis=0)
        return float(min_x), float(min_y), float(max_x), float(max_y)


def _endpoint_label(endpoint: Any) -> Any:
    """Index of a node endpoint, or the position itself."""
    if isinstance(endpoint, int):
        return endpoint
    return getattr(endpoint, "index", endpoint)


__all__ = [
    "Point",
    "EngineState",
    "EventType",
    "Event",
    "Link",
    "LayoutSnapshot",
]
