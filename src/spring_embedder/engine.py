"""
Spring embedder layout engine.

Positions nodes by simulating springs between every pair the weight
function relates. Each tick runs in two phases:

1. every node computes its displacement from the positions of the previous
   tick (``SpringNode.compute_forces``);
2. a centroid correction cancels the net drift of the whole layout, then
   every node commits.

Because no position changes before all forces are known, the result does
not depend on the order in which nodes are visited. Force computation per
node is independent and could be spread over workers; it is kept on the
scheduler thread so commits stay ordered relative to readers.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .base import DEFAULT_TICK_RATE, AnimatedLayout
from .contracts import Observer, Renderer, WeightFunction
from .node import SpringNode


class LayoutEngine(AnimatedLayout):
    """
    Force-directed spring embedder.

    The node set is owned by the weight function and re-read every tick.
    The scheduler starts as soon as the engine is constructed unless
    ``autostart=False`` is passed.

    Example:
        weights = ChainWeights([SpringNode() for _ in range(10)], unit=17)
        engine = LayoutEngine(weights, renderer)
        engine.subscribe(lambda event: canvas.refresh())
        ...
        engine.dispose()

        # Deterministic, synchronous use
        engine = LayoutEngine(weights, renderer, autostart=False)
        engine.run(500)
    """

    def __init__(
        self,
        weights: WeightFunction,
        renderer: Renderer,
        *,
        tick_rate: float = DEFAULT_TICK_RATE,
        correct_movement: bool = True,
        autostart: bool = True,
        on_tick: Optional[Observer] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            weights: Weight function supplying nodes and relations
            renderer: Draws nodes and receives click notifications
            tick_rate: Ticks per second (positive)
            correct_movement: Cancel the net drift of the layout every tick
            autostart: Start the scheduler immediately
            on_tick: Observer subscribed before the first tick
        """
        self._weights = weights
        self._correct_movement: bool = bool(correct_movement)
        super().__init__(
            renderer=renderer,
            tick_rate=tick_rate,
            autostart=autostart,
            on_tick=on_tick,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def weights(self) -> WeightFunction:
        """Get the weight function."""
        return self._weights

    @property
    def correct_movement(self) -> bool:
        """Get whether the centroid correction is applied."""
        return self._correct_movement

    @correct_movement.setter
    def correct_movement(self, value: bool) -> None:
        """Enable/disable the centroid correction."""
        self._correct_movement = bool(value)

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def nodes(self) -> list[SpringNode]:
        return list(self._weights.nodes())

    def step(self, nodes: Sequence[SpringNode]) -> float:
        """
        Compute, correct and commit one tick.

        If the weight function fails, every pending displacement is dropped
        before the error propagates, so no node moves.

        Returns:
            Total distance moved by all nodes.
        """
        try:
            for node in nodes:
                node.compute_forces(nodes, self._weights)
            self._apply_impulses(nodes)
        except Exception:
            for node in nodes:
                node.discard()
            raise

        if self._correct_movement and nodes:
            mx, my = self.correction(nodes)
            for node in nodes:
                node.add_move(mx, my)

        return sum(node.commit() for node in nodes)

    @staticmethod
    def correction(nodes: Sequence[SpringNode]) -> tuple[float, float]:
        """
        Displacement that cancels the mean pending displacement.

        Returns (0, 0) for an empty node set.
        """
        m = len(nodes)
        if m == 0:
            return 0.0, 0.0
        mx = 0.0
        my = 0.0
        for node in nodes:
            mx += node.dx
            my += node.dy
        return -mx / m, -my / m


__all__ = ["LayoutEngine"]
