"""
Base class for continuously animated layouts.

This module provides the infrastructure shared by animated layouts:

- AnimatedLayout: Background scheduler, observer registry, snapshot
  publishing, hit testing, drawing fan-out and node dragging.

Subclasses supply the node set and one simulation step; everything that
touches node positions runs under a single re-entrant tick lock, so readers
going through the engine never see a half-committed tick. Readers that do
not want to take the lock use ``snapshot``, which is replaced atomically at
the end of every tick.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .contracts import Observer, Renderer
from .node import SpringNode
from .types import EngineState, Event, EventType, LayoutSnapshot, Point
from .validation import EngineDisposedError, ValidationError, validate_tick_rate

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 60.0
"""Target number of ticks per second."""

MIN_TICK_INTERVAL = 0.001
"""Shortest wait between two ticks, in seconds."""

# Seconds dispose() waits for the scheduler thread to exit.
_JOIN_TIMEOUT = 1.0


class AnimatedLayout(ABC):
    """
    Abstract base class for layouts driven by a background scheduler.

    Lifecycle: ``created`` -> ``running`` -> ``disposed``. With
    ``autostart=True`` the scheduler is started by the constructor. Without
    it the layout can be advanced synchronously with ``tick()``, which is
    also how tests get reproducible runs.

    Example:
        engine = SomeLayout(renderer=renderer)
        engine.subscribe(lambda event: canvas.refresh())
        ...
        engine.dispose()
    """

    def __init__(
        self,
        *,
        renderer: Renderer,
        tick_rate: float = DEFAULT_TICK_RATE,
        autostart: bool = True,
        on_tick: Optional[Observer] = None,
    ) -> None:
        """
        Initialize the layout and optionally start its scheduler.

        Subclasses must set up everything ``nodes()`` needs before calling
        this constructor.

        Args:
            renderer: Draws nodes and receives click notifications
            tick_rate: Ticks per second (positive)
            autostart: Start the scheduler immediately
            on_tick: Observer subscribed before the first tick

        Raises:
            InvalidTickRateError: If tick_rate is not positive and finite.
            ValidationError: If two nodes carry the same index.
        """
        self._renderer = renderer
        self._tick_rate: float = validate_tick_rate(tick_rate)

        self._lock = threading.RLock()
        self._observer_lock = threading.RLock()
        self._state_lock = threading.Lock()
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._state: EngineState = EngineState.created

        self._observers: list[Observer] = []
        self._impulses: list[tuple[SpringNode, float, float]] = []
        self._dragged: list[tuple[SpringNode, float, float]] = []
        self._tick_count: int = 0
        self._error: Optional[BaseException] = None
        self._snapshot: LayoutSnapshot = LayoutSnapshot.capture(0, self._prepare_nodes())

        if on_tick is not None:
            self._observers.append(on_tick)
        if autostart:
            self.start()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def renderer(self) -> Renderer:
        """Get the renderer."""
        return self._renderer

    @property
    def state(self) -> EngineState:
        """Get lifecycle state."""
        return self._state

    @property
    def is_disposed(self) -> bool:
        """Whether dispose() has been called."""
        return self._state is EngineState.disposed

    @property
    def tick_rate(self) -> float:
        """Get target ticks per second."""
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        """Set target ticks per second; takes effect at the next wait."""
        self._tick_rate = validate_tick_rate(value)

    @property
    def tick_interval(self) -> float:
        """Seconds between two ticks, never below MIN_TICK_INTERVAL."""
        return max(1.0 / self._tick_rate, MIN_TICK_INTERVAL)

    @property
    def tick_count(self) -> int:
        """Number of completed ticks."""
        return self._tick_count

    @property
    def snapshot(self) -> LayoutSnapshot:
        """Positions published at the end of the last tick."""
        return self._snapshot

    @property
    def error(self) -> Optional[BaseException]:
        """Exception that stopped the scheduler, if any."""
        return self._error

    @property
    def observers(self) -> tuple[Observer, ...]:
        """Currently registered observers, in notification order."""
        with self._observer_lock:
            return tuple(self._observers)

    # -------------------------------------------------------------------------
    # Abstract Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def nodes(self) -> list[SpringNode]:
        """Current node set, in a stable order."""
        pass

    @abstractmethod
    def step(self, nodes: Sequence[SpringNode]) -> float:
        """
        Advance the simulation by one tick.

        Called with the tick lock held. Implementations must either commit
        every node or leave every node untouched.

        Returns:
            Total distance moved by all nodes.
        """
        pass

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def start(self) -> Self:
        """
        Start the background scheduler.

        Does nothing when already running.

        Returns:
            self (for chaining)

        Raises:
            EngineDisposedError: If the layout has been disposed.
        """
        with self._state_lock:
            if self._state is EngineState.disposed:
                raise EngineDisposedError("object already disposed")
            if self._state is EngineState.running:
                return self
            self._state = EngineState.running
            self._thread = threading.Thread(
                target=self._run, name=f"{type(self).__name__}-scheduler", daemon=True
            )
            self._thread.start()
        return self

    def tick(self) -> bool:
        """
        Run one tick on the calling thread and notify observers.

        Returns:
            False if the layout is disposed and nothing happened, else True.
        """
        with self._lock:
            if self._state is EngineState.disposed:
                return False
            nodes = self._prepare_nodes()
            movement = self.step(nodes)
            self._tick_count += 1
            self._snapshot = LayoutSnapshot.capture(self._tick_count, nodes)
            event: Event = {"type": EventType.tick, "tick": self._tick_count, "movement": movement}
        self._notify(event)
        return True

    def run(self, ticks: int) -> Self:
        """Run ``ticks`` synchronous ticks (stops early once disposed)."""
        for _ in range(ticks):
            if not self.tick():
                break
        return self

    def force_next_frame(self) -> None:
        """Wake the scheduler so the next tick starts without waiting."""
        self._wake.set()

    def dispose(self) -> None:
        """
        Stop the scheduler and release all observers.

        A tick in progress on another thread is allowed to finish; no tick
        or notification happens after this returns. Calling it again is a
        no-op.
        """
        with self._state_lock:
            if self._state is EngineState.disposed:
                return
            self._state = EngineState.disposed
        self._stop.set()
        self._wake.set()
        with self._lock:
            self._impulses.clear()
            self._dragged.clear()
        with self._observer_lock:
            self._observers.clear()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=_JOIN_TIMEOUT)
        logger.debug("%s disposed after %d ticks", type(self).__name__, self._tick_count)

    def _run(self) -> None:  # pragma: no cover - thread loop
        logger.debug("Scheduler started at %.1f ticks/s", self._tick_rate)
        try:
            while not self._stop.is_set():
                self._wake.wait(self.tick_interval)
                self._wake.clear()
                if self._stop.is_set():
                    break
                self.tick()
        except Exception as exc:
            self._error = exc
            logger.exception("Scheduler stopped after a failed tick")
        finally:
            self.dispose()

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> None:
        """
        Register an observer notified after every tick.

        The same observer may be registered more than once and is then
        called once per registration.

        Raises:
            EngineDisposedError: If the layout has been disposed.
        """
        with self._observer_lock:
            if self.is_disposed:
                raise EngineDisposedError("object already disposed")
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> bool:
        """Remove the first registration of an observer; False if absent."""
        with self._observer_lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                return False
            return True

    def refresh_all(self) -> None:
        """Notify observers that positions changed outside a tick."""
        self._notify({"type": EventType.refresh, "tick": self._tick_count})

    def _notify(self, event: Event) -> None:
        with self._observer_lock:
            for observer in list(self._observers):
                if self._stop.is_set():
                    return
                try:
                    observer(event)
                except Exception:
                    logger.exception("Observer %r failed", observer)

    # -------------------------------------------------------------------------
    # Rendering and Interaction
    # -------------------------------------------------------------------------

    def draw(self, gfx: Any, renderer: Optional[Renderer] = None) -> None:
        """
        Draw every node under the tick lock.

        Args:
            gfx: Graphics context handed to ``draw_node``
            renderer: Renderer to draw with instead of the layout's own
        """
        renderer = renderer if renderer is not None else self._renderer
        with self._lock:
            for node in self.nodes():
                renderer.draw_node(gfx, node)

    def click(self, point: Point) -> bool:
        """
        Notify the renderer about every node whose click area contains point.

        Every node is tested, so overlapping nodes are all notified.

        Returns:
            True if at least one node was hit.
        """
        accepted = False
        with self._lock:
            for node in self.nodes():
                area = self._renderer.click_area(node)
                if area is None:
                    continue
                if area.contains(point):
                    self._renderer.clicked_at(node)
                    accepted = True
        return accepted

    def tooltip(self, point: Point) -> Optional[str]:
        """Tooltip text of the last hit node that provides one."""
        text_of = getattr(self._renderer, "tooltip_text", None)
        if text_of is None:
            return None
        text = None
        with self._lock:
            for node in self.nodes():
                area = self._renderer.click_area(node)
                if area is None or not area.contains(point):
                    continue
                node_text = text_of(node)
                if node_text is not None:
                    text = node_text
        return text

    def accept_drag(self, point: Point) -> bool:
        """
        Start dragging every node under point.

        Returns:
            True if at least one node was picked up.
        """
        with self._lock:
            self._dragged = []
            for node in self.nodes():
                area = self._renderer.click_area(node)
                if area is not None and area.contains(point):
                    self._dragged.append((node, node.x, node.y))
            return bool(self._dragged)

    def drag(self, dx: float, dy: float) -> None:
        """Move dragged nodes to their start position offset by (dx, dy)."""
        with self._lock:
            if not self._dragged:
                return
            for node, x, y in self._dragged:
                node.set_position(x + dx, y + dy)
            self._snapshot = LayoutSnapshot.capture(self._tick_count, self._prepare_nodes())
        self.refresh_all()

    def end_drag(self) -> None:
        """Release all dragged nodes."""
        with self._lock:
            self._dragged = []

    def nudge(self, node: SpringNode, dx: float, dy: float) -> None:
        """Queue a displacement applied to node during the next tick."""
        with self._lock:
            if not self.is_disposed:
                self._impulses.append((node, float(dx), float(dy)))

    def bounding_box(self) -> Optional[tuple[float, float, float, float]]:
        """(min_x, min_y, max_x, max_y) of the last published positions."""
        return self._snapshot.bounding_box()

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _prepare_nodes(self) -> list[SpringNode]:
        """
        Fetch the node set and assign indices to nodes without one.

        Missing indices are filled with the smallest values no other node
        holds, in node order.

        Raises:
            ValidationError: If two nodes carry the same index.
        """
        nodes = self.nodes()
        taken: set[int] = set()
        for node in nodes:
            if node.index is None:
                continue
            if node.index in taken:
                raise ValidationError(f"Duplicate node index: {node.index}")
            taken.add(node.index)

        free = 0
        for node in nodes:
            if node.index is not None:
                continue
            while free in taken:
                free += 1
            node.index = free
            taken.add(free)
        return nodes

    def _apply_impulses(self, nodes: Sequence[SpringNode]) -> None:
        """Add queued nudges to the pending displacement of current nodes."""
        if not self._impulses:
            return
        current = {id(node) for node in nodes}
        for node, dx, dy in self._impulses:
            if id(node) in current:
                node.add_move(dx, dy)
        self._impulses.clear()


__all__ = [
    "AnimatedLayout",
    "DEFAULT_TICK_RATE",
    "MIN_TICK_INTERVAL",
]
