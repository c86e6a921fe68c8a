"""
spring-embedder: A continuously running force-directed layout engine.

Nodes are positioned by springs whose rest lengths come from a pluggable
weight function, while a background scheduler advances the simulation at a
fixed tick rate and observers are notified after every tick.

Main components:
- LayoutEngine: Scheduler and two-phase tick protocol
- SpringNode: Particle with committed position and pending displacement
- WeightFunction / Renderer: Capability contracts for collaborators
- weights: Ready-made weight functions (chain, ring, links, matrix)
- export: SVG rendering of a layout
"""

import logging

__version__ = "0.1.0"

# Base classes and engine
from .base import DEFAULT_TICK_RATE, MIN_TICK_INTERVAL, AnimatedLayout

# Capability contracts
from .contracts import HitRegion, Observer, Renderer, WeightFunction
from .engine import LayoutEngine

# Metrics for layout quality evaluation
from .metrics import centroid, max_displacement, stress
from .node import SpringNode

# Hit regions
from .shapes import Circle, Rectangle
from .types import (
    EngineState,
    Event,
    EventType,
    LayoutSnapshot,
    Link,
    Point,
)

# Validation utilities
from .validation import (
    EngineDisposedError,
    InvalidTickRateError,
    InvalidWeightError,
    ValidationError,
    validate_spring_constant,
    validate_tick_rate,
    validate_weight,
)

# Weight functions
from .weights import (
    ChainWeights,
    IndexedWeights,
    LinkWeights,
    MatrixWeights,
    RingWeights,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Point",
    "EngineState",
    "EventType",
    "Event",
    "Link",
    "LayoutSnapshot",
    # Nodes
    "SpringNode",
    # Contracts
    "WeightFunction",
    "Renderer",
    "HitRegion",
    "Observer",
    # Engines
    "AnimatedLayout",
    "LayoutEngine",
    "DEFAULT_TICK_RATE",
    "MIN_TICK_INTERVAL",
    # Hit regions
    "Circle",
    "Rectangle",
    # Weight functions
    "IndexedWeights",
    "ChainWeights",
    "RingWeights",
    "LinkWeights",
    "MatrixWeights",
    # Metrics
    "stress",
    "centroid",
    "max_displacement",
    # Validation
    "ValidationError",
    "InvalidWeightError",
    "InvalidTickRateError",
    "EngineDisposedError",
    "validate_weight",
    "validate_spring_constant",
    "validate_tick_rate",
]
