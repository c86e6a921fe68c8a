"""
Layout quality metrics.

Provides quantitative measures of a spring layout:
- Stress: How well distances match the weight function's ideal distances
- Centroid: Mean node position (the drift the engine cancels)
- Max displacement: Largest per-node movement between two snapshots

All metrics work with committed node positions from any engine state.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .contracts import WeightFunction
from .node import SpringNode
from .types import LayoutSnapshot, Point


def stress(nodes: Sequence[SpringNode], weights: WeightFunction) -> float:
    """
    Compute the stress value of the layout.

    Stress measures how well actual pairwise distances match ideal distances:
    stress = sum_ij (w_ij * (d_ij - D_ij)^2) / sum_ij (w_ij * D_ij^2)

    where d_ij is actual distance, D_ij is the ideal distance of every
    ordered pair with ``has_weight(i, j)`` and D_ij > 0, and
    w_ij = 1/D_ij^2 (weight).

    Args:
        nodes: List of positioned nodes
        weights: Weight function defining ideal distances

    Returns:
        Normalized stress value (0 = perfect, higher = worse)
    """
    numerator = 0.0
    denominator = 0.0

    for a in nodes:
        for b in nodes:
            if a is b or not weights.has_weight(a, b):
                continue
            ideal_d = float(weights.weight(a, b))
            if ideal_d <= 0 or not math.isfinite(ideal_d):
                continue

            dx = a.x - b.x
            dy = a.y - b.y
            actual_d = math.sqrt(dx * dx + dy * dy)

            w_ij = 1.0 / (ideal_d * ideal_d)
            diff = actual_d - ideal_d
            numerator += w_ij * diff * diff
            denominator += w_ij * ideal_d * ideal_d

    if denominator == 0:
        return 0.0

    return numerator / denominator


def centroid(nodes: Sequence[SpringNode]) -> Point:
    """Mean committed position, (0, 0) for no nodes."""
    if not nodes:
        return 0.0, 0.0
    return (
        math.fsum(n.x for n in nodes) / len(nodes),
        math.fsum(n.y for n in nodes) / len(nodes),
    )


def max_displacement(before: LayoutSnapshot, after: LayoutSnapshot) -> float:
    """
    Largest distance any node moved between two snapshots.

    Only nodes present in both snapshots are compared.
    """
    known = set(before.indices)
    common = [idx for idx in after.indices if idx in known]
    if not common:
        return 0.0
    a = np.array([before.position_of(idx) for idx in common])
    b = np.array([after.position_of(idx) for idx in common])
    return float(np.max(np.hypot(b[:, 0] - a[:, 0], b[:, 1] - a[:, 1])))


__all__ = [
    "stress",
    "centroid",
    "max_displacement",
]
