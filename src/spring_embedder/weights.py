"""
Ready-made weight functions.

Each strategy owns a fixed list of nodes and defines relations by the
nodes' positions in that list:

- ChainWeights: Nodes on a line, related to their neighbours
- RingWeights: Nodes on a closed ring
- LinkWeights: Relations given as Link objects
- MatrixWeights: Dense matrix of ideal distances
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence

import numpy as np

from .node import SpringNode
from .types import Link
from .validation import ValidationError


class IndexedWeights(ABC):
    """
    Shared base for weight functions over a fixed node list.

    Attributes:
        spring_constant: Global displacement scale (see ``spring_constant()``)
    """

    def __init__(self, nodes: Iterable[SpringNode], spring_constant: float = 0.75) -> None:
        self._nodes: list[SpringNode] = list(nodes)
        self._positions: dict[int, int] = {id(node): i for i, node in enumerate(self._nodes)}
        self._spring_constant = float(spring_constant)

    def nodes(self) -> list[SpringNode]:
        return self._nodes

    def spring_constant(self) -> float:
        return self._spring_constant

    def position(self, node: SpringNode) -> int:
        """Position of node in the node list."""
        return self._positions[id(node)]

    @abstractmethod
    def has_weight(self, source: SpringNode, target: SpringNode) -> bool:
        """Whether a relation from source to target exists."""
        pass

    @abstractmethod
    def weight(self, source: SpringNode, target: SpringNode) -> float:
        """Ideal distance from source to target."""
        pass

    def __len__(self) -> int:
        return len(self._nodes)


class ChainWeights(IndexedWeights):
    """
    Nodes laid out as a chain.

    Nodes up to ``reach`` positions apart are related, with an ideal
    distance proportional to how far apart they are in the list.

    Example:
        weights = ChainWeights([SpringNode() for _ in range(3)], unit=17,
                               spring_constant=0.9)
    """

    def __init__(
        self,
        nodes: Iterable[SpringNode],
        *,
        unit: float = 17.0,
        reach: int = 1,
        spring_constant: float = 0.75,
    ) -> None:
        """
        Args:
            nodes: Nodes in chain order
            unit: Ideal distance between direct neighbours
            reach: Largest position difference that still forms a relation
            spring_constant: Global displacement scale
        """
        super().__init__(nodes, spring_constant)
        self.unit = float(unit)
        self.reach = max(1, int(reach))

    def has_weight(self, source: SpringNode, target: SpringNode) -> bool:
        gap = abs(self.position(source) - self.position(target))
        return 0 < gap <= self.reach

    def weight(self, source: SpringNode, target: SpringNode) -> float:
        return abs(self.position(source) - self.position(target)) * self.unit


class RingWeights(IndexedWeights):
    """Nodes on a closed ring; each node is related to both ring neighbours."""

    def __init__(
        self,
        nodes: Iterable[SpringNode],
        *,
        distance: float = 5.0,
        spring_constant: float = 0.75,
    ) -> None:
        super().__init__(nodes, spring_constant)
        self.distance = float(distance)

    def has_weight(self, source: SpringNode, target: SpringNode) -> bool:
        n = len(self._nodes)
        if n < 2:
            return False
        gap = abs(self.position(source) - self.position(target))
        return gap == 1 or gap == n - 1

    def weight(self, source: SpringNode, target: SpringNode) -> float:
        return self.distance


class LinkWeights(IndexedWeights):
    """
    Relations given as links between nodes.

    Link endpoints are node objects from the node list or positions in it.
    A node's ``index`` plays no part in resolving it.

    Links without a length use ``default_length``. Unless ``directed`` is
    set, every link relates both endpoints.

    Example:
        weights = LinkWeights(
            nodes,
            [Link(0, 1, length=50), Link(1, 2)],
            default_length=100,
        )
    """

    def __init__(
        self,
        nodes: Iterable[SpringNode],
        links: Sequence[Any],
        *,
        default_length: float = 100.0,
        directed: bool = False,
        spring_constant: float = 0.5,
    ) -> None:
        """
        Args:
            nodes: Node list
            links: Link objects or dicts with source/target/length
            default_length: Ideal distance of links without a length
            directed: Only relate source to target, not target to source
            spring_constant: Global displacement scale

        Raises:
            ValidationError: If a link endpoint is outside the node list.
        """
        super().__init__(nodes, spring_constant)
        self.default_length = float(default_length)
        self.directed = bool(directed)
        self._lengths: dict[tuple[int, int], float] = {}

        for i, link_data in enumerate(links):
            link = link_data if isinstance(link_data, Link) else Link(**link_data)
            source = self._resolve(i, link.source)
            target = self._resolve(i, link.target)
            length = self.default_length if link.length is None else float(link.length)
            self._lengths[(source, target)] = length
            if not self.directed:
                self._lengths.setdefault((target, source), length)

    def _resolve(self, i: int, endpoint: Any) -> int:
        """Node list position of a link endpoint (node object or position)."""
        n = len(self._nodes)
        if isinstance(endpoint, int):
            if not 0 <= endpoint < n:
                raise ValidationError(f"Link {i}: endpoint out of bounds [0, {n}): {endpoint}")
            return endpoint
        position = self._positions.get(id(endpoint))
        if position is None:
            raise ValidationError(f"Link {i}: endpoint {endpoint!r} is not in the node list")
        return position

    def has_weight(self, source: SpringNode, target: SpringNode) -> bool:
        return (self.position(source), self.position(target)) in self._lengths

    def weight(self, source: SpringNode, target: SpringNode) -> float:
        return self._lengths[(self.position(source), self.position(target))]


class MatrixWeights(IndexedWeights):
    """
    Ideal distances from a dense n x n matrix.

    ``matrix[i][j]`` is the ideal distance from node i to node j; NaN means
    there is no relation. The diagonal is ignored.
    """

    def __init__(
        self,
        nodes: Iterable[SpringNode],
        matrix: Any,
        *,
        spring_constant: float = 0.5,
    ) -> None:
        """
        Raises:
            ValidationError: If the matrix is not n x n for n nodes.
        """
        super().__init__(nodes, spring_constant)
        self._matrix = np.asarray(matrix, dtype=np.float64)
        n = len(self._nodes)
        if self._matrix.shape != (n, n):
            raise ValidationError(
                f"Weight matrix must have shape ({n}, {n}), got {self._matrix.shape}"
            )

    def has_weight(self, source: SpringNode, target: SpringNode) -> bool:
        i = self.position(source)
        j = self.position(target)
        return i != j and not math.isnan(self._matrix[i, j])

    def weight(self, source: SpringNode, target: SpringNode) -> float:
        return float(self._matrix[self.position(source), self.position(target)])

    def ideal_distances(self) -> np.ndarray:
        """Read-only view of the matrix."""
        view = self._matrix.view()
        view.flags.writeable = False
        return view


__all__ = [
    "IndexedWeights",
    "ChainWeights",
    "RingWeights",
    "LinkWeights",
    "MatrixWeights",
]
