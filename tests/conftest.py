"""Shared test doubles for the spring embedder tests."""

from typing import Callable, Optional

import pytest

from spring_embedder import Circle, SpringNode


class UniformWeights:
    """Relates every ordered pair accepted by ``related`` with one distance."""

    def __init__(
        self,
        nodes,
        distance: float = 10.0,
        constant: float = 1.0,
        related: Optional[Callable[[SpringNode, SpringNode], bool]] = None,
    ):
        self._nodes = list(nodes)
        self.distance = distance
        self.constant = constant
        self.related = related

    def nodes(self):
        return self._nodes

    def has_weight(self, source, target):
        if self.related is None:
            return True
        return self.related(source, target)

    def weight(self, source, target):
        return self.distance

    def spring_constant(self):
        return self.constant


class RecordingRenderer:
    """Renderer that records draw calls, clicks and serves tooltips."""

    def __init__(self, radius: float = 2.0, clickable: bool = True):
        self.radius = radius
        self.clickable = clickable
        self.clicked = []

    def draw_node(self, gfx, node):
        gfx.append(node)

    def click_area(self, node):
        if not self.clickable:
            return None
        return Circle.around(node, self.radius)

    def clicked_at(self, node):
        self.clicked.append(node)

    def tooltip_text(self, node):
        return getattr(node, "label", None)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def pair():
    """Two nodes 20 apart on the x axis."""
    return [SpringNode(index=0, x=0.0, y=0.0), SpringNode(index=1, x=20.0, y=0.0)]
