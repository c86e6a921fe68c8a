"""
Tests for the ready-made weight functions.
"""

import math

import numpy as np
import pytest

from spring_embedder import (
    ChainWeights,
    IndexedWeights,
    Link,
    LinkWeights,
    MatrixWeights,
    RingWeights,
    SpringNode,
    ValidationError,
    WeightFunction,
)


def create_nodes(n):
    return [SpringNode(index=i) for i in range(n)]


class TestIndexedWeights:
    """Tests for the IndexedWeights base class."""

    def test_is_abstract(self):
        with pytest.raises(TypeError):
            IndexedWeights(create_nodes(2))

    def test_position(self):
        nodes = [SpringNode(index=7), SpringNode(index=3)]
        weights = RingWeights(nodes)
        assert weights.position(nodes[0]) == 0
        assert weights.position(nodes[1]) == 1
        assert len(weights) == 2


class TestChainWeights:
    """Tests for ChainWeights."""

    def test_neighbours_related(self):
        nodes = create_nodes(4)
        weights = ChainWeights(nodes, unit=17)
        assert weights.has_weight(nodes[0], nodes[1])
        assert weights.has_weight(nodes[2], nodes[1])
        assert not weights.has_weight(nodes[0], nodes[2])
        assert not weights.has_weight(nodes[1], nodes[1])

    def test_weight_scales_with_gap(self):
        nodes = create_nodes(4)
        weights = ChainWeights(nodes, unit=17, reach=3)
        assert weights.has_weight(nodes[0], nodes[3])
        assert weights.weight(nodes[0], nodes[3]) == 51.0
        assert weights.weight(nodes[3], nodes[0]) == 51.0

    def test_reach_at_least_one(self):
        weights = ChainWeights(create_nodes(2), reach=0)
        assert weights.reach == 1

    def test_spring_constant(self):
        weights = ChainWeights(create_nodes(2), spring_constant=0.9)
        assert weights.spring_constant() == 0.9

    def test_satisfies_protocol(self):
        assert isinstance(ChainWeights(create_nodes(2)), WeightFunction)


class TestRingWeights:
    """Tests for RingWeights."""

    def test_wraps_around(self):
        nodes = create_nodes(5)
        weights = RingWeights(nodes, distance=5)
        assert weights.has_weight(nodes[0], nodes[4])
        assert weights.has_weight(nodes[4], nodes[0])
        assert weights.has_weight(nodes[1], nodes[2])
        assert not weights.has_weight(nodes[0], nodes[2])
        assert weights.weight(nodes[0], nodes[4]) == 5.0

    def test_single_node(self):
        nodes = create_nodes(1)
        weights = RingWeights(nodes)
        assert not weights.has_weight(nodes[0], nodes[0])


class TestLinkWeights:
    """Tests for LinkWeights."""

    def test_undirected_by_default(self):
        nodes = create_nodes(3)
        weights = LinkWeights(nodes, [Link(0, 1, length=50)])
        assert weights.has_weight(nodes[0], nodes[1])
        assert weights.has_weight(nodes[1], nodes[0])
        assert weights.weight(nodes[1], nodes[0]) == 50.0
        assert not weights.has_weight(nodes[0], nodes[2])

    def test_directed(self):
        nodes = create_nodes(2)
        weights = LinkWeights(nodes, [Link(0, 1)], directed=True)
        assert weights.has_weight(nodes[0], nodes[1])
        assert not weights.has_weight(nodes[1], nodes[0])

    def test_default_length(self):
        nodes = create_nodes(2)
        weights = LinkWeights(nodes, [{"source": 0, "target": 1}], default_length=80)
        assert weights.weight(nodes[0], nodes[1]) == 80.0

    def test_explicit_reverse_link_wins(self):
        nodes = create_nodes(2)
        weights = LinkWeights(nodes, [Link(0, 1, length=10), Link(1, 0, length=30)])
        assert weights.weight(nodes[0], nodes[1]) == 10.0
        assert weights.weight(nodes[1], nodes[0]) == 30.0

    def test_link_to_node_object(self):
        nodes = create_nodes(2)
        weights = LinkWeights(nodes, [Link(nodes[0], nodes[1], length=12)])
        assert weights.weight(nodes[0], nodes[1]) == 12.0

    def test_link_to_nodes_without_index(self):
        nodes = [SpringNode(), SpringNode(), SpringNode()]
        weights = LinkWeights(nodes, [Link(nodes[0], nodes[2], length=7)])
        assert weights.has_weight(nodes[2], nodes[0])
        assert not weights.has_weight(nodes[0], nodes[1])
        assert weights.weight(nodes[0], nodes[2]) == 7.0

    def test_link_endpoints_resolved_by_identity_not_index(self):
        nodes = [SpringNode(index=10), SpringNode(index=11), SpringNode(index=0)]
        weights = LinkWeights(nodes, [Link(nodes[0], nodes[1], length=4)])
        assert weights.has_weight(nodes[0], nodes[1])
        assert not weights.has_weight(nodes[2], nodes[1])

    def test_link_to_foreign_node(self):
        nodes = create_nodes(2)
        with pytest.raises(ValidationError, match="not in the node list"):
            LinkWeights(nodes, [Link(nodes[0], SpringNode(index=1))])

    def test_out_of_bounds(self):
        with pytest.raises(ValidationError, match="out of bounds"):
            LinkWeights(create_nodes(2), [Link(0, 5)])


class TestMatrixWeights:
    """Tests for MatrixWeights."""

    def test_nan_means_unrelated(self):
        nodes = create_nodes(3)
        nan = math.nan
        matrix = [[0, 4, nan], [4, 0, 9], [nan, 9, 0]]
        weights = MatrixWeights(nodes, matrix)
        assert weights.has_weight(nodes[0], nodes[1])
        assert not weights.has_weight(nodes[0], nodes[2])
        assert not weights.has_weight(nodes[0], nodes[0])
        assert weights.weight(nodes[1], nodes[2]) == 9.0

    def test_shape_mismatch(self):
        with pytest.raises(ValidationError, match="shape"):
            MatrixWeights(create_nodes(3), np.zeros((2, 2)))

    def test_ideal_distances_read_only(self):
        weights = MatrixWeights(create_nodes(2), [[0, 1], [1, 0]])
        view = weights.ideal_distances()
        with pytest.raises(ValueError):
            view[0, 1] = 5.0
