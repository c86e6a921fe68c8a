"""
Tests for SpringNode physics.
"""

import math

import pytest

from conftest import UniformWeights
from spring_embedder import InvalidWeightError, SpringNode


class TestCommit:
    """Tests for applying the pending displacement."""

    def test_commit_applies_and_resets(self):
        node = SpringNode(index=0, x=1.0, y=2.0)
        node.add_move(3.0, -4.0)

        moved = node.commit()

        assert node.pos == (4.0, -2.0)
        assert node.dx == 0.0
        assert node.dy == 0.0
        assert moved == pytest.approx(5.0)

    def test_commit_is_idempotent(self):
        """A second commit without new forces leaves the position unchanged."""
        node = SpringNode(index=0, x=1.0, y=2.0)
        node.add_move(0.5, 0.25)
        node.commit()
        after_first = node.pos

        assert node.commit() == 0.0
        assert node.pos == after_first

    def test_discard_keeps_position(self):
        node = SpringNode(index=0, x=1.0, y=1.0)
        node.add_move(10.0, 10.0)
        node.discard()
        node.commit()
        assert node.pos == (1.0, 1.0)

    def test_set_position_clears_pending(self):
        node = SpringNode(index=0)
        node.add_move(1.0, 1.0)
        node.set_position(7, 8)
        assert node.pos == (7.0, 8.0)
        assert (node.dx, node.dy) == (0.0, 0.0)


class TestComputeForces:
    """Tests for the pairwise spring term."""

    def test_stretched_spring_pulls_together(self, pair):
        a, b = pair
        weights = UniformWeights(pair, distance=10.0, constant=1.0)

        a.compute_forces(pair, weights)
        b.compute_forces(pair, weights)

        assert a.dx == pytest.approx(5.0)
        assert b.dx == pytest.approx(-5.0)
        assert a.dy == 0.0 and b.dy == 0.0

    def test_compressed_spring_pushes_apart(self, pair):
        a, _ = pair
        weights = UniformWeights(pair, distance=30.0, constant=1.0)

        a.compute_forces(pair, weights)

        assert a.dx == pytest.approx(-5.0)

    def test_positions_untouched_until_commit(self, pair):
        a, b = pair
        weights = UniformWeights(pair, distance=10.0)
        a.compute_forces(pair, weights)
        assert a.pos == (0.0, 0.0)
        assert b.pos == (20.0, 0.0)

    def test_spring_constant_scales_displacement(self, pair):
        a, _ = pair
        weights = UniformWeights(pair, distance=10.0, constant=0.5)
        a.compute_forces(pair, weights)
        assert a.dx == pytest.approx(2.5)

    def test_calls_accumulate(self, pair):
        a, _ = pair
        weights = UniformWeights(pair, distance=10.0, constant=1.0)
        a.compute_forces(pair, weights)
        a.compute_forces(pair, weights)
        assert a.dx == pytest.approx(10.0)

    def test_unrelated_nodes_exert_nothing(self, pair):
        a, _ = pair
        weights = UniformWeights(pair, related=lambda s, t: False)
        a.compute_forces(pair, weights)
        assert (a.dx, a.dy) == (0.0, 0.0)

    def test_asymmetric_relation(self, pair):
        """Only the node the relation is defined for is pulled."""
        a, b = pair
        weights = UniformWeights(pair, distance=10.0, related=lambda s, t: s is a)
        a.compute_forces(pair, weights)
        b.compute_forces(pair, weights)
        assert a.dx == pytest.approx(5.0)
        assert b.dx == 0.0

    def test_negative_weight_repels_inside_radius(self):
        a = SpringNode(index=0, x=0.0, y=0.0)
        b = SpringNode(index=1, x=1.0, y=0.0)
        nodes = [a, b]
        weights = UniformWeights(nodes, distance=-5.0, constant=1.0)

        a.compute_forces(nodes, weights)

        assert a.dx == pytest.approx(-2.0)

    def test_negative_weight_fades_outside_radius(self):
        a = SpringNode(index=0, x=0.0, y=0.0)
        b = SpringNode(index=1, x=8.0, y=0.0)
        nodes = [a, b]
        weights = UniformWeights(nodes, distance=-5.0, constant=1.0)

        a.compute_forces(nodes, weights)

        expected = (8.0 - 5.0) * 0.5 * math.exp(-9.0)
        assert a.dx == pytest.approx(expected)


class TestCoincidence:
    """Tests for the jitter tie-break of coincident nodes."""

    def test_coincident_nodes_get_jitter(self):
        a = SpringNode(index=0)
        b = SpringNode(index=1)
        nodes = [a, b]
        weights = UniformWeights(nodes, distance=10.0, constant=2.0)

        a.compute_forces(nodes, weights)

        jx, jy = a.jitter()
        assert a.dx == pytest.approx(jx * 2.0)
        assert a.dy == pytest.approx(jy * 2.0)
        assert (a.dx, a.dy) != (0.0, 0.0)

    def test_jitter_is_seeded_from_index(self):
        assert SpringNode(index=7).jitter() == SpringNode(index=7).jitter()
        assert SpringNode(index=7).jitter() != SpringNode(index=8).jitter()

    def test_jitter_requires_index(self):
        with pytest.raises(ValueError, match="no index"):
            SpringNode().jitter()

    def test_other_relation_suppresses_jitter(self):
        """Jitter only applies when coincident relations were the only ones."""
        a = SpringNode(index=0)
        b = SpringNode(index=1)
        c = SpringNode(index=2, x=20.0)
        nodes = [a, b, c]
        weights = UniformWeights(nodes, distance=10.0, constant=1.0)

        a.compute_forces(nodes, weights)

        assert a.dx == pytest.approx(5.0)
        assert a.dy == 0.0

    def test_unrelated_coincident_nodes_stay(self):
        a = SpringNode(index=0)
        b = SpringNode(index=1)
        nodes = [a, b]
        weights = UniformWeights(nodes, related=lambda s, t: False)
        a.compute_forces(nodes, weights)
        assert (a.dx, a.dy) == (0.0, 0.0)


class TestInvalidWeights:
    """Tests for rejecting non-finite weights."""

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_weight_raises(self, pair, bad):
        a, _ = pair
        weights = UniformWeights(pair, distance=bad)
        with pytest.raises(InvalidWeightError, match="must be a finite number"):
            a.compute_forces(pair, weights)
        assert (a.dx, a.dy) == (0.0, 0.0)

    def test_missing_weight_raises(self, pair):
        a, _ = pair
        weights = UniformWeights(pair, distance=None)
        with pytest.raises(InvalidWeightError, match="node 0 and node 1"):
            a.compute_forces(pair, weights)

    def test_non_finite_spring_constant_raises(self, pair):
        a, _ = pair
        weights = UniformWeights(pair, distance=10.0, constant=float("nan"))
        with pytest.raises(InvalidWeightError, match="Spring constant"):
            a.compute_forces(pair, weights)


class TestNodeAttributes:
    """Tests for node construction."""

    def test_defaults(self):
        node = SpringNode()
        assert node.index is None
        assert node.pos == (0.0, 0.0)

    def test_custom_properties(self):
        node = SpringNode(index=3, x=1, y=2, label="Hauptbahnhof")
        assert node.label == "Hauptbahnhof"
        assert isinstance(node.x, float)

    def test_repr(self):
        assert repr(SpringNode(index=2, x=1.0, y=2.5)) == "SpringNode(index=2, x=1.00, y=2.50)"
