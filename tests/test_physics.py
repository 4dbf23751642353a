"""Tests for the shared physics Body and AABB overlap."""

import pytest

from treasure_dash.physics import Body, Vector2, overlaps


class TestBody:
    def test_creation_converts_tuples(self):
        body = Body((10, 20), 30, 40)
        assert isinstance(body.position, Vector2)
        assert body.velocity == Vector2(0, 0)
        assert body.previous_position == body.position
        assert body.on_ground is False

    def test_edges(self):
        body = Body((10, 20), 30, 40)
        assert body.bounds == (10, 20, 40, 60)
        assert body.center == Vector2(25, 40)

    def test_integrate_applies_gravity_then_moves(self):
        body = Body((0, 0), 10, 10, velocity=(2, 0))
        body.integrate(0.6)
        assert body.velocity.y == pytest.approx(0.6)
        assert body.position.x == pytest.approx(2)
        assert body.position.y == pytest.approx(0.6)

    def test_integrate_records_previous_position(self):
        body = Body((5, 5), 10, 10, velocity=(1, 1))
        body.integrate(0.0)
        assert body.previous_position == Vector2(5, 5)
        assert body.previous_bounds == (5, 5, 15, 15)

    def test_integrate_clears_ground_flag(self):
        body = Body((0, 0), 10, 10, on_ground=True)
        body.integrate(0.6)
        assert body.on_ground is False

    def test_free_fall_is_quadratic(self):
        """After n ticks from rest the body has fallen g * n(n+1)/2."""
        body = Body((0, 0), 10, 10)
        for _ in range(10):
            body.integrate(0.6)
        assert body.y == pytest.approx(0.6 * 55)
        assert body.velocity.y == pytest.approx(6.0)

    def test_move_to_single_axis(self):
        body = Body((3, 4), 10, 10)
        body.move_to(y=50)
        assert body.position == Vector2(3, 50)
        body.move_to(x=7)
        assert body.position == Vector2(7, 50)

    def test_set_velocity_single_axis(self):
        body = Body((0, 0), 10, 10, velocity=(1, 2))
        body.set_velocity(vy=0.0)
        assert body.velocity == Vector2(1, 0)


class TestOverlaps:
    def test_overlapping(self):
        assert overlaps(Body((0, 0), 10, 10), Body((5, 5), 10, 10))

    def test_contained(self):
        assert overlaps(Body((0, 0), 100, 100), Body((10, 10), 5, 5))

    def test_separate(self):
        assert not overlaps(Body((0, 0), 10, 10), Body((20, 0), 10, 10))

    def test_touching_edges_do_not_overlap(self):
        assert not overlaps(Body((0, 0), 10, 10), Body((10, 0), 10, 10))
        assert not overlaps(Body((0, 0), 10, 10), Body((0, 10), 10, 10))

    def test_symmetric(self):
        a = Body((0, 0), 10, 10)
        b = Body((9, 9), 10, 10)
        assert overlaps(a, b) == overlaps(b, a)
