"""Tests for game entities."""

import math

import pytest

from treasure_dash.config import PhysicsConfig
from treasure_dash.entities import Collectible, Platform, PlatformKind, Player, PlayerVisuals


class TestPlayer:
    def test_creation(self):
        player = Player((50, 500))
        assert player.position == (50, 500)
        assert player.width == 30
        assert player.height == 40
        assert player.score == 0
        assert player.alive
        assert player.dash_ready

    def test_custom_visuals(self):
        player = Player((0, 0), visuals=PlayerVisuals(width=20, height=20))
        assert player.body.bounds == (0, 0, 20, 20)

    def test_move_sets_speed_and_direction(self):
        player = Player((0, 0))
        player.move(-1)
        assert player.velocity.x == -5.0
        assert player.direction == -1

    def test_jump_requires_ground(self):
        player = Player((0, 0))
        assert player.jump() is False
        assert player.velocity.y == 0

    def test_jump_from_ground(self):
        player = Player((0, 0))
        player.body.on_ground = True
        assert player.jump() is True
        assert player.velocity.y == -12.0
        assert player.on_ground is False
        assert player.is_jumping

    def test_no_double_jump(self):
        player = Player((0, 0))
        player.body.on_ground = True
        player.jump()
        assert player.jump() is False

    def test_dash_sets_velocity_and_cooldown(self):
        player = Player((0, 0))
        assert player.dash(1) is True
        assert player.velocity.x == 15.0
        assert player.dash_cooldown == 30
        assert not player.dash_ready

    def test_dash_blocked_during_cooldown(self):
        player = Player((0, 0))
        player.dash(1)
        player.update()
        vx = player.velocity.x
        assert player.dash(-1) is False
        assert player.velocity.x == vx
        assert player.dash_cooldown == 29

    def test_dash_ready_after_cooldown(self):
        player = Player((0, 0))
        player.dash(1)
        for _ in range(30):
            player.update()
        assert player.dash_ready
        assert player.dash(-1) is True

    def test_update_applies_friction_after_move(self):
        player = Player((0, 0))
        player.move(1)
        player.update()
        assert player.position.x == pytest.approx(5.0)
        assert player.velocity.x == pytest.approx(5.0 * 0.85)

    def test_update_applies_gravity(self):
        player = Player((0, 0))
        player.update()
        assert player.velocity.y == pytest.approx(0.6)
        assert player.position.y == pytest.approx(0.6)

    def test_custom_physics(self):
        player = Player((0, 0), physics_config=PhysicsConfig(gravity=1.0))
        player.update()
        assert player.velocity.y == pytest.approx(1.0)

    def test_land_snaps_to_surface(self):
        player = Player((0, 525))
        player.body.set_velocity(vy=8.0)
        player.land(560)
        assert player.body.bottom == 560
        assert player.velocity.y == 0
        assert player.on_ground
        assert not player.is_jumping

    def test_kill_reports_transition_once(self):
        player = Player((0, 0))
        assert player.kill() is True
        assert not player.alive
        assert player.kill() is False


class TestPlatform:
    def test_kinds(self):
        assert Platform(0, 0, 10, 10, kind=PlatformKind.SPIKE).is_hazard
        assert Platform(0, 0, 10, 10, kind=PlatformKind.GOAL).is_goal
        normal = Platform(0, 0, 10, 10)
        assert not normal.is_hazard
        assert not normal.is_goal

    def test_kind_from_string(self):
        assert PlatformKind("collectible") is PlatformKind.COLLECTIBLE_MARKER

    def test_normal_platform_does_not_move(self):
        platform = Platform(100, 200, 50, 10, phase=1.0)
        for _ in range(100):
            platform.update()
        assert platform.bounds == (100, 200, 150, 210)

    def test_spike_oscillates_around_original_y(self):
        platform = Platform(100, 200, 50, 10, kind=PlatformKind.SPIKE)
        ys = []
        for _ in range(400):
            platform.update()
            ys.append(platform.body.y)
        assert max(ys) == pytest.approx(203.0, abs=0.01)
        assert min(ys) == pytest.approx(197.0, abs=0.01)
        assert platform.original_y == 200

    def test_spike_position_follows_phase(self):
        platform = Platform(0, 100, 10, 10, kind=PlatformKind.SPIKE, phase=math.pi / 2 - 0.02)
        platform.update()
        assert platform.body.y == pytest.approx(103.0)


class TestCollectible:
    def test_size(self):
        c = Collectible(10, 20)
        assert c.bounds == (10, 20, 25, 35)

    def test_collect_once(self):
        c = Collectible(0, 0)
        assert c.collect() is True
        assert c.collected
        assert c.collect() is False

    def test_update_only_animates(self):
        c = Collectible(10, 20, spin=0.0, bob=0.0)
        c.update()
        assert c.spin == pytest.approx(0.08)
        assert c.bob == pytest.approx(0.05)
        assert c.bounds == (10, 20, 25, 35)
