import math

import pygame
import pytest

from duckherd.core.agents import Duck, Dog, wrap_angle
from duckherd.core.config import SimulationConfig


class TestDuckIntegrator:
    def test_speed_is_clamped_before_damping(self, quiet_config_dict):
        quiet_config_dict["damping"] = 0.9
        duck = Duck(600, 400, 0, quiet_config_dict)
        duck.apply_force(pygame.Vector2(1e6, 0))
        duck.update(0.01)
        assert duck.velocity.length() == pytest.approx(quiet_config_dict["maxSpeed"] * 0.9)

    def test_damping_applies_without_acceleration(self, quiet_config_dict):
        quiet_config_dict["damping"] = 0.5
        duck = Duck(600, 400, 0, quiet_config_dict, velocity=pygame.Vector2(100, 0))
        duck.update(0.0)
        assert duck.velocity.x == pytest.approx(50)

    def test_position_advances_by_velocity(self, quiet_config_dict):
        duck = Duck(600, 400, 0, quiet_config_dict, velocity=pygame.Vector2(100, -50))
        duck.update(0.1)
        assert duck.position.x == pytest.approx(610)
        assert duck.position.y == pytest.approx(395)

    def test_acceleration_is_reset(self, quiet_config_dict):
        duck = Duck(600, 400, 0, quiet_config_dict)
        duck.apply_force(pygame.Vector2(10, 10))
        duck.update(0.01)
        assert duck.acceleration == pygame.Vector2(0, 0)

    def test_bounces_off_left_wall(self, quiet_config_dict):
        r = quiet_config_dict["duckRadius"]
        duck = Duck(r + 1, 400, 0, quiet_config_dict, velocity=pygame.Vector2(-400, 0))
        duck.update(0.05)
        assert duck.position.x == r
        assert duck.velocity.x == pytest.approx(400 * quiet_config_dict["boundaryBounceFactor"])

    def test_bounces_off_bottom_wall(self, quiet_config_dict):
        r = quiet_config_dict["duckRadius"]
        bottom = quiet_config_dict["screenHeight"] - r
        duck = Duck(600, bottom - 1, 0, quiet_config_dict, velocity=pygame.Vector2(0, 400))
        duck.update(0.05)
        assert duck.position.y == bottom
        assert duck.velocity.y < 0

    def test_rejects_non_positive_radius(self, config_dict):
        config_dict["duckRadius"] = 0
        with pytest.raises(ValueError):
            Duck(10, 10, 0, config_dict)


class TestDogPursuit:
    def test_accelerates_toward_target(self, config_dict):
        dog = Dog(600, 400, config_dict)
        dog.update(pygame.Vector2(900, 400), 1 / 60)
        assert dog.velocity.x > 0
        assert dog.position.x > 600

    def test_parks_when_within_follow_distance(self, config_dict):
        dog = Dog(600, 400, config_dict)
        dog.velocity = pygame.Vector2(50, 50)
        dog.update(pygame.Vector2(600.1, 400.1), 1 / 60)
        assert dog.velocity == pygame.Vector2(0, 0)
        assert dog.position.x == pytest.approx(600.1)

    def test_angle_eases_toward_heading(self, config_dict):
        dog = Dog(600, 400, config_dict)
        for _ in range(120):
            dog.update(pygame.Vector2(600, -1000), 1 / 60)
        assert dog.angle == pytest.approx(-math.pi / 2, abs=0.05)

    def test_stays_in_bounds(self, config_dict):
        dog = Dog(600, 400, config_dict)
        for _ in range(300):
            dog.update(pygame.Vector2(-500, 5000), 1 / 30)
            assert dog.in_bounds()
        assert dog.position.x == pytest.approx(config_dict["dogRadius"])


class TestDogDirect:
    def test_snaps_to_target(self):
        config = SimulationConfig(dogControlMode="direct").to_dict()
        dog = Dog(600, 400, config)
        dog.update(pygame.Vector2(700, 400), 1 / 60)
        assert dog.position == pygame.Vector2(700, 400)
        assert dog.angle == pytest.approx(0)

    def test_angle_follows_movement_direction(self):
        config = SimulationConfig(dogControlMode="direct").to_dict()
        dog = Dog(600, 400, config)
        dog.update(pygame.Vector2(600, 300), 1 / 60)
        assert dog.angle == pytest.approx(-math.pi / 2)
        dog.update(pygame.Vector2(600, 300), 1 / 60)
        assert dog.angle == pytest.approx(-math.pi / 2)

    def test_target_outside_arena_is_clamped(self):
        config = SimulationConfig(dogControlMode="direct").to_dict()
        dog = Dog(600, 400, config)
        dog.update(pygame.Vector2(-100, -100), 1 / 60)
        assert dog.position == pygame.Vector2(config["dogRadius"], config["dogRadius"])


def test_wrap_angle():
    assert wrap_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
    assert wrap_angle(-3 * math.pi / 2) == pytest.approx(math.pi / 2)
    assert wrap_angle(0.5) == pytest.approx(0.5)
