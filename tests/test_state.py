import math
import random
from collections import Counter

import pygame
import pytest

from duckherd.core.agents import Dog, Duck
from duckherd.core.config import SimulationConfig, category_count, ducks_per_category
from duckherd.core.spatial_grid import SpatialGrid
from duckherd.simulation import state as sim
from duckherd.simulation.state import SimulationState, initialize_agents, update


def assert_healthy(ducks, dog, config):
    for duck in ducks:
        values = (duck.position.x, duck.position.y, duck.velocity.x, duck.velocity.y)
        assert all(math.isfinite(v) for v in values)
        assert duck.velocity.length() <= config["maxSpeed"] + 1e-9
        assert duck.in_bounds()
    assert dog.in_bounds()


class TestSeeding:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 9])
    def test_count_and_balance(self, config_dict, rng, level):
        ducks = initialize_agents(level, config_dict, rng)
        num = category_count(level, config_dict)
        assert len(ducks) == num * ducks_per_category(num, config_dict)

        counts = Counter(d.category for d in ducks)
        assert set(counts) == set(range(num))
        assert max(counts.values()) - min(counts.values()) <= 1

    def test_tapered_schedule(self, rng):
        config = SimulationConfig(taperDucksPerCategory=True).to_dict()
        assert len(initialize_agents(1, config, rng)) == 10
        assert len(initialize_agents(2, config, rng)) == 12
        assert len(initialize_agents(5, config, rng)) == 18

    def test_spawn_ring_and_speeds(self, config_dict, rng):
        center = pygame.Vector2(config_dict["screenWidth"] / 2, config_dict["screenHeight"] / 2)
        for duck in initialize_agents(3, config_dict, rng):
            dist = duck.position.distance_to(center)
            assert abs(dist - config_dict["spawnRingRadius"]) <= config_dict["spawnRadiusJitter"] + 1e-6
            speed = duck.velocity.length()
            assert config_dict["spawnSpeedMin"] - 1e-6 <= speed <= config_dict["spawnSpeedMax"] + 1e-6

    def test_same_seed_same_layout(self, config_dict):
        a = initialize_agents(2, config_dict, random.Random(7))
        b = initialize_agents(2, config_dict, random.Random(7))
        assert [(d.position, d.category) for d in a] == [(d.position, d.category) for d in b]


class TestLevels:
    def test_category_count_is_monotone_and_capped(self, config_dict):
        counts = [category_count(level, config_dict) for level in range(1, 20)]
        assert counts == sorted(counts)
        assert max(counts) == config_dict["maxCategories"]
        assert counts[0] == 2

    def test_category_count_clamped_to_palette(self):
        config = SimulationConfig(maxCategories=12).to_dict()
        assert category_count(20, config) == len(config["duckColors"])


class TestUpdate:
    def test_rejects_bad_time_steps(self, config_dict, rng):
        ducks = initialize_agents(1, config_dict, rng)
        dog = Dog.centered(config_dict)
        for bad in (-0.01, float("nan"), float("inf")):
            with pytest.raises(ValueError):
                update(bad, pygame.Vector2(0, 0), ducks, dog, config_dict)

    def test_large_time_step_is_clamped(self, config_dict):
        assert sim.clamp_time_step(5.0, config_dict) == pytest.approx(config_dict["maxTimeStep"])
        assert sim.clamp_time_step(0.01, config_dict) == pytest.approx(0.01)

    def test_invariants_over_many_frames(self, config_dict, rng):
        ducks = initialize_agents(5, config_dict, rng)
        dog = Dog.centered(config_dict)
        for frame in range(400):
            target = pygame.Vector2(rng.uniform(-100, 1300), rng.uniform(-100, 900))
            update(rng.uniform(0, 0.1), target, ducks, dog, config_dict)
            assert_healthy(ducks, dog, config_dict)

    def test_coincident_ducks_stay_finite(self, config_dict):
        ducks = [Duck(600, 400, i % 2, config_dict) for i in range(8)]
        dog = Dog(600, 400, config_dict)
        update(1 / 60, pygame.Vector2(600, 400), ducks, dog, config_dict)
        assert_healthy(ducks, dog, config_dict)

    def test_separation_pushes_close_ducks_apart(self, quiet_config_dict):
        quiet_config_dict["separationStrength"] = 150.0
        gap = quiet_config_dict["separationDistance"] - 1
        a = Duck(600, 300, 0, quiet_config_dict)
        b = Duck(600 + gap, 300, 1, quiet_config_dict)
        dog = Dog(100, 700, quiet_config_dict)

        update(1 / 120, pygame.Vector2(100, 700), [a, b], dog, quiet_config_dict)

        assert a.velocity.x < 0 < b.velocity.x
        assert b.position.x - a.position.x > gap

    def test_forces_use_start_of_frame_positions(self, config_dict):
        def run(order):
            ducks = [Duck(600 + 15 * i, 300 + 7 * i, i % 2, config_dict) for i in range(6)]
            ordered = [ducks[i] for i in order]
            update(1 / 60, pygame.Vector2(580, 300), ordered, Dog(580, 300, config_dict), config_dict)
            return [(d.position.x, d.position.y) for d in ducks]

        forward = run(range(6))
        backward = run(reversed(range(6)))
        for (fx, fy), (bx, by) in zip(forward, backward):
            assert fx == pytest.approx(bx)
            assert fy == pytest.approx(by)

    def test_grid_and_linear_scan_agree(self, config_dict):
        def run(grid):
            ducks = initialize_agents(4, config_dict, random.Random(3))
            dog = Dog.centered(config_dict)
            for _ in range(30):
                update(1 / 60, pygame.Vector2(300, 200), ducks, dog, config_dict, grid)
            return [(d.position.x, d.position.y) for d in ducks]

        grid = SpatialGrid(config_dict["screenWidth"], config_dict["screenHeight"], 40)
        for (ax, ay), (bx, by) in zip(run(None), run(grid)):
            assert ax == pytest.approx(bx)
            assert ay == pytest.approx(by)


class TestSimulationState:
    def test_waits_for_click(self):
        state = SimulationState(SimulationConfig(randomSeed=5))
        positions = [pygame.Vector2(d.position) for d in state.ducks]
        assert not state.step(1 / 60)
        assert state.timer_value == 0
        assert [d.position for d in state.ducks] == positions

    def test_timer_runs_while_running(self):
        state = SimulationState(SimulationConfig(randomSeed=5))
        state.handle_click()
        for _ in range(10):
            state.step(1 / 60)
        assert state.game_state == sim.RUNNING
        assert state.timer_value == pytest.approx(10 / 60)

    def test_win_ends_level_and_click_advances(self):
        config = SimulationConfig(randomSeed=5)
        state = SimulationState(config)
        state.handle_click()

        # Freeze ducks into two far-apart tight groups
        for duck in state.ducks:
            x = 300 if duck.category == 0 else 900
            duck.position = pygame.Vector2(x, 400)
            duck.velocity = pygame.Vector2(0, 0)
        state.set_target(600, 100)

        assert state.step(1 / 60)
        assert state.game_state == sim.ENDED
        assert state.final_time == pytest.approx(1 / 60)
        assert state.completed_levels[-1]["level"] == 1

        state.handle_click()
        assert state.level == 2
        assert state.game_state == sim.RUNNING
        assert state.timer_value == 0
        assert len({d.category for d in state.ducks}) == 3

    def test_level_wraps_after_last(self):
        config = SimulationConfig(randomSeed=1)
        state = SimulationState(config, level=config.maxLevel)
        state.game_state = sim.ENDED
        state.handle_click()
        assert state.level == 1

    def test_injected_rng_makes_runs_repeatable(self):
        def run():
            state = SimulationState(SimulationConfig(), rng=random.Random(99))
            state.handle_click()
            state.set_target(200, 200)
            for _ in range(60):
                state.step(1 / 60)
            return [(d.position.x, d.position.y) for d in state.ducks]

        assert run() == run()
