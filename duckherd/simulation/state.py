"""
Simulation state and the per-frame pipeline.

The host loop owns a ``SimulationState`` and calls ``step`` once per
displayed frame. The module-level ``initialize_agents``, ``update`` and
``check_win`` functions are the same pipeline without game bookkeeping,
for callers that manage ducks and the dog themselves.
"""

import math
import random
from typing import List, Optional

import pygame

from ..core.agents.dog import Dog
from ..core.agents.duck import Duck
from ..core.config import SimulationConfig, DEFAULT_CONFIG, category_count, ducks_per_category
from ..core.spatial_grid import SpatialGrid
from ..flocking.forces import take_snapshot
from ..grouping import clustering


WAITING = "waiting"
RUNNING = "running"
ENDED = "ended"


def initialize_agents(level: int, config: dict, rng: Optional[random.Random] = None) -> List[Duck]:
    """
    Seed the ducks for a level.

    Ducks are laid out on a jittered ring around the arena center with
    categories assigned round-robin, then shuffled so list order says
    nothing about color.

    Args:
        level: Level number (1-based)
        config: Configuration dictionary
        rng: Random source (a fresh unseeded one if None)

    Returns:
        ``category_count * ducks_per_category`` ducks
    """
    rng = rng if rng is not None else random.Random()
    num_categories = category_count(level, config)
    total = num_categories * ducks_per_category(num_categories, config)

    center_x = config["screenWidth"] / 2
    center_y = config["screenHeight"] / 2
    ring = config["spawnRingRadius"]
    radius_jitter = config["spawnRadiusJitter"]
    angle_jitter = config["spawnAngleJitter"]

    ducks = []
    for i in range(total):
        angle = (2 * math.pi / total) * i + rng.uniform(-angle_jitter, angle_jitter)
        radius = ring + rng.uniform(-radius_jitter, radius_jitter)
        x = center_x + math.cos(angle) * radius
        y = center_y + math.sin(angle) * radius
        duck = Duck.spawn(x, y, i % num_categories, config, rng)
        duck.clamp_to_bounds()
        ducks.append(duck)

    rng.shuffle(ducks)
    return ducks


def clamp_time_step(dt: float, config: dict) -> float:
    """
    Validate a frame time and cap it at ``maxTimeStep``.

    Raises:
        ValueError: If ``dt`` is negative or not finite
    """
    if not math.isfinite(dt) or dt < 0:
        raise ValueError(f"frame time must be a finite non-negative number, got {dt!r}")
    return min(dt, config["maxTimeStep"])


def update(dt: float, target: pygame.Vector2, ducks: List[Duck], dog: Dog,
           config: dict, grid: Optional[SpatialGrid] = None) -> None:
    """
    Advance the ducks and the dog by one frame, in place.

    Every duck's forces are computed from a snapshot taken after the dog
    moves and before any duck does; integration happens in a second pass.

    Args:
        dt: Seconds since the previous frame
        target: Steering target for the dog
        ducks: Ducks to advance
        dog: Dog to advance
        config: Configuration dictionary
        grid: Optional SpatialGrid reused across frames
    """
    dt = clamp_time_step(dt, config)

    dog.update(target, dt)

    snapshot = take_snapshot(ducks)
    if grid is not None:
        grid.rebuild(snapshot)

    dog_position = pygame.Vector2(dog.position)
    for duck, entry in zip(ducks, snapshot):
        duck.flock(entry, snapshot, dog_position, grid)

    for duck in ducks:
        duck.update(dt)


def check_win(ducks: List[Duck], num_categories: int, config: dict) -> bool:
    """Win predicate using the configured thresholds."""
    return clustering.check_win(
        ducks,
        num_categories,
        config["clusterRadiusThreshold"],
        config["groupSeparationThreshold"],
    )


class SimulationState:
    """
    Everything one game needs between frames.

    Owns the config, the random source, the current level, the ducks and
    the dog, plus the waiting/running/ended game state and the level timer.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 rng: Optional[random.Random] = None, level: int = 1):
        """
        Initialize the state and seed the first level.

        Args:
            config: Simulation configuration (uses defaults if None)
            rng: Random source; seeded from ``randomSeed`` if None
            level: Starting level
        """
        self.config = config if config else DEFAULT_CONFIG
        self.config_dict = self.config.to_dict()
        self.rng = rng if rng is not None else random.Random(self.config.randomSeed)

        if self.config.useSpatialGrid:
            self.grid = SpatialGrid(self.config.screenWidth, self.config.screenHeight,
                                    self.config.gridCellSize)
        else:
            self.grid = None

        self.dog = Dog.centered(self.config_dict)
        self.target = pygame.Vector2(self.dog.position)

        self.game_state = WAITING
        self.timer_value = 0.0
        self.final_time = None
        self.completed_levels = []
        self.frame_count = 0

        self.level = 1
        self.ducks = []
        self.reset_level(level)

    @property
    def category_count(self) -> int:
        return category_count(self.level, self.config_dict)

    def reset_level(self, level: int) -> None:
        """Discard the current ducks and seed ``level`` from scratch."""
        self.level = max(1, min(level, self.config.maxLevel))
        self.ducks = initialize_agents(self.level, self.config_dict, self.rng)
        self.timer_value = 0.0
        self.final_time = None

    def set_target(self, x: float, y: float) -> None:
        self.target = pygame.Vector2(x, y)

    def handle_click(self) -> None:
        """
        Level start/advance signal.

        Starts the first level from ``waiting``; after a win, moves to the
        next level (wrapping back to level 1 after the last) and reseeds.
        """
        if self.game_state == WAITING:
            self.game_state = RUNNING
        elif self.game_state == ENDED:
            next_level = self.level + 1 if self.level < self.config.maxLevel else 1
            self.reset_level(next_level)
            self.game_state = RUNNING

    def step(self, dt: float) -> bool:
        """
        Advance one frame.

        The timer and the simulation only move while running. The win
        check runs after integration.

        Args:
            dt: Seconds since the previous frame

        Returns:
            True on the frame the level is completed
        """
        dt = clamp_time_step(dt, self.config_dict)
        if self.game_state != RUNNING:
            return False

        self.timer_value += dt
        update(dt, self.target, self.ducks, self.dog, self.config_dict, self.grid)
        self.frame_count += 1

        if self.check_win():
            self.game_state = ENDED
            self.final_time = self.timer_value
            self.completed_levels.append({
                "level": self.level,
                "categories": self.category_count,
                "ducks": len(self.ducks),
                "time": self.final_time,
            })
            return True
        return False

    def check_win(self) -> bool:
        return check_win(self.ducks, self.category_count, self.config_dict)

    def cluster_report(self) -> clustering.ClusterReport:
        """Per-category diagnostics for the current frame."""
        return clustering.evaluate_clusters(
            self.ducks,
            self.category_count,
            self.config.clusterRadiusThreshold,
            self.config.groupSeparationThreshold,
        )
