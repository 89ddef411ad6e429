"""
Configuration classes and defaults for the duck herding simulation.
"""

import json
import math
from dataclasses import dataclass, field, fields, asdict
from typing import List, Literal, Optional


# Duck palette, one entry per category (royal blue, gold, crimson,
# lime green, medium purple, orange)
DUCK_COLORS = [
    [65, 105, 225],
    [255, 215, 0],
    [220, 20, 60],
    [50, 205, 50],
    [147, 112, 219],
    [255, 165, 0],
]

DOG_CONTROL_MODES = ("pursuit", "direct")


@dataclass
class SimulationConfig:
    """Configuration for the duck herding simulation."""

    # Arena
    screenWidth: int = 1200
    screenHeight: int = 800

    # Agent sizes
    duckRadius: float = 12.0
    dogRadius: float = 21.0

    # Duck motion
    maxSpeed: float = 800.0
    damping: float = 0.98

    # Dog controller
    dogControlMode: Literal["pursuit", "direct"] = "pursuit"
    dogSpeed: float = 800.0
    dogAcceleration: float = 12.0
    dogRotationSpeed: float = 12.0
    dogFollowDistance: float = 0.3

    # Dog repulsion
    dogEffectRadius: float = 180.0
    dogRepulsionStrength: float = 6000.0

    # Flocking
    separationDistance: float = 40.0
    separationStrength: float = 150.0
    cohesionStrength: float = 0.005

    # Ring attraction around the arena center
    targetRingRadius: float = 128.0
    ringAttractionStrength: float = 0.5

    # Walls
    boundaryMargin: float = 20.0
    boundaryForceStrength: float = 3500.0
    boundaryBounceFactor: float = 0.5

    # Win condition
    clusterRadiusThreshold: float = 80.0
    groupSeparationThreshold: float = 200.0

    # Levels
    maxLevel: int = 5
    maxCategories: int = 6
    ducksPerCategory: int = 5
    taperDucksPerCategory: bool = False

    # Seeding
    spawnRingRadius: float = 150.0
    spawnRadiusJitter: float = 15.0
    spawnAngleJitter: float = 0.1
    spawnSpeedMin: float = 100.0
    spawnSpeedMax: float = 200.0
    randomSeed: Optional[int] = None

    # Frame timing
    maxTimeStep: float = 1.0 / 30.0
    fpsTarget: int = 60

    # Neighbor search
    useSpatialGrid: bool = False
    gridCellSize: int = 40

    # Visualization
    showDebug: bool = False
    backgroundColor: List[int] = field(default_factory=lambda: [40, 44, 52])
    boundaryColor: List[int] = field(default_factory=lambda: [70, 74, 82])
    dogColor: List[int] = field(default_factory=lambda: [139, 90, 43])
    duckColors: List[List[int]] = field(default_factory=lambda: [list(c) for c in DUCK_COLORS])

    # Output
    scoreOutputFile: str = "duck_herding_scores.json"

    def __post_init__(self):
        if self.screenWidth <= 0 or self.screenHeight <= 0:
            raise ValueError("arena dimensions must be positive")
        if self.duckRadius <= 0 or self.dogRadius <= 0:
            raise ValueError("agent radii must be positive")
        if 2 * max(self.duckRadius, self.dogRadius) >= min(self.screenWidth, self.screenHeight):
            raise ValueError("arena is too small for the agent radii")
        if self.dogControlMode not in DOG_CONTROL_MODES:
            raise ValueError(f"unknown dogControlMode {self.dogControlMode!r}")
        if not 0 < self.damping <= 1:
            raise ValueError("damping must be in (0, 1]")
        if self.maxSpeed <= 0 or self.dogSpeed < 0:
            raise ValueError("speeds must be positive")
        if self.spawnSpeedMin < 0 or self.spawnSpeedMax < self.spawnSpeedMin:
            raise ValueError("spawn speed range is invalid")
        if self.maxLevel < 1 or self.maxCategories < 1 or self.ducksPerCategory < 1:
            raise ValueError("level schedule values must be at least 1")
        if not self.duckColors:
            raise ValueError("duckColors must not be empty")
        if not (math.isfinite(self.maxTimeStep) and self.maxTimeStep > 0):
            raise ValueError("maxTimeStep must be a positive number")
        if self.gridCellSize <= 0:
            raise ValueError("gridCellSize must be positive")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Create config from dictionary."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


def load_config(path: str) -> SimulationConfig:
    """
    Load a configuration from a JSON file.

    Keys missing from the file keep their defaults; unknown keys are ignored.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed SimulationConfig
    """
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return SimulationConfig.from_dict(data)


def save_config(config: SimulationConfig, path: str) -> str:
    """Write a configuration to a JSON file and return the path."""
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
    return path


def category_count(level: int, config: dict) -> int:
    """
    Number of duck categories in play for a level.

    Grows by one per level and is capped by both ``maxCategories`` and
    the size of the palette.
    """
    cap = min(config["maxCategories"], len(config["duckColors"]))
    return max(1, min(level + 1, cap))


def ducks_per_category(num_categories: int, config: dict) -> int:
    """Ducks seeded per category; optionally tapered as categories grow."""
    if not config.get("taperDucksPerCategory", False):
        return config["ducksPerCategory"]
    if num_categories <= 2:
        return 5
    if num_categories <= 3:
        return 4
    return 3


# Default configuration for the interactive game
DEFAULT_CONFIG = SimulationConfig()

# Smaller arena and gentler tuning for small screens
MOBILE_CONFIG = SimulationConfig(
    screenWidth=760,
    screenHeight=640,
    duckRadius=7.6,
    dogRadius=11.4,
    maxSpeed=600.0,
    dogSpeed=600.0,
    dogEffectRadius=140.0,
    separationDistance=30.0,
    targetRingRadius=96.0,
    boundaryMargin=15.0,
    clusterRadiusThreshold=60.0,
    groupSeparationThreshold=150.0,
    spawnRingRadius=120.0,
    spawnRadiusJitter=10.0,
    spawnSpeedMin=75.0,
    spawnSpeedMax=150.0,
    gridCellSize=30,
)

# Configuration for headless benchmarking (reproducible, grid enabled)
BENCHMARK_CONFIG = SimulationConfig(
    randomSeed=42,
    useSpatialGrid=True,
)
