"""
Core module containing configuration, vector helpers, spatial grid and agents.
"""

from .config import (
    SimulationConfig, DEFAULT_CONFIG, MOBILE_CONFIG, BENCHMARK_CONFIG,
    load_config, save_config, category_count, ducks_per_category,
)
from .spatial_grid import SpatialGrid

__all__ = [
    'SimulationConfig', 'DEFAULT_CONFIG', 'MOBILE_CONFIG', 'BENCHMARK_CONFIG',
    'load_config', 'save_config', 'category_count', 'ducks_per_category',
    'SpatialGrid',
]
