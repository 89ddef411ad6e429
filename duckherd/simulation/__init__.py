"""
Simulation module: game state, interactive window and benchmark runs.
"""

from .state import SimulationState, initialize_agents, update, check_win
from .interactive import Game
from .benchmark import BenchmarkSimulation

__all__ = ['SimulationState', 'initialize_agents', 'update', 'check_win', 'Game', 'BenchmarkSimulation']
