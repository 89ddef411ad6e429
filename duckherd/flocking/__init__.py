"""
Force field driving duck motion.
"""

from .forces import (
    AgentSnapshot, take_snapshot, dog_repulsion, separation, cohesion,
    ring_attraction, boundary_force, net_acceleration,
)

__all__ = [
    'AgentSnapshot', 'take_snapshot', 'dog_repulsion', 'separation', 'cohesion',
    'ring_attraction', 'boundary_force', 'net_acceleration',
]
