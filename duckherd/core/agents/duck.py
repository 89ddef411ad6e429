"""
Duck agent: a colored point mass pushed around by the force field.
"""

import math
import random
from typing import List, Optional

import pygame

from .base import Agent
from ..vector import length, scale_to_length
from ...flocking import forces


class Duck(Agent):
    """
    A duck belonging to one color category.

    Forces are gathered by ``flock`` from a frame snapshot, then ``update``
    integrates them:

    - velocity += acceleration * dt
    - clamp speed to ``maxSpeed``
    - damp velocity
    - position += velocity * dt
    - snap to the walls and bounce
    """

    def __init__(self, x: float, y: float, category: int, config: dict,
                 velocity: Optional[pygame.Vector2] = None):
        """
        Initialize a duck.

        Args:
            x: Initial x position
            y: Initial y position
            category: Color category index
            config: Configuration dictionary
            velocity: Initial velocity (defaults to rest)
        """
        super().__init__(x, y, config["duckRadius"], config)
        self.category = category
        if velocity is not None:
            self.velocity = pygame.Vector2(velocity)

    @classmethod
    def spawn(cls, x: float, y: float, category: int, config: dict,
              rng: random.Random) -> "Duck":
        """Create a duck with a random heading and a speed in the spawn range."""
        heading = rng.uniform(0, 2 * math.pi)
        speed = rng.uniform(config["spawnSpeedMin"], config["spawnSpeedMax"])
        velocity = pygame.Vector2(math.cos(heading), math.sin(heading)) * speed
        return cls(x, y, category, config, velocity)

    def flock(self, entry: forces.AgentSnapshot, snapshot: List[forces.AgentSnapshot],
              dog_position: pygame.Vector2, grid=None) -> None:
        """
        Accumulate this frame's forces.

        Args:
            entry: This duck's snapshot
            snapshot: Snapshot of every duck
            dog_position: Dog position this frame
            grid: Optional SpatialGrid over ``snapshot``
        """
        self.apply_force(forces.net_acceleration(
            entry, snapshot, dog_position, self.radius, self.config, grid))

    def update(self, dt: float) -> None:
        """
        Integrate accumulated acceleration over ``dt`` seconds.

        The speed clamp and damping run every frame, even when nothing
        pushed the duck.
        """
        max_speed = self.config["maxSpeed"]

        self.velocity += self.acceleration * dt
        if length(self.velocity) > max_speed:
            self.velocity = scale_to_length(self.velocity, max_speed)
        self.velocity *= self.config["damping"]

        self.position += self.velocity * dt
        self.bounce_off_walls()
        self.acceleration *= 0

    def bounce_off_walls(self) -> None:
        """Snap to any crossed wall and reflect the perpendicular velocity."""
        left, top, right, bottom = self.bounds()
        bounce = self.config["boundaryBounceFactor"]

        if self.position.x < left:
            self.position.x = left
            self.velocity.x = abs(self.velocity.x) * bounce
        elif self.position.x > right:
            self.position.x = right
            self.velocity.x = -abs(self.velocity.x) * bounce

        if self.position.y < top:
            self.position.y = top
            self.velocity.y = abs(self.velocity.y) * bounce
        elif self.position.y > bottom:
            self.position.y = bottom
            self.velocity.y = -abs(self.velocity.y) * bounce

    def color(self) -> tuple:
        palette = self.config["duckColors"]
        return tuple(palette[self.category % len(palette)])
