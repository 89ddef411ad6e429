"""
Dog agent steered by the player's pointer.
"""

import math

import pygame

from .base import Agent
from ..vector import length


def wrap_angle(angle: float) -> float:
    """Wrap an angle difference into [-pi, pi]."""
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle < -math.pi:
        angle += 2 * math.pi
    return angle


class Dog(Agent):
    """
    The player's dog.

    Two control modes are supported via ``dogControlMode``:

    - ``"pursuit"``: velocity eases toward a full-speed run at the
      pointer and the facing angle eases toward the heading.
    - ``"direct"``: the dog sits exactly on the pointer every frame.

    In both modes the dog is clamped to the arena and never bounces.
    """

    # Below this speed the heading is too noisy to turn toward
    MIN_TURN_SPEED = 0.1

    def __init__(self, x: float, y: float, config: dict):
        """
        Initialize the dog at rest, facing along +x.

        Args:
            x: Initial x position
            y: Initial y position
            config: Configuration dictionary
        """
        super().__init__(x, y, config["dogRadius"], config)
        self.angle = 0.0
        self.target_angle = 0.0
        self.clamp_to_bounds()

    @classmethod
    def centered(cls, config: dict) -> "Dog":
        return cls(config["screenWidth"] / 2, config["screenHeight"] / 2, config)

    def update(self, target: pygame.Vector2, dt: float) -> None:
        """
        Move the dog toward the steering target for one frame.

        Args:
            target: Pointer position in arena coordinates
            dt: Frame time in seconds
        """
        if self.config["dogControlMode"] == "direct":
            self._place(target, dt)
        else:
            self._pursue(target, dt)

    def _place(self, target: pygame.Vector2, dt: float) -> None:
        previous = pygame.Vector2(self.position)
        self.position = pygame.Vector2(target)
        self.clamp_to_bounds()

        moved = self.position - previous
        if moved.length_squared() > 0:
            self.angle = math.atan2(moved.y, moved.x)
            self.target_angle = self.angle
        self.velocity = moved / dt if dt > 0 else pygame.Vector2(0, 0)

    def _pursue(self, target: pygame.Vector2, dt: float) -> None:
        to_target = pygame.Vector2(target) - self.position
        distance = to_target.length()

        if distance > self.config["dogFollowDistance"]:
            desired = (to_target / distance) * self.config["dogSpeed"]
            self.velocity += (desired - self.velocity) * self.config["dogAcceleration"] * dt
            if length(self.velocity) > self.MIN_TURN_SPEED:
                self.target_angle = math.atan2(self.velocity.y, self.velocity.x)
        else:
            # Close enough: park under the pointer
            self.velocity = pygame.Vector2(0, 0)
            self.position = pygame.Vector2(target)

        angle_diff = wrap_angle(self.target_angle - self.angle)
        self.angle += angle_diff * self.config["dogRotationSpeed"] * dt

        self.position += self.velocity * dt
        self.clamp_to_bounds()
