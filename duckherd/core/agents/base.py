"""
Base Agent class for ducks and the dog.
"""

import pygame


class Agent:
    """
    Base class for all agents in the arena.

    Holds position, velocity, accumulated acceleration and the agent's
    radius, which also defines the rectangle the agent must stay in.
    """

    def __init__(self, x: float, y: float, radius: float, config: dict):
        """
        Initialize an agent.

        Args:
            x: Initial x position
            y: Initial y position
            radius: Body radius, constant for the agent's lifetime
            config: Configuration dictionary
        """
        if radius <= 0:
            raise ValueError("agent radius must be positive")
        self.position = pygame.Vector2(x, y)
        self.velocity = pygame.Vector2(0, 0)
        self.acceleration = pygame.Vector2(0, 0)
        self.radius = radius
        self.config = config

    def apply_force(self, force: pygame.Vector2) -> None:
        """
        Add a force to the agent's acceleration.

        Args:
            force: Force vector to apply
        """
        self.acceleration += force

    def bounds(self) -> tuple:
        """
        Rectangle the agent's center must stay in.

        Returns:
            Tuple of (left, top, right, bottom)
        """
        return (
            self.radius,
            self.radius,
            self.config["screenWidth"] - self.radius,
            self.config["screenHeight"] - self.radius,
        )

    def clamp_to_bounds(self) -> None:
        """Snap the position back inside the arena without touching velocity."""
        left, top, right, bottom = self.bounds()
        self.position.x = max(left, min(right, self.position.x))
        self.position.y = max(top, min(bottom, self.position.y))

    def in_bounds(self) -> bool:
        left, top, right, bottom = self.bounds()
        return left <= self.position.x <= right and top <= self.position.y <= bottom
