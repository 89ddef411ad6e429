"""
2D vector helpers used by the force field and the integrator.

pygame's own ``length()``/``normalize()`` either return an exact zero or
raise on a zero vector. The helpers here never hand back a zero length, so
coincident agents cannot produce a division by zero anywhere downstream.
"""

import pygame


# Stand-in length for exactly coincident points
EPSILON = 1e-4


def length(v: pygame.Vector2) -> float:
    """Length of ``v``, or EPSILON when the true length is zero."""
    return v.length() or EPSILON


def normalize(v: pygame.Vector2) -> pygame.Vector2:
    """Unit vector along ``v`` (the zero vector stays zero)."""
    return v / length(v)


def distance(a: pygame.Vector2, b: pygame.Vector2) -> float:
    """Distance between two points, or EPSILON when they coincide."""
    return a.distance_to(b) or EPSILON


def scale(v: pygame.Vector2, s: float) -> pygame.Vector2:
    return v * s


def add(a: pygame.Vector2, b: pygame.Vector2) -> pygame.Vector2:
    return a + b


def subtract(a: pygame.Vector2, b: pygame.Vector2) -> pygame.Vector2:
    return a - b


def scale_to_length(v: pygame.Vector2, new_length: float) -> pygame.Vector2:
    """
    Rescale ``v`` to ``new_length`` keeping its direction.

    Args:
        v: Vector to rescale
        new_length: Desired length

    Returns:
        A new vector; an exact zero vector is returned unchanged
    """
    if v.x == 0 and v.y == 0:
        return pygame.Vector2(v)
    return v * (new_length / length(v))
