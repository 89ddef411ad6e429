"""
Force field acting on ducks.

Each force is a separate function so the contributions can be tested and
tuned on their own. ``net_acceleration`` sums them for one duck. Every
function reads positions from a frame snapshot, never from live ducks, so
the order ducks are processed in cannot bias the result.
"""

from typing import Iterable, List, NamedTuple, Optional

import pygame

from ..core import vector


# Offset added to separation distances so the falloff never divides by zero
SEPARATION_OFFSET = 0.1

# How many nearest same-category ducks cohesion steers toward
COHESION_NEIGHBORS = 3


class AgentSnapshot(NamedTuple):
    """Frozen copy of one duck's state at the start of a frame."""
    index: int
    position: pygame.Vector2
    category: int


def take_snapshot(ducks: list) -> List[AgentSnapshot]:
    """
    Copy every duck's position and category.

    Args:
        ducks: Live duck list

    Returns:
        Snapshots in the same order as ``ducks``
    """
    return [AgentSnapshot(i, pygame.Vector2(d.position), d.category) for i, d in enumerate(ducks)]


def arena_center(config: dict) -> pygame.Vector2:
    return pygame.Vector2(config["screenWidth"] / 2, config["screenHeight"] / 2)


def dog_repulsion(position: pygame.Vector2, dog_position: pygame.Vector2, config: dict) -> pygame.Vector2:
    """
    Push away from the dog, growing toward double strength up close.

    The force drops straight to zero at ``dogEffectRadius``; there is no
    fade-out at the edge.

    Args:
        position: Duck position
        dog_position: Dog position
        config: Configuration dictionary

    Returns:
        Repulsion acceleration
    """
    effect_radius = config["dogEffectRadius"]
    to_duck = vector.subtract(position, dog_position)
    dist = vector.length(to_duck)

    if dist >= effect_radius:
        return pygame.Vector2(0, 0)

    strength = config["dogRepulsionStrength"] * (1 + (effect_radius - dist) / effect_radius)
    return vector.scale(vector.normalize(to_duck), strength / dist)


def separation(position: pygame.Vector2, neighbors: Iterable[AgentSnapshot], config: dict) -> pygame.Vector2:
    """
    Push apart from ducks closer than ``separationDistance``.

    Each close neighbor contributes a unit vector away from it, weighted by
    ``(separationDistance / (d + 0.1)) ** 2``.

    Args:
        position: Duck position
        neighbors: Candidate ducks, excluding the duck itself
        config: Configuration dictionary

    Returns:
        Separation acceleration
    """
    sep_distance = config["separationDistance"]
    steering = pygame.Vector2(0, 0)

    for other in neighbors:
        diff = vector.subtract(position, other.position)
        d = vector.length(diff)
        if d < sep_distance:
            factor = (sep_distance / (d + SEPARATION_OFFSET)) ** 2
            steering = vector.add(steering, vector.scale(vector.normalize(diff), factor))

    return vector.scale(steering, config["separationStrength"])


def nearest_same_category(entry: AgentSnapshot, snapshot: List[AgentSnapshot],
                          count: int = COHESION_NEIGHBORS) -> List[AgentSnapshot]:
    """
    Up to ``count`` nearest ducks sharing ``entry``'s category.

    The sort is stable, so equal distances keep snapshot order.
    """
    candidates = [
        (vector.distance(entry.position, other.position), other)
        for other in snapshot
        if other.index != entry.index and other.category == entry.category
    ]
    candidates.sort(key=lambda c: c[0])
    return [other for _, other in candidates[:count]]


def cohesion(entry: AgentSnapshot, snapshot: List[AgentSnapshot], config: dict) -> pygame.Vector2:
    """
    Steer toward the centroid of the nearest same-category ducks.

    Args:
        entry: Snapshot of the duck being steered
        snapshot: Snapshot of every duck
        config: Configuration dictionary

    Returns:
        Cohesion acceleration (zero if the duck has no same-category peers)
    """
    neighbors = nearest_same_category(entry, snapshot)
    if not neighbors:
        return pygame.Vector2(0, 0)

    centroid = pygame.Vector2(0, 0)
    for other in neighbors:
        centroid = vector.add(centroid, other.position)
    centroid = vector.scale(centroid, 1 / len(neighbors))

    return vector.scale(vector.subtract(centroid, entry.position), config["cohesionStrength"])


def ring_attraction(position: pygame.Vector2, config: dict) -> pygame.Vector2:
    """
    Pull the duck radially toward ``targetRingRadius`` around the center.

    Returns:
        Ring acceleration, outward when inside the ring and inward outside
    """
    radial = vector.subtract(position, arena_center(config))
    error = vector.length(radial) - config["targetRingRadius"]
    return vector.scale(vector.normalize(radial), -(error * config["ringAttractionStrength"]))


def boundary_force(position: pygame.Vector2, radius: float, config: dict) -> pygame.Vector2:
    """
    Push inward from walls the duck is within ``boundaryMargin`` of.

    The push grows quadratically from zero at the margin edge to twice
    ``boundaryForceStrength`` at the wall itself.

    Args:
        position: Duck position
        radius: Duck radius; walls sit one radius in from the arena edge
        config: Configuration dictionary

    Returns:
        Boundary acceleration
    """
    margin = config["boundaryMargin"]
    if margin <= 0:
        return pygame.Vector2(0, 0)

    max_force = config["boundaryForceStrength"] * 2
    left, top = radius, radius
    right = config["screenWidth"] - radius
    bottom = config["screenHeight"] - radius

    def push(gap: float) -> float:
        gap = max(gap, 0.0)
        if gap >= margin:
            return 0.0
        return max_force * (1.0 - gap / margin) ** 2

    force = pygame.Vector2(0, 0)
    force.x += push(position.x - left)
    force.x -= push(right - position.x)
    force.y += push(position.y - top)
    force.y -= push(bottom - position.y)
    return force


def net_acceleration(entry: AgentSnapshot, snapshot: List[AgentSnapshot],
                     dog_position: pygame.Vector2, radius: float, config: dict,
                     grid: Optional[object] = None) -> pygame.Vector2:
    """
    Sum of every force acting on one duck.

    Args:
        entry: Snapshot of the duck
        snapshot: Snapshot of every duck this frame
        dog_position: Dog position this frame
        radius: Duck radius
        config: Configuration dictionary
        grid: Optional SpatialGrid built from ``snapshot``

    Returns:
        Net acceleration vector
    """
    if grid is not None:
        candidates = grid.get_neighbors(entry.position, config["separationDistance"])
    else:
        candidates = snapshot
    others = [other for other in candidates if other.index != entry.index]

    acceleration = pygame.Vector2(0, 0)
    acceleration += dog_repulsion(entry.position, dog_position, config)
    acceleration += separation(entry.position, others, config)
    acceleration += cohesion(entry, snapshot, config)
    acceleration += ring_attraction(entry.position, config)
    acceleration += boundary_force(entry.position, radius, config)
    return acceleration
