import random

import pygame

from duckherd.core.spatial_grid import SpatialGrid


class Point:
    def __init__(self, x, y):
        self.position = pygame.Vector2(x, y)


def test_neighbors_match_brute_force():
    rng = random.Random(11)
    points = [Point(rng.uniform(0, 400), rng.uniform(0, 300)) for _ in range(150)]
    grid = SpatialGrid(400, 300, 30)
    grid.rebuild(points)

    for probe in points[:25]:
        for radius in (10, 30, 75):
            expected = [p for p in points if probe.position.distance_to(p.position) < radius]
            assert grid.get_neighbors(probe.position, radius) == expected


def test_clear_empties_the_grid():
    grid = SpatialGrid(100, 100, 10)
    grid.insert(Point(5, 5))
    grid.clear()
    assert grid.get_neighbors(pygame.Vector2(5, 5), 20) == []


def test_points_on_the_far_edge_are_found():
    grid = SpatialGrid(100, 100, 10)
    edge = Point(100, 100)
    grid.insert(edge)
    assert grid.get_neighbors(pygame.Vector2(95, 95), 10) == [edge]
