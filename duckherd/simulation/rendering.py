"""
Drawing helpers shared by the interactive window and video recording.
"""

import math

import pygame

from .state import WAITING, ENDED


def draw_scene(surface, state, debug: bool = False) -> None:
    """
    Draw the arena, ducks, dog and (optionally) cluster diagnostics.

    Args:
        surface: Pygame surface to draw on
        state: SimulationState to render
        debug: Draw cluster circles and centroid links
    """
    config = state.config
    surface.fill(config.backgroundColor)

    r = config.duckRadius
    pygame.draw.rect(surface, config.boundaryColor,
                     pygame.Rect(r, r, config.screenWidth - 2 * r, config.screenHeight - 2 * r), 2)

    center = (int(config.screenWidth / 2), int(config.screenHeight / 2))
    pygame.draw.circle(surface, config.boundaryColor, center, int(config.targetRingRadius), 1)

    if debug:
        _draw_clusters(surface, state)

    for duck in state.ducks:
        _draw_duck(surface, duck)

    _draw_dog(surface, state.dog, config.dogColor)


def _draw_duck(surface, duck) -> None:
    pos = (int(duck.position.x), int(duck.position.y))
    pygame.draw.circle(surface, duck.color(), pos, int(duck.radius))
    if duck.velocity.length() > 0.1:
        tip = duck.position + duck.velocity.normalize() * duck.radius * 1.4
        pygame.draw.line(surface, (255, 165, 0), duck.position, tip, 3)


def _draw_dog(surface, dog, color) -> None:
    pos = (int(dog.position.x), int(dog.position.y))
    pygame.draw.circle(surface, color, pos, int(dog.radius))
    pygame.draw.circle(surface, (60, 40, 20), pos, int(dog.radius), 2)
    heading = pygame.Vector2(math.cos(dog.angle), math.sin(dog.angle))
    pygame.draw.line(surface, (30, 30, 30), dog.position, dog.position + heading * dog.radius * 1.3, 3)


def _draw_clusters(surface, state) -> None:
    """Draw each category's centroid, threshold circle and centroid links."""
    report = state.cluster_report()
    threshold = int(state.config.clusterRadiusThreshold)

    for cluster in report.clusters:
        color = cluster.ducks[0].color()
        center = (int(cluster.centroid.x), int(cluster.centroid.y))
        pygame.draw.circle(surface, color, center, threshold, 1)
        pygame.draw.circle(surface, color, center, 4)

    for i, a in enumerate(report.clusters):
        for b in report.clusters[i + 1:]:
            pygame.draw.line(surface, (90, 90, 90), a.centroid, b.centroid, 1)


def draw_hud(surface, state, font) -> None:
    """Draw level, timer and game-state text."""
    lines = [
        f"Level {state.level}  ({state.category_count} colors, {len(state.ducks)} ducks)",
        f"Time: {state.timer_value:.2f}s",
    ]
    if state.game_state == WAITING:
        lines.append("Click to start")
    elif state.game_state == ENDED:
        lines.append(f"Level complete in {state.final_time:.2f}s - click for next level")

    y = 10
    for text in lines:
        rendered = font.render(text, True, (220, 220, 220))
        surface.blit(rendered, (10, y))
        y += 25
