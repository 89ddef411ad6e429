"""
Interactive duck herding game with a pygame window.
"""

import json
import os
import sys
from typing import Optional

import pygame

from ..core.config import SimulationConfig, DEFAULT_CONFIG
from .rendering import draw_scene, draw_hud
from .state import SimulationState


class Game:
    """
    Interactive herding game.

    Mouse motion steers the dog, clicks start and advance levels, and
    completion times are written to a JSON score file.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, level: int = 1):
        """
        Initialize the window and the simulation state.

        Args:
            config: Simulation configuration (uses defaults if None)
            level: Starting level
        """
        pygame.init()

        self.config = config if config else DEFAULT_CONFIG
        self.screen = pygame.display.set_mode((self.config.screenWidth, self.config.screenHeight))
        pygame.display.set_caption("Duck Herding")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 26)

        self.state = SimulationState(self.config, level=level)
        self.debug = self.config.showDebug
        self.running = True

    def update(self, dt: float) -> None:
        """Advance the simulation by one frame."""
        if self.state.step(dt):
            print(f"Level {self.state.level} completed in {self.state.final_time:.2f}s")

    def draw(self) -> None:
        """Render the current frame."""
        draw_scene(self.screen, self.state, self.debug)
        draw_hud(self.screen, self.state, self.font)
        pygame.display.flip()

    def save_score(self) -> None:
        """Append this session's completed levels to the score file."""
        path = self.config.scoreOutputFile
        history = []
        try:
            if os.path.exists(path):
                with open(path) as f:
                    history = json.load(f)
                if not isinstance(history, list):
                    raise ValueError(f"{path} does not hold a list of scores")
            history.extend(self.state.completed_levels)
            with open(path, 'w') as f:
                json.dump(history, f, indent=4)
            print(f"Scores saved to {path}")
        except (OSError, ValueError) as e:
            print(f"Error saving scores: {e}")
        else:
            self.state.completed_levels = []

    def run(self) -> None:
        """Run the game main loop."""
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.MOUSEMOTION:
                    self.state.set_target(*event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.state.handle_click()
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event.key)

            dt = self.clock.tick(self.config.fpsTarget) / 1000.0
            self.update(dt)
            self.draw()

        if self.state.completed_levels:
            self.save_score()
        pygame.quit()
        sys.exit()

    def _handle_keydown(self, key: int) -> None:
        """Handle keyboard input."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_d:
            self.debug = not self.debug
        elif key == pygame.K_r:
            self.state.reset_level(self.state.level)
            print(f"Level {self.state.level} reseeded")
        elif key == pygame.K_SPACE:
            self.save_score()
