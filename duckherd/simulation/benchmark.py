"""
Headless benchmark runs for stability checks and data collection.
"""

import math
import random
import time
from typing import Dict, Optional, Any

import pygame

try:
    import numpy as np
    import cv2
    VIDEO_SUPPORT = True
except ImportError:
    VIDEO_SUPPORT = False

from ..core.config import SimulationConfig
from .rendering import draw_scene, draw_hud
from .state import SimulationState, RUNNING


# Frames between time-series samples
CLUSTER_TRACKING_INTERVAL = 10


def sweep_target(frame: int, dt: float, config: dict) -> pygame.Vector2:
    """
    Scripted pointer path: a slow Lissajous sweep around the arena center.

    Args:
        frame: Frame number
        dt: Fixed frame time
        config: Configuration dictionary

    Returns:
        Pointer position for this frame
    """
    t = frame * dt
    width = config["screenWidth"]
    height = config["screenHeight"]
    x = width / 2 + 0.4 * width * math.sin(0.7 * t)
    y = height / 2 + 0.4 * height * math.sin(1.1 * t + math.pi / 4)
    return pygame.Vector2(x, y)


class BenchmarkSimulation:
    """
    Benchmark run of one level with a scripted pointer.

    Runs headless (no window) by default but supports video recording.
    Tracks numerical health (speed bound, containment, finiteness) along
    with how the clusters evolve and when the level is won.
    """

    def __init__(self, config: SimulationConfig, level: int = 1, seed: Optional[int] = None,
                 enable_video: bool = False, video_filename: Optional[str] = None,
                 video_fps: int = 30):
        """
        Initialize benchmark simulation.

        Args:
            config: Simulation configuration
            level: Level to play
            seed: Seed for the simulation's random source
            enable_video: Whether to record video
            video_filename: Output video filename
            video_fps: Video frame rate
        """
        self.config = config
        self.level = level
        rng = random.Random(seed if seed is not None else config.randomSeed)
        self.state = SimulationState(config, rng=rng, level=level)
        self.state.game_state = RUNNING
        self.dt = 1.0 / config.fpsTarget

        # Video recording
        self.enable_video = enable_video and VIDEO_SUPPORT
        self.video_writer = None
        self.video_filename = video_filename
        self.frame_skip = max(1, config.fpsTarget // video_fps)
        self.screen = None
        self.font = None

        if self.enable_video and self.video_filename:
            pygame.init()
            self.screen = pygame.Surface((config.screenWidth, config.screenHeight))
            self.font = pygame.font.Font(None, 24)
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.video_writer = cv2.VideoWriter(
                self.video_filename, fourcc, video_fps, (config.screenWidth, config.screenHeight)
            )
            print(f"  Recording video to: {self.video_filename}")

        self.frame_count = 0
        self.start_time = time.time()

        self.stats = {
            "win_frame": None,
            "completion_time": None,
            "timed_frames": 0,
            "compute_time_total": 0.0,
            "max_frame_ms": 0.0,
            "max_duck_speed": 0.0,
            "containment_violations": 0,
            "nonfinite_values": 0,
            "cluster_radius_over_time": [],
        }

    def update(self) -> None:
        """Advance one frame and record statistics."""
        target = sweep_target(self.frame_count, self.dt, self.state.config_dict)
        self.state.set_target(target.x, target.y)

        started = time.perf_counter()
        won = self.state.step(self.dt)
        elapsed = time.perf_counter() - started

        self.frame_count += 1
        # Frames after the win are no-ops and stay out of the timing
        if self.stats["win_frame"] is None:
            self.stats["timed_frames"] += 1
            self.stats["compute_time_total"] += elapsed
            self.stats["max_frame_ms"] = max(self.stats["max_frame_ms"], elapsed * 1000)

        if won and self.stats["win_frame"] is None:
            self.stats["win_frame"] = self.frame_count
            self.stats["completion_time"] = self.state.final_time

        self._update_statistics()

    def _update_statistics(self) -> None:
        """Check numerical health and sample the cluster time series."""
        for duck in self.state.ducks:
            values = (duck.position.x, duck.position.y, duck.velocity.x, duck.velocity.y)
            if not all(math.isfinite(v) for v in values):
                self.stats["nonfinite_values"] += 1
                continue
            self.stats["max_duck_speed"] = max(self.stats["max_duck_speed"], duck.velocity.length())
            if not duck.in_bounds():
                self.stats["containment_violations"] += 1

        if not self.state.dog.in_bounds():
            self.stats["containment_violations"] += 1

        if self.frame_count % CLUSTER_TRACKING_INTERVAL == 0:
            report = self.state.cluster_report()
            self.stats["cluster_radius_over_time"].append({
                "frame": self.frame_count,
                "mean_radius": report.mean_radius,
                "min_separation": report.min_separation,
                "won": report.won,
            })

    def run_benchmark(self, max_frames: int, stop_on_win: bool = True) -> Dict[str, Any]:
        """
        Run benchmark for up to ``max_frames`` frames.

        Args:
            max_frames: Maximum frames to simulate
            stop_on_win: Stop as soon as the level is won

        Returns:
            Results dictionary with all statistics
        """
        print(f"Running level {self.level} for up to {max_frames} frames...")

        while self.frame_count < max_frames:
            self.update()

            if self.enable_video and self.video_writer:
                if self.frame_count % self.frame_skip == 0:
                    self._render_frame()
                    self._capture_frame()

            if stop_on_win and self.stats["win_frame"] is not None:
                print(f"  Level won at frame {self.frame_count} "
                      f"({self.stats['completion_time']:.2f}s simulated)")
                break

            if self.frame_count % 1000 == 0:
                elapsed = time.time() - self.start_time
                progress = (self.frame_count / max_frames) * 100
                print(f"  Progress: {progress:.1f}% ({self.frame_count}/{max_frames} frames, "
                      f"{elapsed:.1f}s elapsed)")

        if self.video_writer:
            self.video_writer.release()
            print("  Video saved successfully!")

        return self.get_results()

    def _render_frame(self) -> None:
        """Render frame for video capture."""
        draw_scene(self.screen, self.state, debug=True)
        draw_hud(self.screen, self.state, self.font)

    def _capture_frame(self) -> None:
        """Capture frame to video."""
        if not self.video_writer or not VIDEO_SUPPORT:
            return

        frame = pygame.surfarray.array3d(self.screen)
        frame = np.transpose(frame, (1, 0, 2))
        frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)
        self.video_writer.write(frame)

    def get_results(self) -> Dict[str, Any]:
        """
        Get benchmark results.

        Returns:
            Dictionary containing all statistics and derived metrics
        """
        avg_frame_ms = 0.0
        if self.stats["timed_frames"] > 0:
            avg_frame_ms = self.stats["compute_time_total"] / self.stats["timed_frames"] * 1000

        series = self.stats["cluster_radius_over_time"]
        final_radius = series[-1]["mean_radius"] if series else self.state.cluster_report().mean_radius

        return {
            "level": self.level,
            "categories": self.state.category_count,
            "duck_count": len(self.state.ducks),
            "frames": self.frame_count,
            "won": self.stats["win_frame"] is not None,
            "win_frame": self.stats["win_frame"],
            "completion_time": self.stats["completion_time"],
            "elapsed_time_seconds": time.time() - self.start_time,
            "timed_frames": self.stats["timed_frames"],
            "avg_frame_ms": avg_frame_ms,
            "max_frame_ms": self.stats["max_frame_ms"],
            "max_duck_speed": self.stats["max_duck_speed"],
            "speed_limit": self.config.maxSpeed,
            "containment_violations": self.stats["containment_violations"],
            "nonfinite_values": self.stats["nonfinite_values"],
            "final_mean_cluster_radius": final_radius,
            "cluster_radius_threshold": self.config.clusterRadiusThreshold,
            "cluster_radius_over_time": series,
        }
