"""
Main entry point for the duck herding game.

Run with:
    python -m duckherd.main                          # Interactive game
    python -m duckherd.main --benchmark              # Headless benchmark, all levels
    python -m duckherd.main --benchmark --level 3    # Benchmark a single level
"""

import os
import sys


# Set dummy video driver for headless benchmarking
def set_headless():
    """Enable headless mode for benchmarking."""
    os.environ["SDL_VIDEODRIVER"] = "dummy"


def build_config(config_path: str = None, mobile: bool = False, seed: int = None,
                 benchmark: bool = False):
    """
    Assemble the configuration from defaults, an optional JSON file and flags.

    Args:
        config_path: JSON file with overrides
        mobile: Start from the small-screen preset
        seed: Random seed override
        benchmark: Start from the benchmark preset

    Returns:
        SimulationConfig
    """
    from dataclasses import replace
    from .core.config import SimulationConfig, MOBILE_CONFIG, BENCHMARK_CONFIG, load_config

    if config_path:
        config = load_config(config_path)
    elif mobile:
        config = replace(MOBILE_CONFIG)
    elif benchmark:
        config = replace(BENCHMARK_CONFIG)
    else:
        config = SimulationConfig()

    if seed is not None:
        config = replace(config, randomSeed=seed)
    return config


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    import argparse

    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def run_interactive(config, level: int = 1):
    """Run the interactive game."""
    from .simulation.interactive import Game

    print("=" * 60)
    print("Duck Herding")
    print("=" * 60)
    print("\nControls:")
    print("  MOUSE - Steer the dog")
    print("  CLICK - Start / next level")
    print("  D     - Toggle cluster debug overlay")
    print("  R     - Reseed the current level")
    print("  SPACE - Save scores to JSON")
    print("  ESC   - Quit")
    print("\nGoal:")
    print("  Herd each color into its own tight group, far from the others.")
    print(f"  Groups must fit within {config.clusterRadiusThreshold:.0f}px of their center")
    print(f"  and be at least {config.groupSeparationThreshold:.0f}px apart.")
    print("\nStarting game...")

    game = Game(config, level=level)
    game.run()


def run_benchmark(config, levels: list, num_trials: int = 5, duration: int = 3600,
                  record_video: bool = False, video_trial: int = 1, show_plots: bool = True):
    """
    Run the headless benchmark over a set of levels.

    Args:
        config: Simulation configuration
        levels: Levels to benchmark
        num_trials: Trials per level
        duration: Maximum frames per trial
        record_video: Whether to record video
        video_trial: Which trial to record
        show_plots: Open plot windows after saving
    """
    if num_trials < 1:
        raise ValueError("num_trials must be at least 1")

    set_headless()

    from .simulation.benchmark import BenchmarkSimulation
    from .analysis.export import (
        export_results_to_csv, export_cluster_timeseries_to_csv,
        export_benchmark_report, calculate_aggregate_stats,
    )
    from .analysis.plotting import plot_cluster_radius, plot_completion_times

    base_seed = config.randomSeed if config.randomSeed is not None else 42

    print("=" * 60)
    print("DUCK HERDING BENCHMARK")
    print("=" * 60)
    print(f"Levels: {levels}")
    print(f"Max frames per trial: {duration}")
    print(f"Trials per level: {num_trials}")
    if record_video:
        print(f"Video recording: ENABLED (trial {video_trial})")
    print()

    all_results = []
    per_level = {}
    for level in levels:
        print(f"\n{'=' * 60}")
        print(f"Benchmarking level {level}")
        print(f"{'=' * 60}")

        results = []
        for trial in range(num_trials):
            print(f"\nTrial {trial + 1}/{num_trials}")

            enable_video = record_video and (trial + 1) == video_trial
            video_file = f"recording_level{level}_trial{trial + 1}.mp4" if enable_video else None

            sim = BenchmarkSimulation(config, level=level, seed=base_seed + trial,
                                      enable_video=enable_video, video_filename=video_file)
            result = sim.run_benchmark(duration)
            result["trial"] = trial + 1
            if enable_video:
                result["video_file"] = video_file
            results.append(result)

        per_level[level] = results
        all_results.extend(results)

    aggregates = {level: calculate_aggregate_stats(results) for level, results in per_level.items()}

    report = {
        "benchmark_config": {"max_frames": duration, "trials_per_level": num_trials,
                             "config": config.to_dict()},
        "levels": {
            str(level): {"trial_results": per_level[level], "aggregates": aggregates[level]}
            for level in levels
        },
    }

    export_benchmark_report(report)
    export_results_to_csv(all_results)
    for level in levels:
        export_cluster_timeseries_to_csv(per_level[level][0])

    print("\n" + "=" * 60)
    print("BENCHMARK RESULTS SUMMARY")
    print("=" * 60)

    for level in levels:
        agg = aggregates[level]
        print(f"\nLEVEL {level}:")
        print(f"   Win rate: {agg.get('win_rate', 0):.0%}")
        if "completion_time_mean" in agg:
            print(f"   Completion: {agg['completion_time_mean']:.2f}s +/- {agg['completion_time_std']:.2f}s")
        print(f"   Frame cost: {agg.get('avg_frame_ms_mean', 0):.3f} ms")
        print(f"   Max duck speed: {agg.get('max_duck_speed_mean', 0):.1f} (limit {config.maxSpeed:.0f})")

    violations = sum(r["containment_violations"] + r["nonfinite_values"] for r in all_results)
    if violations:
        print(f"\nWARNING: {violations} containment/finiteness violations recorded")

    print("\nGenerating plots...")
    plot_cluster_radius([per_level[level][0] for level in levels], show=show_plots)
    plot_completion_times(aggregates, show=show_plots)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Duck herding game")
    parser.add_argument("--benchmark", action="store_true", help="Run headless benchmark")
    parser.add_argument("--level", type=int, default=None, help="Level to play or benchmark")
    parser.add_argument("--trials", type=positive_int, default=5, help="Number of benchmark trials per level")
    parser.add_argument("--duration", type=positive_int, default=3600, help="Maximum frames per trial")
    parser.add_argument("--record-video", action="store_true", help="Record video during benchmark")
    parser.add_argument("--no-show", action="store_true", help="Save plots without opening windows")
    parser.add_argument("--config", type=str, default=None, help="JSON configuration file")
    parser.add_argument("--mobile", action="store_true", help="Use the small-screen preset")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    try:
        config = build_config(args.config, args.mobile, args.seed, benchmark=args.benchmark)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    if args.benchmark:
        levels = [args.level] if args.level else list(range(1, config.maxLevel + 1))
        run_benchmark(
            config,
            levels,
            num_trials=args.trials,
            duration=args.duration,
            record_video=args.record_video,
            show_plots=not args.no_show,
        )
    else:
        run_interactive(config, level=args.level or 1)


if __name__ == "__main__":
    main()
