"""
Export functions for saving benchmark results to CSV and JSON.
"""

import csv
import json
import math
from typing import Dict, List, Any


def export_results_to_csv(results: List[Dict], filename: str = "benchmark_results.csv") -> str:
    """
    Export per-trial benchmark results to CSV format.

    Args:
        results: Result dictionaries, each with ``level`` and ``trial`` keys
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    with open(filename, 'w', newline='') as csvfile:
        fieldnames = ['simulation_id', 'level', 'categories', 'duck_count', 'won',
                      'win_frame', 'completion_time', 'avg_frame_ms', 'max_duck_speed',
                      'containment_violations', 'nonfinite_values']
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)

        writer.writeheader()

        for result in results:
            writer.writerow({
                'simulation_id': f"level{result['level']}_trial{result.get('trial', 1)}",
                'level': result['level'],
                'categories': result['categories'],
                'duck_count': result['duck_count'],
                'won': result['won'],
                'win_frame': result['win_frame'] if result['win_frame'] is not None else '',
                'completion_time': f"{result['completion_time']:.3f}" if result['completion_time'] is not None else '',
                'avg_frame_ms': f"{result['avg_frame_ms']:.4f}",
                'max_duck_speed': f"{result['max_duck_speed']:.2f}",
                'containment_violations': result['containment_violations'],
                'nonfinite_values': result['nonfinite_values'],
            })

    print(f"\nCSV results saved to: {filename}")
    return filename


def export_cluster_timeseries_to_csv(result: Dict, filename: str = None) -> str:
    """
    Export the mean cluster radius and closest centroid pair over time.

    Args:
        result: Result dictionary from one benchmark run
        filename: Output filename (auto-generated if None)

    Returns:
        Path to saved CSV file
    """
    if filename is None:
        filename = f"cluster_timeseries_level{result['level']}.csv"

    with open(filename, 'w', newline='') as csvfile:
        fieldnames = ['frame', 'mean_radius', 'min_separation', 'won']
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()

        for entry in result["cluster_radius_over_time"]:
            separation = entry["min_separation"]
            writer.writerow({
                'frame': entry["frame"],
                'mean_radius': f"{entry['mean_radius']:.2f}",
                'min_separation': f"{separation:.2f}" if separation is not None else '',
                'won': entry["won"],
            })

    print(f"  Cluster time-series saved to: {filename}")
    return filename


def export_benchmark_report(results: Dict[str, Any], filename: str = "herding_benchmark_results.json") -> str:
    """
    Export full benchmark report to JSON.

    Args:
        results: Complete benchmark results dictionary
        filename: Output filename

    Returns:
        Path to saved JSON file
    """
    with open(filename, 'w') as f:
        json.dump(results, f, indent=2)

    print(f"\nBenchmark report saved to: {filename}")
    return filename


def calculate_aggregate_stats(trial_results: List[Dict]) -> Dict[str, float]:
    """
    Calculate mean and standard deviation across trials.

    Args:
        trial_results: List of result dictionaries from multiple trials

    Returns:
        Dictionary with mean and std for each metric, plus the win rate
    """
    if not trial_results:
        return {}

    metrics = [
        "win_frame", "completion_time", "avg_frame_ms", "max_frame_ms",
        "max_duck_speed", "final_mean_cluster_radius", "elapsed_time_seconds",
    ]

    aggregates = {
        "win_rate": sum(1 for r in trial_results if r.get("won")) / len(trial_results),
    }

    for metric in metrics:
        values = [r[metric] for r in trial_results if metric in r and r[metric] is not None]
        if values:
            mean = sum(values) / len(values)
            aggregates[f"{metric}_mean"] = mean
            if len(values) > 1:
                variance = sum((x - mean) ** 2 for x in values) / (len(values) - 1)
                aggregates[f"{metric}_std"] = math.sqrt(variance)
            else:
                aggregates[f"{metric}_std"] = 0

    return aggregates
