"""
Analysis module for plotting and exporting benchmark results.
"""

from .plotting import plot_cluster_radius, plot_completion_times
from .export import (
    export_results_to_csv, export_cluster_timeseries_to_csv,
    export_benchmark_report, calculate_aggregate_stats,
)

__all__ = [
    'plot_cluster_radius',
    'plot_completion_times',
    'export_results_to_csv',
    'export_cluster_timeseries_to_csv',
    'export_benchmark_report',
    'calculate_aggregate_stats',
]
