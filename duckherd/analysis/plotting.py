"""
Plotting functions for visualizing benchmark results.
"""

from typing import Dict, List

try:
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False


LEVEL_COLORS = ['#4169E1', '#FFB347', '#DC143C', '#32CD32', '#9370DB', '#4ECDC4']


def plot_cluster_radius(results: List[Dict], output_file: str = "cluster_radius_over_time.png",
                        show: bool = True) -> str:
    """
    Plot the mean per-category cluster radius over time, one line per run.

    Args:
        results: Benchmark results (typically the first trial of each level)
        output_file: Output filename for the plot
        show: Open a window after saving

    Returns:
        Path to saved plot file
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping plot.")
        return ""

    fig, ax = plt.subplots(figsize=(12, 7))

    for idx, result in enumerate(results):
        series = result["cluster_radius_over_time"]
        frames = [d["frame"] for d in series]
        radii = [d["mean_radius"] for d in series]
        color = LEVEL_COLORS[idx % len(LEVEL_COLORS)]
        ax.plot(frames, radii, label=f"Level {result['level']}", linewidth=2, color=color)

        if result.get("win_frame"):
            ax.axvline(result["win_frame"], color=color, linestyle=':', alpha=0.7)

    if results:
        threshold = results[0].get("cluster_radius_threshold")
        if threshold:
            ax.axhline(threshold, color='gray', linestyle='--', label='Cluster threshold')

    ax.set_xlabel('Frame Number', fontsize=12, fontweight='bold')
    ax.set_ylabel('Mean cluster radius', fontsize=12, fontweight='bold')
    ax.set_title('Cluster Tightness Over Time (dotted = level won)',
                 fontsize=14, fontweight='bold', pad=20)
    ax.legend(fontsize=11, loc='upper right', framealpha=0.9)
    ax.grid(True, alpha=0.3, linestyle='--')

    fig.tight_layout()
    fig.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"\nPlot saved to: {output_file}")

    if show:
        plt.show()
    plt.close(fig)
    return output_file


def plot_completion_times(aggregates: Dict[int, Dict], output_file: str = "completion_times.png",
                          show: bool = True) -> str:
    """
    Bar chart of mean completion time per level with std error bars.

    Args:
        aggregates: Mapping of level to aggregate stats
        output_file: Output filename for the plot
        show: Open a window after saving

    Returns:
        Path to saved plot file
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping plot.")
        return ""

    levels = sorted(aggregates)
    means = [aggregates[lv].get("completion_time_mean", 0) for lv in levels]
    stds = [aggregates[lv].get("completion_time_std", 0) for lv in levels]
    win_rates = [aggregates[lv].get("win_rate", 0) for lv in levels]

    fig, ax = plt.subplots(figsize=(10, 6))
    bars = ax.bar([str(lv) for lv in levels], means, yerr=stds, capsize=6,
                  color=[LEVEL_COLORS[i % len(LEVEL_COLORS)] for i in range(len(levels))])

    for bar, rate in zip(bars, win_rates):
        ax.annotate(f'{rate:.0%} won', xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    xytext=(0, 5), textcoords='offset points', ha='center', fontsize=9)

    ax.set_xlabel('Level', fontsize=12, fontweight='bold')
    ax.set_ylabel('Completion time (simulated s)', fontsize=12, fontweight='bold')
    ax.set_title('Scripted Sweep: Completion Time by Level', fontsize=14, fontweight='bold')
    ax.grid(True, axis='y', alpha=0.3, linestyle='--')

    fig.tight_layout()
    fig.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"\nCompletion time plot saved to: {output_file}")

    if show:
        plt.show()
    plt.close(fig)
    return output_file
