"""
Category clustering and win detection.
"""

from .clustering import (
    CategoryCluster, ClusterReport, partition_by_category, evaluate_clusters, check_win,
)

__all__ = ['CategoryCluster', 'ClusterReport', 'partition_by_category', 'evaluate_clusters', 'check_win']
