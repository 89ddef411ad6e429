"""
Per-category clustering and the level win condition.
"""

import itertools
from collections import defaultdict
from typing import Dict, List, NamedTuple, Optional

import pygame


class CategoryCluster:
    """
    All ducks of one color category.

    Summarizes the group as a centroid and the largest distance from the
    centroid to any member.
    """

    def __init__(self, category: int, ducks: List):
        """
        Initialize a category cluster.

        Args:
            category: Category index shared by every duck
            ducks: Ducks in this category (must not be empty)
        """
        self.category = category
        self.ducks = ducks
        self.size = len(ducks)
        self.centroid = self._calculate_centroid()
        self.radius = self._calculate_radius()

    def _calculate_centroid(self) -> pygame.Vector2:
        """
        Calculate the mean position of the cluster.

        Returns:
            Centroid position as Vector2
        """
        if not self.ducks:
            return pygame.Vector2(0, 0)

        center = pygame.Vector2(0, 0)
        for duck in self.ducks:
            center += duck.position
        return center / len(self.ducks)

    def _calculate_radius(self) -> float:
        """
        Calculate the spread of the cluster.

        Returns:
            Maximum distance from centroid to any duck
        """
        max_dist = 0.0
        for duck in self.ducks:
            dist = self.centroid.distance_to(duck.position)
            if dist > max_dist:
                max_dist = dist
        return max_dist

    def distance_to(self, other: "CategoryCluster") -> float:
        return self.centroid.distance_to(other.centroid)

    def is_tight(self, threshold: float) -> bool:
        return self.radius <= threshold


class ClusterReport(NamedTuple):
    """Outcome of evaluating every category for one frame."""
    clusters: List[CategoryCluster]
    min_separation: Optional[float]
    all_present: bool
    all_tight: bool
    all_separated: bool

    @property
    def won(self) -> bool:
        return self.all_present and self.all_tight and self.all_separated

    @property
    def mean_radius(self) -> float:
        if not self.clusters:
            return 0.0
        return sum(c.radius for c in self.clusters) / len(self.clusters)


def partition_by_category(ducks: List) -> Dict[int, List]:
    """
    Group ducks by category, keeping first-seen category order.

    Args:
        ducks: List of ducks

    Returns:
        Mapping of category to its ducks
    """
    groups = defaultdict(list)
    for duck in ducks:
        groups[duck.category].append(duck)
    return dict(groups)


def evaluate_clusters(ducks: List, category_count: int,
                      cluster_radius_threshold: float,
                      group_separation_threshold: float) -> ClusterReport:
    """
    Measure every category cluster against the win thresholds.

    Nothing is mutated, so this is safe to call every frame and for
    drawing or statistics.

    Args:
        ducks: Current ducks
        category_count: Categories the level requires
        cluster_radius_threshold: Largest allowed member-to-centroid distance
        group_separation_threshold: Smallest allowed centroid-to-centroid distance

    Returns:
        ClusterReport describing the frame
    """
    groups = partition_by_category(ducks)
    clusters = [CategoryCluster(category, members) for category, members in groups.items()]

    min_separation = None
    for a, b in itertools.combinations(clusters, 2):
        dist = a.distance_to(b)
        if min_separation is None or dist < min_separation:
            min_separation = dist

    return ClusterReport(
        clusters=clusters,
        min_separation=min_separation,
        all_present=len(clusters) >= category_count,
        all_tight=all(c.is_tight(cluster_radius_threshold) for c in clusters),
        all_separated=min_separation is None or min_separation >= group_separation_threshold,
    )


def check_win(ducks: List, category_count: int,
              cluster_radius_threshold: float,
              group_separation_threshold: float) -> bool:
    """
    Decide whether the level is complete.

    The level is won when every required category is present, each
    category is within ``cluster_radius_threshold`` of its centroid, and
    every pair of centroids is at least ``group_separation_threshold``
    apart.

    Args:
        ducks: Current ducks
        category_count: Categories the level requires
        cluster_radius_threshold: Largest allowed member-to-centroid distance
        group_separation_threshold: Smallest allowed centroid-to-centroid distance

    Returns:
        True if the level is won
    """
    groups = partition_by_category(ducks)
    if len(groups) < category_count:
        return False

    clusters = []
    for category, members in groups.items():
        cluster = CategoryCluster(category, members)
        if not cluster.is_tight(cluster_radius_threshold):
            return False
        clusters.append(cluster)

    for a, b in itertools.combinations(clusters, 2):
        if a.distance_to(b) < group_separation_threshold:
            return False

    return True
