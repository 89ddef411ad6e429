"""
Spatial hash grid for neighbor lookup in the arena.
"""

import math
from collections import defaultdict
from typing import List, Tuple, Any


class SpatialGrid:
    """
    Spatial hash grid for neighbor lookup.

    Divides the arena into square cells so a radius query only visits the
    cells that can hold a neighbor. Queries return agents in insertion
    order, which keeps force sums identical to a plain linear scan.
    """

    def __init__(self, width: int, height: int, cell_size: int):
        """
        Initialize the spatial grid.

        Args:
            width: Width of the arena
            height: Height of the arena
            cell_size: Size of each grid cell
        """
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.grid = defaultdict(list)
        self.cols = int(width / cell_size) + 1
        self.rows = int(height / cell_size) + 1
        self._order = {}

    def clear(self) -> None:
        """Clear all agents from the grid."""
        self.grid.clear()
        self._order.clear()

    def _hash(self, x: float, y: float) -> Tuple[int, int]:
        """
        Convert world coordinates to grid cell coordinates.

        Args:
            x: X position in world coordinates
            y: Y position in world coordinates

        Returns:
            Tuple of (column, row) cell indices
        """
        col = int(x / self.cell_size)
        row = int(y / self.cell_size)
        return (max(0, min(col, self.cols - 1)), max(0, min(row, self.rows - 1)))

    def insert(self, agent: Any) -> None:
        """
        Insert an agent into the grid based on its position.

        Args:
            agent: Object with a ``position`` attribute (pygame.Vector2)
        """
        cell = self._hash(agent.position.x, agent.position.y)
        self.grid[cell].append(agent)
        self._order[id(agent)] = len(self._order)

    def rebuild(self, agents: List[Any]) -> None:
        """Clear the grid and insert every agent."""
        self.clear()
        for agent in agents:
            self.insert(agent)

    def get_neighbors(self, position: Any, radius: float) -> List[Any]:
        """
        Get all agents strictly within a given radius of a position.

        Args:
            position: Center position (pygame.Vector2)
            radius: Search radius

        Returns:
            Agents within the radius, in insertion order
        """
        neighbors = []
        cell = self._hash(position.x, position.y)
        span = max(1, math.ceil(radius / self.cell_size))

        for c in self._get_adjacent_cells(cell, span):
            for agent in self.grid.get(c, []):
                if position.distance_to(agent.position) < radius:
                    neighbors.append(agent)

        neighbors.sort(key=lambda a: self._order[id(a)])
        return neighbors

    def _get_adjacent_cells(self, cell: Tuple[int, int], span: int = 1) -> List[Tuple[int, int]]:
        """
        Get a cell and the cells within ``span`` steps of it.

        Args:
            cell: The center cell as (column, row)
            span: How many cells to reach in each direction

        Returns:
            List of cell coordinates to check
        """
        col, row = cell
        cells = []
        for dc in range(-span, span + 1):
            for dr in range(-span, span + 1):
                nc, nr = col + dc, row + dr
                if 0 <= nc < self.cols and 0 <= nr < self.rows:
                    cells.append((nc, nr))
        return cells
