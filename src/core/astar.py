# src/core/astar.py
#!/usr/bin/env python3
"""
A* over the 4-connected grid.

Heuristic:
- Manhattan distance to end. Uniform edge cost 1, so h is admissible and consistent.

Open set ordering:
- (f, discovery order): lower f first, then whichever node entered the open set first.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from math import inf

from src.core.base import SearchSession
from src.core.frontier import MinOpenSet
from src.core.types import Algorithm, Cell


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarSearch(SearchSession):
    algorithm = Algorithm.ASTAR

    open_pq: MinOpenSet = field(default_factory=MinOpenSet)
    g: Dict[Cell, int] = field(default_factory=dict)

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.request.end)

    def _seed(self, start: Cell) -> None:
        self.g[start] = 0
        self.open_pq.push(start, self._h(start))

    def _select(self) -> Optional[Cell]:
        u, _ = self.open_pq.pop()
        return u

    def _relax(self, u: Cell, v: Cell) -> None:
        alt = self.g[u] + 1
        if alt < self.g.get(v, inf):
            self.g[v] = alt
            self.parent[v] = u
            self.open_pq.push(v, alt + self._h(v))

    def _frontier_size(self) -> int:
        return len(self.open_pq)
