# src/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import Dict, Optional

from src.core.base import SearchSession
from src.core.frontier import MinOpenSet
from src.core.types import Algorithm, Cell


@dataclass
class DijkstraSearch(SearchSession):
    """
    Uniform-cost Dijkstra. Every cell starts at infinity except start; the next
    node is the unvisited cell with the smallest distance, first in row-major
    order on ties. Cells still at infinity are never finalized.
    """
    algorithm = Algorithm.DIJKSTRA

    open_pq: MinOpenSet = field(default_factory=MinOpenSet)
    dist: Dict[Cell, float] = field(default_factory=dict)

    def _seed(self, start: Cell) -> None:
        topo = self.request.topology
        for c in topo.cells():
            self.dist[c] = float("inf")
        self.dist[start] = 0
        self.open_pq.push(start, 0, order=topo.index_of(start))

    def _select(self) -> Optional[Cell]:
        u, _ = self.open_pq.pop()
        return u

    def _relax(self, u: Cell, v: Cell) -> None:
        alt = self.dist[u] + 1
        if alt < self.dist.get(v, float("inf")):
            self.dist[v] = alt
            self.parent[v] = u
            self.open_pq.push(v, alt, order=self.request.topology.index_of(v))

    def _frontier_size(self) -> int:
        return len(self.open_pq)
