# src/core/bfs.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import Optional, Set

from src.core.base import SearchSession
from src.core.frontier import FifoFrontier
from src.core.types import Algorithm, Cell


@dataclass
class BFSSearch(SearchSession):
    """Breadth-first search. Cells are marked on discovery so each is queued once."""
    algorithm = Algorithm.BFS

    queue: FifoFrontier = field(default_factory=FifoFrontier)
    discovered: Set[Cell] = field(default_factory=set)

    def _seed(self, start: Cell) -> None:
        self.discovered.add(start)
        self.queue.push(start)

    def _select(self) -> Optional[Cell]:
        return self.queue.pop()

    def _relax(self, u: Cell, v: Cell) -> None:
        if v in self.discovered:
            return
        self.discovered.add(v)
        self.parent[v] = u
        self.queue.push(v)

    def _frontier_size(self) -> int:
        return len(self.queue)
