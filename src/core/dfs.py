# src/core/dfs.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import Optional

from src.core.base import SearchSession
from src.core.frontier import LifoFrontier
from src.core.types import Algorithm, Cell


@dataclass
class DFSSearch(SearchSession):
    """
    Depth-first search. Not optimal: the path is whatever branch reaches end first.

    A cell can sit on the stack several times; it is marked visited when popped,
    and later copies are skipped. The last cell to push a neighbor becomes its
    parent, which is also the copy that gets popped first.
    """
    algorithm = Algorithm.DFS

    stack: LifoFrontier = field(default_factory=LifoFrontier)

    def _seed(self, start: Cell) -> None:
        self.stack.push(start)

    def _select(self) -> Optional[Cell]:
        u = self.stack.pop()
        if u in self.closed_set:
            return None
        return u

    def _relax(self, u: Cell, v: Cell) -> None:
        self.parent[v] = u
        self.stack.push(v)

    def _frontier_size(self) -> int:
        return len(self.stack)
