# src/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from src.core.errors import InvalidRequest

Cell = Tuple[int, int]  # (col, row)


class Algorithm(str, Enum):
    ASTAR = "astar"
    DIJKSTRA = "dijkstra"
    BFS = "bfs"
    DFS = "dfs"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Algorithm.ASTAR: "A*",
    Algorithm.DIJKSTRA: "Dijkstra",
    Algorithm.BFS: "BFS",
    Algorithm.DFS: "DFS",
}

# up, right, down, left (row grows downward)
DIRECTIONS: Tuple[Cell, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


@dataclass(frozen=True)
class GridTopology:
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {self.width}x{self.height}")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(self, c: Cell) -> List[Cell]:
        """In-bounds 4-neighbors of c, always in up/right/down/left order."""
        x, y = c
        out: List[Cell] = []
        for dx, dy in DIRECTIONS:
            n = (x + dx, y + dy)
            if self.in_bounds(n):
                out.append(n)
        return out

    def index_of(self, c: Cell) -> int:
        x, y = c
        return y * self.width + x

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)


@dataclass(frozen=True)
class SearchRequest:
    start: Cell
    end: Cell
    is_obstacle: Callable[[Cell], bool]
    topology: GridTopology
    algorithm: Algorithm = Algorithm.ASTAR
    neighbors_of: Optional[Callable[[Cell], Sequence[Cell]]] = None

    def __post_init__(self):
        if self.start is None or self.end is None:
            raise InvalidRequest("Start and end cells required")
        for role, c in (("start", self.start), ("end", self.end)):
            if not self.topology.in_bounds(c):
                raise InvalidRequest(f"{role} {c} is outside the {self.topology.width}x{self.topology.height} grid")

    def neighbors(self, c: Cell) -> Sequence[Cell]:
        if self.neighbors_of is not None:
            return self.neighbors_of(c)
        return self.topology.neighbors(c)


@dataclass
class SearchResult:
    success: bool
    path: List[Cell] = field(default_factory=list)
    nodes_explored: int = 0
    message: str = ""
    algorithm: Optional[Algorithm] = None

    @property
    def path_length(self) -> int:
        return len(self.path)


@dataclass(frozen=True)
class NodeExplored:
    cell: Cell
    order: int  # nodes finalized so far, start included


@dataclass(frozen=True)
class Done:
    result: SearchResult


@dataclass(frozen=True)
class Pause:
    delay_ms: int


SearchEvent = Union[NodeExplored, Done]
