# src/core/board.py
#!/usr/bin/env python3
"""
Editable grid state: start, end and obstacles.

The viewer mutates a Board from mouse/keyboard input and hands the engine a
SearchRequest built from it. The engine only sees the topology and the
is_obstacle predicate, never the Board itself.
"""

from dataclasses import dataclass, field
from typing import Optional, Set, Tuple
import logging
import random

from src.core.errors import InvalidRequest
from src.core.types import Algorithm, Cell, GridTopology, SearchRequest

logger = logging.getLogger(__name__)


def tiles_that_fit(avail_w: int, avail_h: int, tile_px: int) -> Tuple[int, int]:
    """Columns and rows of tile_px tiles that fit in the given area (at least 1x1)."""
    if tile_px <= 0:
        raise ValueError(f"tile size must be positive, got {tile_px}")
    return max(1, avail_w // tile_px), max(1, avail_h // tile_px)


@dataclass
class Board:
    width: int
    height: int
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    obstacles: Set[Cell] = field(default_factory=set)

    def __post_init__(self):
        self.topology = GridTopology(self.width, self.height)

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        return self.topology.in_bounds(c)

    def is_obstacle(self, c: Cell) -> bool:
        return c in self.obstacles

    def has_endpoints(self) -> bool:
        return self.start is not None and self.end is not None

    def free_cells(self) -> int:
        return sum(1 for c in self.topology.cells() if self._is_free(c))

    def _is_free(self, c: Cell) -> bool:
        return c != self.start and c != self.end and c not in self.obstacles

    # -------------------- edits --------------------

    def set_start(self, c: Cell) -> bool:
        """Place start on c. Clicking the current start removes it. Returns True if start is now c."""
        if c == self.start:
            self.start = None
            return False
        self.obstacles.discard(c)
        if c == self.end:
            self.end = None
        self.start = c
        logger.debug("start set at %s", c)
        return True

    def set_end(self, c: Cell) -> bool:
        if c == self.end:
            self.end = None
            return False
        self.obstacles.discard(c)
        if c == self.start:
            self.start = None
        self.end = c
        logger.debug("end set at %s", c)
        return True

    def toggle_obstacle(self, c: Cell) -> bool:
        """True when an obstacle was added, False when removed or c is an endpoint."""
        if c == self.start or c == self.end:
            return False
        if c in self.obstacles:
            self.obstacles.remove(c)
            return False
        self.obstacles.add(c)
        return True

    def add_random_obstacles(self, percentage: int = 10, rng: Optional[random.Random] = None) -> int:
        rng = rng or random.Random()
        free = self.free_cells()
        to_add = (free * percentage) // 100
        max_attempts = free * 2

        placed = 0
        attempts = 0
        while placed < to_add and attempts < max_attempts:
            c = (rng.randrange(self.width), rng.randrange(self.height))
            if self._is_free(c):
                self.obstacles.add(c)
                placed += 1
            attempts += 1

        logger.debug("placed %d of %d random obstacles (%d%% of %d free cells)",
                     placed, to_add, percentage, free)
        return placed

    def clear_all(self) -> None:
        self.start = None
        self.end = None
        self.obstacles.clear()

    def resize(self, width: int, height: int) -> None:
        self.topology = GridTopology(width, height)
        self.width, self.height = width, height
        self.clear_all()

    # -------------------- engine handoff --------------------

    def request(self, algorithm: Algorithm) -> SearchRequest:
        if not self.has_endpoints():
            raise InvalidRequest("Set both start and end cells first!")
        # snapshot so edits made while a search animates do not leak into it
        blocked = frozenset(self.obstacles)
        return SearchRequest(
            start=self.start,
            end=self.end,
            is_obstacle=blocked.__contains__,
            topology=self.topology,
            algorithm=algorithm,
        )

    @classmethod
    def from_rows(cls, rows) -> "Board":
        """Build from strings: '#' obstacle, 'S' start, 'E' end, anything else free."""
        board = cls(width=len(rows[0]), height=len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch == "#":
                    board.obstacles.add((x, y))
                elif ch == "S":
                    board.start = (x, y)
                elif ch == "E":
                    board.end = (x, y)
        return board
