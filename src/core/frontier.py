# src/core/frontier.py
#!/usr/bin/env python3
"""
Open-set containers for the four searches.

- MinOpenSet : priority queue with a fixed per-cell tie-break key (A*, Dijkstra)
- FifoFrontier : queue (BFS)
- LifoFrontier : stack (DFS)

All three expose push / pop / len so the shared search skeleton can drive them.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple
import heapq

from src.core.types import Cell


@dataclass
class MinOpenSet:
    """
    Min-priority open set with lazy deletion.

    Entries are ordered by (priority, order, cell). A cell's `order` is fixed the
    first time it is pushed and survives later priority decreases, so among equal
    priorities the cell discovered first wins. That is the same pick as scanning
    an insertion-ordered list for the first minimum, without the O(n) scan.
    """
    heap: List[Tuple[int, int, Cell]] = field(default_factory=list)
    priority: Dict[Cell, int] = field(default_factory=dict)
    order: Dict[Cell, int] = field(default_factory=dict)
    seq: int = 0

    def __len__(self) -> int:
        return len(self.priority)

    def __contains__(self, c: Cell) -> bool:
        return c in self.priority

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def push(self, c: Cell, priority: int, order: Optional[int] = None) -> bool:
        """Insert c or lower its priority. Returns True when c was not already open."""
        is_new = c not in self.priority
        if is_new and c not in self.order:
            self.order[c] = self._bump() if order is None else order
        self.priority[c] = priority
        heapq.heappush(self.heap, (priority, self.order[c], c))
        return is_new

    def pop(self) -> Tuple[Cell, int]:
        while self.heap:
            p, _, c = heapq.heappop(self.heap)
            # Ignore stale entries left behind by a priority decrease
            if self.priority.get(c) != p:
                continue
            del self.priority[c]
            return c, p
        raise IndexError("pop from empty open set")


@dataclass
class FifoFrontier:
    queue: Deque[Cell] = field(default_factory=deque)

    def __len__(self) -> int:
        return len(self.queue)

    def push(self, c: Cell) -> None:
        self.queue.append(c)

    def pop(self) -> Cell:
        return self.queue.popleft()


@dataclass
class LifoFrontier:
    stack: List[Cell] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.stack)

    def push(self, c: Cell) -> None:
        self.stack.append(c)

    def pop(self) -> Cell:
        return self.stack.pop()
