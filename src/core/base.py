# src/core/base.py
#!/usr/bin/env python3
"""
Shared search skeleton: one session object per search invocation.

Every algorithm follows the same loop:
  - seed the frontier with start
  - pop the next node per the algorithm's selection rule
  - finalize it (closed set + counter)
  - stop on end: walk parents back to start
  - otherwise relax in-bounds, non-obstacle, non-finalized neighbors,
    then emit NodeExplored (never for start or end)

Subclasses only provide _seed(), _select(), _relax() and _frontier_size().
A session is single-pass: iterating it a second time raises RuntimeError.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterator, List, Optional, Set
import logging

from src.core.types import Algorithm, Cell, Done, NodeExplored, SearchEvent, SearchRequest, SearchResult

logger = logging.getLogger(__name__)

NO_PATH_MESSAGE = "No path found"


@dataclass
class SearchSession:
    algorithm: ClassVar[Algorithm]

    request: SearchRequest
    closed_set: Set[Cell] = field(default_factory=set)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    started: bool = False
    result: Optional[SearchResult] = None

    # -------------------- hooks --------------------

    def _seed(self, start: Cell) -> None:
        raise NotImplementedError

    def _select(self) -> Optional[Cell]:
        """Pop the next node to finalize, or None for a stale pop that should be skipped."""
        raise NotImplementedError

    def _relax(self, u: Cell, v: Cell) -> None:
        raise NotImplementedError

    def _frontier_size(self) -> int:
        raise NotImplementedError

    # -------------------- main loop --------------------

    def __iter__(self) -> Iterator[SearchEvent]:
        if self.started:
            raise RuntimeError(f"{self.algorithm.label} session already consumed; start a new search")
        self.started = True
        return self._run()

    def _run(self) -> Iterator[SearchEvent]:
        req = self.request
        logger.debug("%s: searching %s -> %s on %dx%d grid", self.algorithm.label,
                     req.start, req.end, req.topology.width, req.topology.height)
        self._seed(req.start)

        while self._frontier_size() > 0:
            u = self._select()
            if u is None:
                continue

            self.closed_set.add(u)
            self.popped_count += 1

            if u == req.end:
                path = self._reconstruct_path(u)
                yield self._finish(SearchResult(True, path, self.popped_count, algorithm=self.algorithm))
                return

            for v in self._open_neighbors(u):
                self._relax(u, v)

            # emitted only once u's neighbors are relaxed; a pause here sees a whole step
            if u != req.start:
                yield NodeExplored(u, self.popped_count)

        yield self._finish(SearchResult(False, [], self.popped_count, NO_PATH_MESSAGE, algorithm=self.algorithm))

    def _finish(self, result: SearchResult) -> Done:
        self.result = result
        if result.success:
            logger.debug("%s: path of %d cells, %d explored", self.algorithm.label,
                         result.path_length, result.nodes_explored)
        else:
            logger.debug("%s: %s after %d explored", self.algorithm.label, result.message, result.nodes_explored)
        return Done(result)

    # -------------------- helpers --------------------

    def _open_neighbors(self, u: Cell) -> List[Cell]:
        out: List[Cell] = []
        for v in self.request.neighbors(u):
            if self.request.is_obstacle(v) or v in self.closed_set:
                continue
            out.append(v)
        return out

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur = end
        while True:
            path.append(cur)
            if cur == self.request.start:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    def metrics(self) -> dict:
        return {
            "algo": self.algorithm.label,
            "popped": self.popped_count,
            "open_size": self._frontier_size(),
            "closed_count": len(self.closed_set),
            "path_len": self.result.path_length if self.result else 0,
        }
