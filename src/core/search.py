# src/core/search.py
#!/usr/bin/env python3
"""
Engine entry points.

- resolve_algorithm(name) -> Algorithm      (unknown names fall back to A* with a warning)
- search(request)         -> lazy SearchEvent stream, Done last
- run_search(...)         -> SearchResult   (drains the stream)
"""

from typing import Callable, Dict, Iterator, Optional, Sequence, Type, Union
import logging
import warnings

from src.core.astar import AStarSearch
from src.core.base import SearchSession
from src.core.bfs import BFSSearch
from src.core.dfs import DFSSearch
from src.core.dijkstra import DijkstraSearch
from src.core.errors import UnsupportedAlgorithmWarning
from src.core.types import Algorithm, Cell, Done, GridTopology, SearchEvent, SearchRequest, SearchResult

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = Algorithm.ASTAR

SESSIONS: Dict[Algorithm, Type[SearchSession]] = {
    Algorithm.ASTAR: AStarSearch,
    Algorithm.DIJKSTRA: DijkstraSearch,
    Algorithm.BFS: BFSSearch,
    Algorithm.DFS: DFSSearch,
}


def resolve_algorithm(name: Union[str, Algorithm, None]) -> Algorithm:
    if isinstance(name, Algorithm):
        return name
    key = name.strip().lower() if isinstance(name, str) else None
    try:
        return Algorithm(key)
    except ValueError:
        msg = f"Unsupported algorithm: {name!r}. Using {DEFAULT_ALGORITHM.label} instead."
        logger.warning(msg)
        warnings.warn(msg, UnsupportedAlgorithmWarning, stacklevel=2)
        return DEFAULT_ALGORITHM


def new_session(request: SearchRequest) -> SearchSession:
    return SESSIONS[request.algorithm](request)


def search(request: SearchRequest) -> Iterator[SearchEvent]:
    """Fresh, single-pass event stream for one search."""
    return iter(new_session(request))


def drain(events: Iterator[SearchEvent]) -> SearchResult:
    for event in events:
        if isinstance(event, Done):
            return event.result
    raise RuntimeError("event stream ended without a Done event")


def run_search(
    algorithm: Union[str, Algorithm, None],
    start: Optional[Cell],
    end: Optional[Cell],
    is_obstacle: Callable[[Cell], bool],
    topology: GridTopology,
    neighbors_of: Optional[Callable[[Cell], Sequence[Cell]]] = None,
) -> SearchResult:
    request = SearchRequest(
        start=start,
        end=end,
        is_obstacle=is_obstacle,
        topology=topology,
        algorithm=resolve_algorithm(algorithm),
        neighbors_of=neighbors_of,
    )
    return drain(search(request))
