# src/core/scheduler.py
#!/usr/bin/env python3
"""
Paced delivery of a search's event stream.

The search itself never sleeps. paced() inserts a Pause after every BATCH_SIZE-th
finalized node; the delay depends only on grid size (smaller grids animate slower
so the exploration stays visible). Two consumers:

- StepScheduler : tick driven, for a host that owns its own frame loop (the viewer)
- animate()     : blocking driver for scripts and tests
"""

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union
import logging
import time

from src.core.types import Done, GridTopology, NodeExplored, Pause, SearchEvent, SearchResult

logger = logging.getLogger(__name__)

BATCH_SIZE = 5
# (upper bound on total cells, delay per batch in ms)
DELAY_TABLE = ((100, 60), (300, 30), (600, 15), (1000, 5))
MIN_DELAY_MS = 1


def animation_delay(total_cells: int) -> int:
    for limit, delay in DELAY_TABLE:
        if total_cells < limit:
            return delay
    return MIN_DELAY_MS


def animation_info(topology: GridTopology) -> dict:
    return {
        "grid_size": f"{topology.width}x{topology.height}",
        "total_cells": topology.total_cells,
        "delay_ms": animation_delay(topology.total_cells),
        "update_frequency": f"Every {BATCH_SIZE} nodes",
    }


def paced(events: Iterator[SearchEvent], delay_ms: int,
          batch: int = BATCH_SIZE) -> Iterator[Union[SearchEvent, Pause]]:
    for event in events:
        yield event
        if isinstance(event, NodeExplored) and event.order % batch == 0:
            yield Pause(delay_ms)


@dataclass
class StepScheduler:
    """
    Cooperative driver: the host calls advance(now_ms) once per frame.

    Each call delivers every event up to the next pause point in one go, so the
    host never sees a half-relaxed step. After a pause, nothing is delivered until
    now_ms reaches the resume time. cancel() closes the search; nothing is
    delivered afterwards, including the result.
    """
    events: Iterator[SearchEvent]
    delay_ms: int
    batch: int = BATCH_SIZE
    resume_at: Optional[int] = None
    result: Optional[SearchResult] = None
    delivered: int = 0
    finished: bool = False
    cancelled: bool = False
    _stream: Optional[Iterator[Union[SearchEvent, Pause]]] = field(default=None, repr=False)

    def __post_init__(self):
        self._stream = paced(self.events, self.delay_ms, self.batch)

    @property
    def active(self) -> bool:
        return not (self.finished or self.cancelled)

    def advance(self, now_ms: int) -> List[SearchEvent]:
        if not self.active:
            return []
        if self.resume_at is not None and now_ms < self.resume_at:
            return []
        self.resume_at = None

        out: List[SearchEvent] = []
        for item in self._stream:
            if isinstance(item, Pause):
                self.resume_at = now_ms + item.delay_ms
                break
            out.append(item)
            self.delivered += 1
            if isinstance(item, Done):
                self.result = item.result
                self.finished = True
                break
        else:
            # stream ran dry without Done; treat as finished so the host stops ticking
            self.finished = True
        return out

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        self._stream.close()
        close = getattr(self.events, "close", None)
        if close is not None:
            close()
        logger.debug("search cancelled after %d events", self.delivered)


def animate(
    events: Iterator[SearchEvent],
    delay_ms: int,
    on_event: Optional[Callable[[SearchEvent], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
    batch: int = BATCH_SIZE,
) -> SearchResult:
    for item in paced(events, delay_ms, batch):
        if isinstance(item, Pause):
            sleep(item.delay_ms / 1000.0)
            continue
        if on_event is not None:
            on_event(item)
        if isinstance(item, Done):
            return item.result
    raise RuntimeError("event stream ended without a Done event")
