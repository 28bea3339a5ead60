import pytest

from src.core.board import Board
from src.core.scheduler import StepScheduler, animate, animation_delay, animation_info, paced
from src.core.search import new_session, search
from src.core.types import Algorithm, Done, GridTopology, NodeExplored, Pause, SearchResult


def fake_trace(last_order):
    events = [NodeExplored((i, 0), i) for i in range(2, last_order + 1)]
    events.append(Done(SearchResult(True, [(0, 0)], last_order + 1)))
    return events


@pytest.mark.parametrize("cells,delay", [
    (1, 60), (99, 60),
    (100, 30), (299, 30),
    (300, 15), (599, 15),
    (600, 5), (999, 5),
    (1000, 1), (50000, 1),
])
def test_animation_delay_table(cells, delay):
    assert animation_delay(cells) == delay


def test_animation_info():
    info = animation_info(GridTopology(20, 15))
    assert info == {
        "grid_size": "20x15",
        "total_cells": 300,
        "delay_ms": 15,
        "update_frequency": "Every 5 nodes",
    }


def test_paced_pauses_every_fifth_finalized_node():
    items = list(paced(iter(fake_trace(11)), delay_ms=30))
    pauses = [i for i, item in enumerate(items) if isinstance(item, Pause)]
    assert [items[i - 1].order for i in pauses] == [5, 10]
    assert all(items[i].delay_ms == 30 for i in pauses)
    assert isinstance(items[-1], Done)


def test_animate_sleeps_between_batches():
    seen, sleeps = [], []
    result = animate(iter(fake_trace(12)), 15, on_event=seen.append, sleep=sleeps.append)
    assert result.success
    assert sleeps == [0.015, 0.015]
    assert isinstance(seen[-1], Done)
    assert [e.order for e in seen[:-1]] == list(range(2, 13))


def test_animate_runs_a_real_search():
    board = Board.from_rows(["S.........E"])
    sleeps = []
    result = animate(search(board.request(Algorithm.BFS)), 60, sleep=sleeps.append)
    assert result.path_length == 11
    assert len(sleeps) == 2


def test_step_scheduler_delivers_in_batches():
    board = Board.from_rows(["S........E"])
    delay = animation_info(board.topology)["delay_ms"]
    sched = StepScheduler(search(board.request(Algorithm.BFS)), delay)

    first = sched.advance(0)
    assert [e.order for e in first] == [2, 3, 4, 5]
    assert sched.resume_at == delay == 60

    assert sched.advance(delay - 1) == []

    second = sched.advance(delay)
    assert [e.order for e in second[:-1]] == [6, 7, 8, 9]
    assert isinstance(second[-1], Done)
    assert sched.finished and not sched.active
    assert sched.result.path_length == 10
    assert sched.advance(10_000) == []


def test_step_scheduler_cancel_stops_delivery():
    board = Board.from_rows(["S.........", "..........", ".........E"])
    events = search(board.request(Algorithm.DIJKSTRA))
    sched = StepScheduler(events, 5)

    assert len(sched.advance(0)) == 4
    sched.cancel()
    assert sched.cancelled
    assert sched.advance(1_000) == []
    assert sched.result is None
    with pytest.raises(StopIteration):
        next(events)


def test_step_scheduler_search_without_pause():
    board = Board.from_rows(["SE"])
    sched = StepScheduler(search(board.request(Algorithm.ASTAR)), 60)
    out = sched.advance(0)
    assert len(out) == 1 and isinstance(out[0], Done)
    assert sched.result.path == [(0, 0), (1, 0)]


def test_pause_lands_after_a_whole_step():
    board = Board.from_rows([".....", "S...E", "....."])
    session = new_session(board.request(Algorithm.BFS))
    sched = StepScheduler(iter(session), 60)

    out = sched.advance(0)
    assert sched.resume_at == 60
    last = out[-1]
    assert last == NodeExplored((1, 0), 5)
    assert last.cell in session.closed_set

    for v in board.topology.neighbors(last.cell):
        if not board.is_obstacle(v) and v not in session.closed_set:
            assert v in session.discovered
    assert list(session.queue.queue) == [(2, 1), (1, 2), (2, 0)]
    assert session.metrics()["open_size"] == 3


@pytest.mark.parametrize("algo", list(Algorithm))
def test_every_paused_cell_has_its_neighbors_relaxed(algo):
    board = Board.from_rows(["S.....", "..#...", "..#..E", "......"])
    session = new_session(board.request(algo))
    sched = StepScheduler(iter(session), 5)

    now = 0
    while sched.active:
        out = sched.advance(now)
        if out and isinstance(out[-1], NodeExplored):
            assert session.metrics()["popped"] == out[-1].order
            for v in board.topology.neighbors(out[-1].cell):
                if board.is_obstacle(v) or v in session.closed_set:
                    continue
                assert v in session.parent
        now += 5
    assert sched.result.success
    assert session.metrics()["popped"] == sched.result.nodes_explored
