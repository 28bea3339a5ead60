import random

import pytest

from src.core.board import Board, tiles_that_fit
from src.core.errors import InvalidRequest
from src.core.search import search
from src.core.types import Algorithm


def test_from_rows():
    board = Board.from_rows(["S.#", "..E"])
    assert (board.width, board.height) == (3, 2)
    assert board.start == (0, 0)
    assert board.end == (2, 1)
    assert board.obstacles == {(2, 0)}
    assert board.free_cells() == 3


def test_set_start_toggles_and_moves():
    board = Board(4, 4)
    assert board.set_start((1, 1)) is True
    assert board.set_start((2, 2)) is True
    assert board.start == (2, 2)
    assert board.set_start((2, 2)) is False
    assert board.start is None


def test_endpoint_takes_over_other_endpoint_and_obstacle():
    board = Board(4, 4)
    board.set_start((0, 0))
    board.set_end((3, 3))
    board.set_end((0, 0))
    assert board.end == (0, 0)
    assert board.start is None

    board.toggle_obstacle((1, 1))
    board.set_start((1, 1))
    assert board.start == (1, 1)
    assert not board.is_obstacle((1, 1))


def test_toggle_obstacle():
    board = Board(3, 3, start=(0, 0), end=(2, 2))
    assert board.toggle_obstacle((1, 1)) is True
    assert board.is_obstacle((1, 1))
    assert board.toggle_obstacle((1, 1)) is False
    assert not board.is_obstacle((1, 1))
    assert board.toggle_obstacle((0, 0)) is False
    assert board.toggle_obstacle((2, 2)) is False
    assert board.obstacles == set()


def test_random_obstacles_fill_free_cells_only():
    board = Board(20, 10, start=(0, 0), end=(19, 9))
    placed = board.add_random_obstacles(10, rng=random.Random(7))
    assert placed == (198 * 10) // 100
    assert len(board.obstacles) == placed
    assert board.start not in board.obstacles
    assert board.end not in board.obstacles


def test_random_obstacles_on_full_board_places_nothing():
    board = Board.from_rows(["S#", "#E"])
    assert board.add_random_obstacles(50) == 0


def test_clear_and_resize():
    board = Board.from_rows(["S#", ".E"])
    board.clear_all()
    assert (board.start, board.end, board.obstacles) == (None, None, set())

    board.set_start((1, 1))
    board.resize(5, 6)
    assert board.topology.total_cells == 30
    assert board.start is None


@pytest.mark.parametrize("avail,tile,tiles", [
    ((720, 480), 24, (30, 20)),
    ((735, 499), 24, (30, 20)),
    ((744, 504), 24, (31, 21)),
    ((10, 10), 24, (1, 1)),
    ((0, -5), 12, (1, 1)),
])
def test_tiles_that_fit(avail, tile, tiles):
    assert tiles_that_fit(*avail, tile) == tiles


def test_tiles_that_fit_rejects_bad_tile_size():
    with pytest.raises(ValueError):
        tiles_that_fit(100, 100, 0)


def test_request_requires_both_endpoints():
    board = Board(3, 3, start=(0, 0))
    with pytest.raises(InvalidRequest):
        board.request(Algorithm.BFS)


def test_request_snapshots_obstacles():
    board = Board.from_rows(["S.E"])
    request = board.request(Algorithm.BFS)
    board.toggle_obstacle((1, 0))
    assert not request.is_obstacle((1, 0))
    assert list(search(request))[-1].result.success
    assert not list(search(board.request(Algorithm.BFS)))[-1].result.success
