from models import HIT as HIT_CELL, MISS as MISS_CELL, SHIP, UNKNOWN, Board
from logic.battle import HIT, MISS, REPEAT, apply_shot, attack_view
from tests.utils import _board_with_ships


def test_apply_shot_miss_and_repeat():
    board = Board()
    assert apply_shot(board, (0, 0)) == MISS
    assert board.grid[0][0] == MISS_CELL
    assert apply_shot(board, (0, 0)) == REPEAT
    assert board.grid[0][0] == MISS_CELL


def test_apply_shot_hit_and_repeat():
    board = _board_with_ships([(1, 1), (1, 2)])
    assert apply_shot(board, (1, 1)) == HIT
    assert board.grid[1][1] == HIT_CELL
    assert board.has_ships()
    assert apply_shot(board, (1, 1)) == REPEAT
    assert apply_shot(board, (1, 2)) == HIT
    assert not board.has_ships()


def test_apply_shot_highlight():
    board = _board_with_ships([(1, 1)])
    apply_shot(board, (0, 0))
    assert board.highlight == [(0, 0)]
    apply_shot(board, (1, 1))
    assert board.highlight == [(1, 1)]
    # repeats keep the previous highlight
    apply_shot(board, (0, 0))
    assert board.highlight == [(1, 1)]


def test_attack_view_hides_ships():
    board = _board_with_ships([(0, 0), (0, 1), (5, 5)])
    apply_shot(board, (0, 0))
    apply_shot(board, (9, 9))
    view = attack_view(board)
    assert view[0][0] == HIT_CELL
    assert view[9][9] == MISS_CELL
    assert view[0][1] == UNKNOWN
    assert view[5][5] == UNKNOWN
    assert all(SHIP not in row for row in view)


def test_attack_view_is_a_copy():
    board = Board()
    view = attack_view(board)
    view[0][0] = HIT_CELL
    assert board.grid[0][0] == UNKNOWN
