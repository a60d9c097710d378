from models import BOARD_SIZE, HIT, MISS, SHIP, UNKNOWN, Board


def _view(hits=(), misses=()):
    view = [[UNKNOWN] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for r, c in hits:
        view[r][c] = HIT
    for r, c in misses:
        view[r][c] = MISS
    return view


def _board_with_ships(cells):
    board = Board()
    for r, c in cells:
        board.grid[r][c] = SHIP
    return board


def _count(board, state):
    return sum(cell == state for row in board.grid for cell in row)
