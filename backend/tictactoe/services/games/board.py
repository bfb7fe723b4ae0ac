from typing import List, Optional, Sequence

X = 'X'
O = 'O'
DRAW = 'draw'
EMPTY_CELL = '-'
BOARD_SIZE = 9

WINNING_LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> List[Optional[str]]:
    return [None] * BOARD_SIZE


def other_mark(mark: str) -> str:
    return O if mark == X else X


def check_win(board: Sequence[Optional[str]], mark: str) -> bool:
    """True if any row, column or diagonal is fully held by ``mark``."""
    return any(
        board[a] == mark and board[b] == mark and board[c] == mark
        for a, b, c in WINNING_LINES
    )


def check_draw(board: Sequence[Optional[str]]) -> bool:
    """True if every cell is occupied.

    Only meaningful once ``check_win`` has been ruled out: a full board
    that completes a line is a win, not a draw.
    """
    return all(cell is not None for cell in board)


def is_legal_move(board: Sequence[Optional[str]], index) -> bool:
    # bool is an int subclass but never a valid cell index
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    if index < 0 or index >= BOARD_SIZE:
        return False
    return board[index] is None


def move_count(board: Sequence[Optional[str]]) -> int:
    return sum(1 for cell in board if cell is not None)


def serialize_board(board: Sequence[Optional[str]]) -> str:
    """Fixed-width form used by the history table, e.g. ``'XXXOO----'``."""
    return ''.join(cell or EMPTY_CELL for cell in board)
