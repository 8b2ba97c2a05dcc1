"""
Board projection and rendering for N-queens solutions.

This module turns a model snapshot into queen positions and renders them
either as algebraic notation (A1, C4, ...) or as a full character grid.
"""

from typing import Dict, List, NamedTuple, Sequence

import numpy as np


QUEEN = 'Q'
DEFAULT_FILLER = '+'
MAX_ALGEBRAIC_SIZE = 26


class Position(NamedTuple):
    """1-based (column, row) position of a queen."""
    x: int
    y: int


def get_queens_positions(
    model: Dict[str, int],
    xs: Sequence,
    ys: Sequence
) -> List[Position]:
    """
    Project a model snapshot onto queen positions.

    Args:
        model: Snapshot mapping variable name to value
        xs: Column variables
        ys: Row variables

    Returns:
        List of positions, one per queen, in queen order.
    """
    return [Position(int(model[str(x)]), int(model[str(y)])) for x, y in zip(xs, ys)]


def validate_positions(positions: Sequence[Position], board_size: int) -> None:
    """Raise ValueError if any coordinate lies outside [1, board_size]."""
    if board_size < 1:
        raise ValueError(f"Board size must be positive, got {board_size}")
    for x, y in positions:
        if not (1 <= x <= board_size and 1 <= y <= board_size):
            raise ValueError(
                f"Queen at ({x}, {y}) is outside the {board_size}x{board_size} board"
            )


def to_algebraic(positions: Sequence[Position]) -> List[str]:
    """
    Convert positions to algebraic notation.

    Column 1 is 'A', so (3, 4) becomes 'C4'.
    """
    squares = []
    for x, y in positions:
        if not 1 <= x <= MAX_ALGEBRAIC_SIZE:
            raise ValueError(f"Column {x} has no algebraic letter")
        squares.append(f"{chr(ord('A') + x - 1)}{y}")
    return squares


def build_board_grid(
    positions: Sequence[Position],
    board_size: int,
    filler: str = DEFAULT_FILLER
) -> np.ndarray:
    """
    Build a board_size × board_size character grid.

    Row index y-1, column index x-1 holds 'Q' for every queen.
    """
    validate_positions(positions, board_size)

    grid = np.full((board_size, board_size), filler, dtype='<U1')
    for x, y in positions:
        grid[y - 1, x - 1] = QUEEN
    return grid


def render_board(
    positions: Sequence[Position],
    board_size: int,
    filler: str = DEFAULT_FILLER
) -> str:
    """Render positions as a text grid, one board row per line."""
    grid = build_board_grid(positions, board_size, filler)
    return '\n'.join(' '.join(row) for row in grid)


def render_algebraic(positions: Sequence[Position]) -> str:
    """Render positions as algebraic squares, one per line."""
    return '\n'.join(to_algebraic(positions))


def format_solution(
    positions: Sequence[Position],
    board_size: int,
    notation: str = 'board',
    filler: str = DEFAULT_FILLER
) -> str:
    """
    Render one solution in the requested notation.

    Args:
        positions: Queen positions
        board_size: Board dimension N
        notation: 'board' or 'algebraic'
        filler: Glyph for empty cells (board notation only)

    Returns:
        Rendered text without a trailing newline.
    """
    if notation == 'board':
        return render_board(positions, board_size, filler)
    elif notation == 'algebraic':
        validate_positions(positions, board_size)
        return render_algebraic(positions)
    else:
        raise ValueError(f"Unknown notation: {notation}")
