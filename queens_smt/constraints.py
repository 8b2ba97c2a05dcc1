"""
Constraint builder for the N-queens puzzle.

Queens are modelled by two integer vectors, xs (columns) and ys (rows),
both 1-based. The constraint families are:
- ordering: queens sorted by row-major cell index (symmetry breaking)
- bounding: every coordinate in [1, N]
- distinctness: all columns distinct, all rows distinct
- anti-diagonal: no two queens with |Δx| = |Δy|
"""

from typing import List, Sequence

import z3


def set_queens_order(
    xs: Sequence[z3.ArithRef],
    ys: Sequence[z3.ArithRef],
    board_size: int
) -> List[z3.BoolRef]:
    """
    Order queens strictly by row-major index.

    Together with distinct rows this pins queen i to row i + 1, so each
    physical board is reported exactly once instead of once per labelling.

    Args:
        xs: Column variables
        ys: Row variables
        board_size: Board dimension N

    Returns:
        List of ordering constraints (empty for a single queen).
    """
    return [
        ys[i - 1] * board_size + xs[i - 1] < ys[i] * board_size + xs[i]
        for i in range(1, len(xs))
    ]


def set_board_size_limit(xs: Sequence[z3.ArithRef], board_size: int) -> List[z3.BoolRef]:
    """Bound every variable to [1, board_size]."""
    return [z3.And(x >= 1, x <= board_size) for x in xs]


def set_values_distinct(xs: Sequence[z3.ArithRef]) -> List[z3.BoolRef]:
    """Require pairwise distinct values."""
    if len(xs) < 2:
        return []
    return [z3.Distinct(*xs)]


def queens_on_diagonal(
    x1: z3.ArithRef,
    y1: z3.ArithRef,
    x2: z3.ArithRef,
    y2: z3.ArithRef
) -> z3.BoolRef:
    """Proposition: queens (x1, y1) and (x2, y2) share a diagonal."""
    return z3.Abs(x2 - x1) == z3.Abs(y2 - y1)


def restrict_one_queen_on_diagonal(
    xs: Sequence[z3.ArithRef],
    ys: Sequence[z3.ArithRef]
) -> List[z3.BoolRef]:
    """Forbid every unordered pair of queens from sharing a diagonal."""
    constraints = []
    for i in range(len(xs)):
        for j in range(i + 1, len(ys)):
            constraints.append(z3.Not(queens_on_diagonal(xs[i], ys[i], xs[j], ys[j])))
    return constraints


def build_queens_constraints(
    xs: Sequence[z3.ArithRef],
    ys: Sequence[z3.ArithRef],
    board_size: int,
    symmetry_breaking: bool = True
) -> List[z3.BoolRef]:
    """
    Build the complete constraint set for a valid queen placement.

    Args:
        xs: Column variables, one per queen
        ys: Row variables, one per queen
        board_size: Board dimension N
        symmetry_breaking: Whether to add the row-major ordering constraints

    Returns:
        List of constraints whose conjunction encodes the puzzle.
    """
    if board_size < 1:
        raise ValueError(f"Board size must be positive, got {board_size}")
    if len(xs) != board_size or len(ys) != board_size:
        raise ValueError(
            f"Expected {board_size} queens per axis, got {len(xs)} columns "
            f"and {len(ys)} rows"
        )

    constraints = []
    if symmetry_breaking:
        constraints.extend(set_queens_order(xs, ys, board_size))

    constraints.extend(set_board_size_limit(xs, board_size))
    constraints.extend(set_board_size_limit(ys, board_size))

    constraints.extend(set_values_distinct(xs))
    constraints.extend(set_values_distinct(ys))
    constraints.extend(restrict_one_queen_on_diagonal(xs, ys))

    return constraints
