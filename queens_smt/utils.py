"""
Utility functions for the N-queens solver.

This module contains:
- Attack checking and placement validation
- Known classical solution counts
- Solvability information used by the runner
"""

import math
from typing import Dict, Optional, Sequence, Tuple


# Number of distinct N-queens solutions (OEIS A000170)
KNOWN_SOLUTION_COUNTS = {
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
    11: 2680,
    12: 14200,
    13: 73712,
    14: 365596,
}


# =============================================================================
# Attack Checking
# =============================================================================

def check_attack(q1: Tuple[int, int], q2: Tuple[int, int]) -> bool:
    """
    Check if two queens attack each other.

    Queens attack when they share a column, a row or a diagonal.

    Args:
        q1: First queen (x, y)
        q2: Second queen (x, y)

    Returns:
        True if queens attack each other
    """
    dx = abs(q1[0] - q2[0])
    dy = abs(q1[1] - q2[1])
    return dx == 0 or dy == 0 or dx == dy


def count_attacking_pairs(queens: Sequence[Tuple[int, int]]) -> int:
    """
    Count attacking pairs using naive O(N²) algorithm.

    Args:
        queens: List of (x, y) positions

    Returns:
        Number of attacking pairs
    """
    count = 0
    n = len(queens)
    for i in range(n):
        for j in range(i + 1, n):
            if check_attack(queens[i], queens[j]):
                count += 1
    return count


def is_valid_placement(queens: Sequence[Tuple[int, int]], board_size: int) -> bool:
    """
    Check that queens form a complete N-queens solution.

    Requires exactly board_size queens, all on the board, none attacking.
    """
    if len(queens) != board_size:
        return False
    for x, y in queens:
        if not (1 <= x <= board_size and 1 <= y <= board_size):
            return False
    return count_attacking_pairs(queens) == 0


def canonical_placement(queens: Sequence[Tuple[int, int]]) -> Tuple[Tuple[int, int], ...]:
    """Order-independent key for a placement."""
    return tuple(sorted((int(x), int(y)) for x, y in queens))


# =============================================================================
# Counting and Bounds
# =============================================================================

def enumeration_upper_bound(N: int) -> int:
    """Upper bound on distinct placements: one queen per row and column gives N!."""
    return math.factorial(N)


def check_solvability(N: int) -> Dict[str, any]:
    """
    Summarize what is known about the N-queens problem for board size N.

    Solutions exist for every N except 2 and 3.

    Args:
        N: Board dimension

    Returns:
        Dictionary with solvability information.
    """
    return {
        'N': N,
        'queens': N,
        'cells': N ** 2,
        'density': 1 / N,
        'solvable': N not in (2, 3),
        'known_solutions': KNOWN_SOLUTION_COUNTS.get(N),
        'upper_bound': enumeration_upper_bound(N),
    }


def expected_solution_count(N: int, symmetry_breaking: bool = True) -> Optional[int]:
    """
    Expected number of reported models for board size N.

    Without symmetry breaking every board is reported once per queen
    labelling, i.e. N! times. Returns None when N is not tabulated.
    """
    known = KNOWN_SOLUTION_COUNTS.get(N)
    if known is None:
        return None
    if symmetry_breaking:
        return known
    return known * math.factorial(N)
