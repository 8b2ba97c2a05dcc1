"""
Test suite to verify enumeration results against the N-queens definition.

- A placement is N queens on an N×N board, one per (x, y), 1-based
- Queens attack along rows, columns and both diagonals
- A solution is a placement with no attacking pair
- Known solution counts: 1, 0, 0, 2, 10, 4, 40, 92 for N = 1..8
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from math import factorial

from queens_smt.solver import QueenSolver
from queens_smt.utils import (
    KNOWN_SOLUTION_COUNTS,
    canonical_placement,
    count_attacking_pairs,
    enumeration_upper_bound,
)


def check_solution(positions, N):
    """
    Check a reported solution directly from the definition.

    Rows distinct, columns distinct, |Δx| != |Δy| for every pair.
    """
    xs = [p.x for p in positions]
    ys = [p.y for p in positions]

    assert len(positions) == N, f"Expected {N} queens, got {len(positions)}"
    assert all(1 <= v <= N for v in xs + ys), f"Coordinates out of range: {positions}"
    assert len(set(xs)) == N, f"Columns not distinct: {positions}"
    assert len(set(ys)) == N, f"Rows not distinct: {positions}"

    for i in range(N):
        for j in range(i + 1, N):
            dx = abs(xs[i] - xs[j])
            dy = abs(ys[i] - ys[j])
            assert dx != dy, f"Queens {i} and {j} share a diagonal: {positions}"


def test_trivial_board():
    """
    N=1: exactly one solution, the queen at (1, 1).
    """
    result = QueenSolver(1).run()
    assert result.count == 1
    assert list(result.solutions[0][0]) == [1, 1]
    print("✅ N=1 trivial placement passed")


def test_unsolvable_boards():
    """
    N=2 and N=3 have no solutions.
    """
    for N in (2, 3):
        result = QueenSolver(N).run()
        assert result.count == 0, f"N={N} should have no solutions"
        assert result.complete
    print("✅ N=2, N=3 unsolvable passed")


def test_four_queens_solutions():
    """
    N=4: exactly the two mirror-image solutions.
    """
    result = QueenSolver(4).run()

    boards = {canonical_placement(p) for p in result.solutions}
    assert boards == {
        ((1, 3), (2, 1), (3, 4), (4, 2)),
        ((1, 2), (2, 4), (3, 1), (4, 3)),
    }
    print("✅ N=4 solutions passed")


def test_eight_queens_count():
    """
    N=8: the classical 92 solutions, all valid and pairwise distinct.
    """
    result = QueenSolver(8).run()

    assert result.count == 92, f"N=8 should have 92 solutions, got {result.count}"
    for positions in result.solutions:
        check_solution(positions, 8)

    boards = {canonical_placement(p) for p in result.solutions}
    assert len(boards) == 92, "Every reported board should be distinct"
    print("✅ N=8 count passed")


def test_counts_match_known_values():
    """
    Enumerated counts equal the known counts for N=1..7.
    """
    for N in range(1, 8):
        result = QueenSolver(N).run()
        assert result.count == KNOWN_SOLUTION_COUNTS[N], \
            f"N={N}: expected {KNOWN_SOLUTION_COUNTS[N]}, got {result.count}"
    print("✅ Known counts passed")


def test_no_repeated_models():
    """
    No two reported models agree on every variable, with or without ordering.
    """
    for N, symmetry_breaking in ((5, True), (4, False)):
        result = QueenSolver(N, symmetry_breaking=symmetry_breaking).run()
        models = [tuple(s) for s in result.solutions]
        assert len(models) == len(set(models)), "A model was reported twice"
    print("✅ No repeated models passed")


def test_all_solutions_valid():
    """
    Every reported solution satisfies the definition and has zero attacks.
    """
    for N in range(1, 8):
        for positions in QueenSolver(N).run().solutions:
            check_solution(positions, N)
            assert count_attacking_pairs(positions) == 0
    print("✅ Validity passed")


def test_ordering_pins_rows():
    """
    With row-major ordering and distinct rows, queen i sits in row i + 1.
    """
    for positions in QueenSolver(6).run().solutions:
        assert [p.y for p in positions] == list(range(1, 7))
    print("✅ Row ordering passed")


def test_labelled_counts():
    """
    Without ordering each board appears once per queen labelling (N! times).
    """
    for N in (1, 4):
        result = QueenSolver(N, symmetry_breaking=False).run()
        assert result.count == KNOWN_SOLUTION_COUNTS[N] * factorial(N)

        boards = {canonical_placement(p) for p in result.solutions}
        assert len(boards) == KNOWN_SOLUTION_COUNTS[N]
    print("✅ Labelled counts passed")


def test_termination_bound():
    """
    Enumeration halts within N! models.
    """
    for N in range(1, 7):
        result = QueenSolver(N).run()
        assert result.complete
        assert result.count <= enumeration_upper_bound(N)
    print("✅ Termination bound passed")


def run_all_tests():
    print("=" * 60)
    print("Testing Implementation Against N-Queens Definition")
    print("=" * 60)
    print()

    test_trivial_board()
    test_unsolvable_boards()
    test_four_queens_solutions()
    test_eight_queens_count()
    test_counts_match_known_values()
    test_no_repeated_models()
    test_all_solutions_valid()
    test_ordering_pins_rows()
    test_labelled_counts()
    test_termination_bound()

    print()
    print("=" * 60)
    print("All implementation tests passed! ✅")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
