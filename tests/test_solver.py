"""
Test suite for the queens_smt package.

Tests verify:
1. Variable factory and constraint builder
2. Z3 decision procedure and queen solver
3. Board rendering
4. Utils functions
5. Configuration management
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
import z3


# =============================================================================
# Variable Factory Tests
# =============================================================================

def test_create_int_vector_names():
    """Test variables are named label_0 ... label_{n-1}."""
    from queens_smt.variables import create_int_vector

    ctx = z3.Context()
    xs = create_int_vector(ctx, 4, 'x')

    assert [str(x) for x in xs] == ['x_0', 'x_1', 'x_2', 'x_3']
    assert all(z3.is_int(x) for x in xs), "Variables should be integers"
    assert all(x.ctx is ctx for x in xs), "Variables should belong to the given context"

    assert create_int_vector(ctx, 0, 'y') == []
    with pytest.raises(ValueError):
        create_int_vector(ctx, -1, 'x')


# =============================================================================
# Constraint Builder Tests
# =============================================================================

def test_constraint_family_sizes():
    """Test number of constraints emitted by each family."""
    from queens_smt.variables import create_int_vector
    from queens_smt.constraints import (
        set_queens_order,
        set_board_size_limit,
        set_values_distinct,
        restrict_one_queen_on_diagonal,
        build_queens_constraints,
    )

    N = 5
    ctx = z3.Context()
    xs = create_int_vector(ctx, N, 'x')
    ys = create_int_vector(ctx, N, 'y')

    assert len(set_queens_order(xs, ys, N)) == N - 1
    assert len(set_board_size_limit(xs, N)) == N
    assert len(set_values_distinct(xs)) == 1
    assert len(restrict_one_queen_on_diagonal(xs, ys)) == N * (N - 1) // 2

    total = (N - 1) + 2 * N + 2 + N * (N - 1) // 2
    assert len(build_queens_constraints(xs, ys, N)) == total
    assert len(build_queens_constraints(xs, ys, N, symmetry_breaking=False)) == total - (N - 1)


def test_single_queen_has_only_bounds():
    """Test n=1 produces bounding constraints only."""
    from queens_smt.variables import create_int_vector
    from queens_smt.constraints import build_queens_constraints

    ctx = z3.Context()
    xs = create_int_vector(ctx, 1, 'x')
    ys = create_int_vector(ctx, 1, 'y')

    constraints = build_queens_constraints(xs, ys, 1)
    assert len(constraints) == 2, "Only one bound per axis expected for n=1"


def test_constraint_builder_validation():
    """Test modeling errors are rejected."""
    from queens_smt.variables import create_int_vector
    from queens_smt.constraints import build_queens_constraints

    ctx = z3.Context()
    xs = create_int_vector(ctx, 3, 'x')
    ys = create_int_vector(ctx, 3, 'y')

    with pytest.raises(ValueError):
        build_queens_constraints(xs, ys, 0)
    with pytest.raises(ValueError):
        build_queens_constraints(xs, ys, 4)
    with pytest.raises(ValueError):
        build_queens_constraints(xs, ys[:2], 3)


def test_diagonal_constraint_rejects_shared_diagonal():
    """Test queens on a common diagonal are unsatisfiable."""
    from queens_smt.constraints import queens_on_diagonal

    ctx = z3.Context()
    x1, y1, x2, y2 = (z3.Int(name, ctx) for name in ('x1', 'y1', 'x2', 'y2'))

    solver = z3.Solver(ctx=ctx)
    solver.add(x1 == 1, y1 == 1, x2 == 3, y2 == 3)
    solver.add(z3.Not(queens_on_diagonal(x1, y1, x2, y2)))
    assert solver.check() == z3.unsat

    solver = z3.Solver(ctx=ctx)
    solver.add(x1 == 1, y1 == 1, x2 == 2, y2 == 3)
    solver.add(z3.Not(queens_on_diagonal(x1, y1, x2, y2)))
    assert solver.check() == z3.sat


# =============================================================================
# Decision Procedure Tests
# =============================================================================

def test_z3_procedure_check_and_evaluate():
    """Test SAT/UNSAT results and model snapshots."""
    from queens_smt.interfaces import CheckResult
    from queens_smt.solver import Z3DecisionProcedure

    with Z3DecisionProcedure() as procedure:
        x = z3.Int('x', procedure.context)
        procedure.add(x >= 2, x <= 2)

        assert procedure.check() is CheckResult.SAT
        assert procedure.evaluate([x]) == {'x': 2}

        procedure.block([x], {'x': 2})
        assert procedure.check() is CheckResult.UNSAT


def test_z3_procedure_released_after_with_block():
    """Test the context is released on exit, including on errors."""
    from queens_smt.solver import Z3DecisionProcedure, SolverContextError

    with Z3DecisionProcedure() as procedure:
        pass
    assert procedure.closed
    with pytest.raises(SolverContextError):
        procedure.check()

    with pytest.raises(RuntimeError):
        with Z3DecisionProcedure() as procedure:
            raise RuntimeError("boom")
    assert procedure.closed


def test_z3_procedure_rejects_negative_timeout():
    """Test timeout validation."""
    from queens_smt.solver import Z3DecisionProcedure

    with pytest.raises(ValueError):
        Z3DecisionProcedure(timeout_ms=-1)

    procedure = Z3DecisionProcedure(timeout_ms=5000)
    assert procedure.timeout_ms == 5000
    procedure.close()


# =============================================================================
# Queen Solver Tests
# =============================================================================

def test_queen_solver_small_counts():
    """Test solution counts for small boards."""
    from queens_smt.solver import QueenSolver

    expected = {1: 1, 2: 0, 3: 0, 4: 2, 5: 10, 6: 4}
    for N, count in expected.items():
        result = QueenSolver(N).run()
        assert result.count == count, f"N={N} should have {count} solutions, got {result.count}"
        assert result.complete


def test_queen_solver_single_queen():
    """Test n=1 yields the trivial placement (1, 1)."""
    from queens_smt.solver import QueenSolver
    from queens_smt.board import Position

    result = QueenSolver(1).run()
    assert result.solutions == [[Position(1, 1)]]


def test_queen_solver_without_symmetry_breaking():
    """Test every labelling is reported when ordering is off."""
    from queens_smt.solver import QueenSolver
    from queens_smt.utils import expected_solution_count

    result = QueenSolver(4, symmetry_breaking=False).run()
    assert result.count == expected_solution_count(4, symmetry_breaking=False) == 48


def test_queen_solver_max_solutions():
    """Test enumeration stops at the solution limit."""
    from queens_smt.solver import QueenSolver

    result = QueenSolver(5).run(max_solutions=3)
    assert result.count == 3
    assert not result.complete

    result = QueenSolver(4).run(max_solutions=2)
    assert result.count == 2
    assert result.complete, "Limit equal to the total count should be complete"


def test_queen_solver_callback_and_validation():
    """Test on_solution is called once per solution in order."""
    from queens_smt.solver import QueenSolver

    seen = []
    result = QueenSolver(4).run(on_solution=lambda i, p: seen.append((i, p)))

    assert [i for i, _ in seen] == [0, 1]
    assert [p for _, p in seen] == result.solutions
    assert result.constraint_count > 0

    with pytest.raises(ValueError):
        QueenSolver(0)


def test_queen_solve_output(capsys):
    """Test the printed layout for n=4."""
    from queens_smt.solver import queen_solve

    result = queen_solve(4)
    out = capsys.readouterr().out
    lines = out.split('\n')

    assert lines[0] == "run queen solve for n=4"
    assert out.count('Q') == 8
    assert f"solutions count for n = 4: {result.count}" in out
    assert out.endswith("solutions count for n = 4: 2\n\n")


def test_queen_solve_no_solutions_output(capsys):
    """Test the printed layout when no solution exists."""
    from queens_smt.solver import queen_solve

    queen_solve(3)
    out = capsys.readouterr().out
    assert out == "run queen solve for n=3\nsolutions count for n = 3: 0\n\n"


# =============================================================================
# Board Tests
# =============================================================================

def test_render_board():
    """Test text board rendering."""
    from queens_smt.board import Position, render_board, build_board_grid

    positions = [Position(2, 1), Position(4, 2), Position(1, 3), Position(3, 4)]
    grid = build_board_grid(positions, 4)

    assert grid.shape == (4, 4)
    assert np.sum(grid == 'Q') == 4
    assert grid[0, 1] == 'Q', "Queen (2, 1) should be in row 0, column 1"

    assert render_board(positions, 4) == (
        "+ Q + +\n"
        "+ + + Q\n"
        "Q + + +\n"
        "+ + Q +"
    )
    assert render_board(positions, 4, filler='.').splitlines()[0] == ". Q . ."


def test_algebraic_notation():
    """Test column letters and row numbers."""
    from queens_smt.board import Position, to_algebraic, format_solution

    positions = [Position(1, 1), Position(3, 4), Position(26, 2)]
    assert to_algebraic(positions) == ['A1', 'C4', 'Z2']

    assert format_solution([Position(2, 1), Position(1, 2)], 2, notation='algebraic') == "B1\nA2"

    with pytest.raises(ValueError):
        to_algebraic([Position(27, 1)])
    with pytest.raises(ValueError):
        format_solution([Position(1, 1)], 1, notation='fen')


def test_positions_out_of_bounds():
    """Test rendering fails loudly for invalid coordinates."""
    from queens_smt.board import Position, render_board, validate_positions

    with pytest.raises(ValueError):
        render_board([Position(0, 1)], 4)
    with pytest.raises(ValueError):
        render_board([Position(1, 5)], 4)
    with pytest.raises(ValueError):
        validate_positions([Position(1, 1)], 0)


def test_get_queens_positions():
    """Test projection of a model snapshot."""
    from queens_smt.board import get_queens_positions, Position

    model = {'x_0': 2, 'x_1': 4, 'y_0': 1, 'y_1': 3}
    positions = get_queens_positions(model, ['x_0', 'x_1'], ['y_0', 'y_1'])
    assert positions == [Position(2, 1), Position(4, 3)]


# =============================================================================
# Utils Tests
# =============================================================================

def test_attack_checking():
    """Test attack checking functions."""
    from queens_smt.utils import check_attack, count_attacking_pairs, is_valid_placement

    assert check_attack((1, 1), (1, 4)) == True, "Should detect column attack"
    assert check_attack((1, 1), (4, 1)) == True, "Should detect row attack"
    assert check_attack((1, 1), (3, 3)) == True, "Should detect diagonal attack"
    assert check_attack((1, 4), (4, 1)) == True, "Should detect anti-diagonal attack"
    assert check_attack((1, 1), (2, 3)) == False, "Should not attack"

    assert count_attacking_pairs([(1, 1), (2, 2), (3, 3)]) == 3
    assert is_valid_placement([(2, 1), (4, 2), (1, 3), (3, 4)], 4)
    assert not is_valid_placement([(2, 1), (4, 2), (1, 3)], 4)
    assert not is_valid_placement([(1, 1), (2, 3), (3, 5)], 3)


def test_solvability_check():
    """Test solvability info."""
    from queens_smt.utils import check_solvability, enumeration_upper_bound

    info = check_solvability(8)
    assert info['solvable'] == True
    assert info['known_solutions'] == 92
    assert info['upper_bound'] == 40320

    assert check_solvability(3)['solvable'] == False
    assert check_solvability(20)['known_solutions'] is None
    assert enumeration_upper_bound(1) == 1


# =============================================================================
# Config Tests
# =============================================================================

def test_config_creation():
    """Test Config creation and validation."""
    from queens_smt.config import Config

    config = Config()
    errors = config.validate()
    assert len(errors) == 0, f"Default config should be valid, got: {errors}"
    assert config.sizes == [3, 4, 8]

    config = Config(sizes=[5, 6], notation='algebraic', workers=2)
    assert len(config.validate()) == 0

    assert len(Config(sizes=[0]).validate()) > 0, "Zero board size should produce errors"
    assert len(Config(notation='fen').validate()) > 0
    assert len(Config(filler='..').validate()) > 0
    assert len(Config(filler='Q').validate()) > 0
    assert len(Config(timeout_ms=-1).validate()) > 0
    assert len(Config(workers=0).validate()) > 0
    assert len(Config(sizes=[27], notation='algebraic').validate()) > 0


def test_config_rejects_duplicate_sizes():
    """Test repeated board sizes are reported, since results are keyed by size."""
    from queens_smt.config import Config

    errors = Config(sizes=[4, 5, 4]).validate()
    assert errors == ["Duplicate board sizes: [4]"]
    assert len(Config(sizes=[4, 5]).validate()) == 0


def test_config_from_dict():
    """Test Config.from_dict and round trip through to_dict."""
    from queens_smt.config import Config

    data = {
        'size': 6,
        'notation': 'algebraic',
        'symmetry_breaking': False,
        'max_solutions': 10,
    }

    config = Config.from_dict(data)
    assert config.sizes == [6]
    assert config.notation == 'algebraic'
    assert config.symmetry_breaking is False
    assert config.max_solutions == 10
    assert config.filler == '+'

    assert Config.from_dict(config.to_dict()) == config


def test_config_from_yaml(tmp_path):
    """Test loading configuration from a YAML file."""
    from queens_smt.config import Config

    path = tmp_path / "config.yaml"
    path.write_text("sizes: [4, 5]\nfiller: '.'\ntimeout_ms: 1000\n")

    config = Config.from_yaml(str(path))
    assert config.sizes == [4, 5]
    assert config.filler == '.'
    assert config.timeout_ms == 1000

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert Config.from_yaml(str(empty)) == Config()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
