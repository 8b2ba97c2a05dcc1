"""
SMT-based solver for the N-queens puzzle.

This module provides:
- Z3DecisionProcedure: Z3 implementation of the DecisionProcedure interface
- enumerate_models: incremental solve / block loop over any procedure
- QueenSolver: builds variables and constraints and enumerates solutions
- queen_solve: prints every solution for one board size

Enumeration stops only on UNSAT (or an explicit solution limit). An UNKNOWN
result raises IndeterminateResultError instead of ending the loop.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

import z3

from .interfaces import CheckResult, DecisionProcedure, SolverInterface
from .board import Position, format_solution, get_queens_positions, validate_positions
from .constraints import build_queens_constraints
from .variables import create_int_vector


# =============================================================================
# Errors
# =============================================================================

class SolverContextError(RuntimeError):
    """The solving context could not be created or was used after release."""


class IndeterminateResultError(RuntimeError):
    """The decision procedure could not decide satisfiability."""

    def __init__(self, reason: str, models_found: int = 0):
        # args must match the constructor so the error survives pickling
        super().__init__(reason, models_found)
        self.reason = reason
        self.models_found = models_found

    def __str__(self) -> str:
        return (
            f"Decision procedure returned unknown after {self.models_found} "
            f"model(s): {self.reason}"
        )


# =============================================================================
# Z3 Decision Procedure
# =============================================================================

def _to_check_result(result: z3.CheckSatResult) -> CheckResult:
    if result == z3.sat:
        return CheckResult.SAT
    elif result == z3.unsat:
        return CheckResult.UNSAT
    else:
        return CheckResult.UNKNOWN


class Z3DecisionProcedure(DecisionProcedure):
    """
    Decision procedure backed by a private Z3 context and solver.

    Each instance owns its own z3.Context, so separate instances share no
    state and can be used from separate processes.

    Attributes:
        _context: Z3 context (None once closed)
        _solver: Incremental Z3 solver (None once closed)
    """

    def __init__(self, timeout_ms: int = 0):
        """
        Create the solving context.

        Args:
            timeout_ms: Per-check timeout in milliseconds (0 to disable)
        """
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {timeout_ms}")
        try:
            self._context = z3.Context()
            self._solver = z3.Solver(ctx=self._context)
            if timeout_ms > 0:
                self._solver.set(timeout=timeout_ms)
        except z3.Z3Exception as e:
            raise SolverContextError(f"Failed to initialize Z3 context: {e}") from e
        self._timeout_ms = timeout_ms

    @property
    def context(self) -> z3.Context:
        self._require_open()
        return self._context

    @property
    def closed(self) -> bool:
        return self._solver is None

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def _require_open(self) -> None:
        if self._solver is None:
            raise SolverContextError("Decision procedure used after close()")

    def add(self, *constraints: Any) -> None:
        self._require_open()
        self._solver.add(*constraints)

    def check(self) -> CheckResult:
        self._require_open()
        return _to_check_result(self._solver.check())

    def evaluate(self, variables: Sequence[z3.ArithRef]) -> Dict[str, int]:
        self._require_open()
        model = self._solver.model()
        return {
            str(v): model.eval(v, model_completion=True).as_long()
            for v in variables
        }

    def block(self, variables: Sequence[z3.ArithRef], assignment: Dict[str, int]) -> None:
        self._require_open()
        self._solver.add(z3.Not(z3.And([v == assignment[str(v)] for v in variables])))

    def reason_unknown(self) -> str:
        self._require_open()
        return self._solver.reason_unknown()

    def assertion_count(self) -> int:
        """Number of assertions currently held by the solver."""
        self._require_open()
        return len(self._solver.assertions())

    def close(self) -> None:
        self._solver = None
        self._context = None


# =============================================================================
# Enumeration Protocol
# =============================================================================

def enumerate_models(
    procedure: DecisionProcedure,
    variables: Sequence[Any],
    max_models: int = 0
) -> Iterator[Dict[str, int]]:
    """
    Enumerate every model of the procedure's constraint set.

    Each satisfiable check snapshots the model, adds a blocking clause for
    it and yields a copy, so no assignment is ever yielded twice.

    Args:
        procedure: Decision procedure holding the puzzle encoding
        variables: Variables that identify a model
        max_models: Stop after this many models (0 for no limit)

    Yields:
        Model snapshots mapping variable name to value.

    Raises:
        IndeterminateResultError: If a check returns UNKNOWN
    """
    if max_models < 0:
        raise ValueError(f"max_models must be non-negative, got {max_models}")

    found = 0
    while True:
        result = procedure.check()
        if result is CheckResult.UNSAT:
            return
        if result is CheckResult.UNKNOWN:
            raise IndeterminateResultError(procedure.reason_unknown(), found)

        model = procedure.evaluate(variables)
        procedure.block(variables, model)
        found += 1

        yield dict(model)
        if max_models and found >= max_models:
            return


# =============================================================================
# Queen Solver
# =============================================================================

@dataclass
class SolveResult:
    """
    Outcome of enumerating one board size.

    Attributes:
        board_size: Board dimension N
        solutions: Positions of every solution found, in discovery order
        elapsed: Wall-clock seconds spent enumerating
        constraint_count: Assertions in the puzzle encoding
        complete: False if enumeration stopped at max_solutions
    """
    board_size: int
    solutions: List[List[Position]] = field(default_factory=list)
    elapsed: float = 0.0
    constraint_count: int = 0
    complete: bool = True

    @property
    def count(self) -> int:
        return len(self.solutions)


class QueenSolver(SolverInterface):
    """
    Enumerates all N-queens solutions with an SMT decision procedure.

    Every call to run() acquires a fresh procedure and releases it before
    returning, including when enumeration fails.
    """

    def __init__(
        self,
        board_size: int,
        symmetry_breaking: bool = True,
        timeout_ms: int = 0,
        procedure_factory: Callable[..., DecisionProcedure] = Z3DecisionProcedure
    ):
        if board_size < 1:
            raise ValueError(f"Board size must be positive, got {board_size}")
        self._board_size = board_size
        self._symmetry_breaking = symmetry_breaking
        self._timeout_ms = timeout_ms
        self._procedure_factory = procedure_factory

    @property
    def board_size(self) -> int:
        return self._board_size

    @property
    def symmetry_breaking(self) -> bool:
        return self._symmetry_breaking

    def run(
        self,
        max_solutions: int = 0,
        on_solution: Optional[Callable[[int, List[Position]], None]] = None,
        verbose: bool = False,
        log_interval: int = 0
    ) -> SolveResult:
        """
        Enumerate solutions.

        Args:
            max_solutions: Stop after this many solutions (0 for all)
            on_solution: Called as on_solution(index, positions) per solution
            verbose: Whether to print progress
            log_interval: Print progress every this many solutions (0 = off)

        Returns:
            SolveResult with every solution found.
        """
        n = self._board_size
        result = SolveResult(board_size=n)
        start = time.time()

        with self._procedure_factory(timeout_ms=self._timeout_ms) as procedure:
            xs = create_int_vector(procedure.context, n, 'x')
            ys = create_int_vector(procedure.context, n, 'y')

            procedure.add(*build_queens_constraints(xs, ys, n, self._symmetry_breaking))
            result.constraint_count = procedure.assertion_count()

            for index, model in enumerate(
                enumerate_models(procedure, xs + ys, max_solutions)
            ):
                positions = get_queens_positions(model, xs, ys)
                validate_positions(positions, n)
                result.solutions.append(positions)

                if on_solution is not None:
                    on_solution(index, positions)

                if verbose and log_interval > 0 and (index + 1) % log_interval == 0:
                    self._print_progress(index + 1, time.time() - start)

            if max_solutions and result.count >= max_solutions:
                result.complete = procedure.check() is CheckResult.UNSAT

        result.elapsed = time.time() - start
        if verbose:
            self._print_progress(result.count, result.elapsed)
        return result

    def _print_progress(self, found: int, elapsed: float) -> None:
        print(f"  N={self._board_size}: Solutions found={found:>7}, Time={elapsed:>6.2f}s")


def queen_solve(
    queen_count: int,
    notation: str = 'board',
    filler: str = '+',
    symmetry_breaking: bool = True,
    timeout_ms: int = 0,
    max_solutions: int = 0,
    verbose: bool = False,
    log_interval: int = 0
) -> SolveResult:
    """
    Enumerate and print all solutions for one board size.

    Prints a header line, a blank line and the rendered board for every
    solution, then the solution count followed by a blank line.

    Returns:
        SolveResult for the run.
    """
    print(f"run queen solve for n={queen_count}")

    def print_solution(index: int, positions: List[Position]) -> None:
        print()
        print(format_solution(positions, queen_count, notation, filler))

    solver = QueenSolver(queen_count, symmetry_breaking, timeout_ms)
    result = solver.run(
        max_solutions=max_solutions,
        on_solution=print_solution,
        verbose=verbose,
        log_interval=log_interval,
    )

    print(f"solutions count for n = {queen_count}: {result.count}")
    print()
    return result
