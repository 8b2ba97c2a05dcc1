"""
Abstract interfaces for the decision procedure and the queen solver.

These interfaces define the contract that all implementations must follow,
so the enumeration loop can be driven by Z3 or by a stand-in procedure.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence


class CheckResult(Enum):
    """Outcome of a single satisfiability check."""
    SAT = 'sat'
    UNSAT = 'unsat'
    UNKNOWN = 'unknown'


class DecisionProcedure(ABC):
    """
    Abstract interface for an incremental decision procedure.

    A decision procedure accumulates constraints, answers satisfiability
    checks and exposes the model of the last satisfiable check. Constraints
    are only ever added; a found model is excluded by adding a blocking
    clause rather than by removing anything.

    Implementations are context managers: leaving the ``with`` block
    releases the underlying solving context on every exit path.
    """

    @abstractmethod
    def add(self, *constraints: Any) -> None:
        """
        Add constraints to the accumulated conjunction.

        Args:
            constraints: Boolean propositions over decision variables
        """
        pass

    @abstractmethod
    def check(self) -> CheckResult:
        """
        Decide satisfiability of the current constraint set.

        Returns:
            CheckResult.SAT, CheckResult.UNSAT or CheckResult.UNKNOWN
        """
        pass

    @abstractmethod
    def evaluate(self, variables: Sequence[Any]) -> Dict[str, int]:
        """
        Snapshot the model of the last satisfiable check.

        Args:
            variables: Decision variables to read back

        Returns:
            Dictionary mapping variable name to its integer value.
        """
        pass

    @abstractmethod
    def block(self, variables: Sequence[Any], assignment: Dict[str, int]) -> None:
        """
        Forbid an assignment from being returned again.

        Args:
            variables: Decision variables covered by the assignment
            assignment: Snapshot produced by evaluate()
        """
        pass

    @abstractmethod
    def reason_unknown(self) -> str:
        """Explanation for the last UNKNOWN result."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the solving context."""
        pass

    @property
    def context(self) -> Any:
        """Context that decision variables are created in (None for the default)."""
        return None

    def assertion_count(self) -> int:
        """Number of assertions held, 0 if the procedure does not track them."""
        return 0

    def __enter__(self) -> 'DecisionProcedure':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class SolverInterface(ABC):
    """
    Abstract interface for N-queens solvers.

    A solver enumerates every placement of N non-attacking queens on an
    N×N board and reports each one as a list of (x, y) positions.
    """

    @property
    @abstractmethod
    def board_size(self) -> int:
        """Board dimension."""
        pass

    @abstractmethod
    def run(
        self,
        max_solutions: int = 0,
        on_solution: Optional[Callable[[int, List], None]] = None,
        verbose: bool = False
    ) -> Any:
        """
        Enumerate solutions.

        Args:
            max_solutions: Stop after this many solutions (0 for all)
            on_solution: Called as on_solution(index, positions) per solution
            verbose: Whether to print progress

        Returns:
            Result object describing the enumeration.
        """
        pass
