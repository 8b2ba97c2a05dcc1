"""
SMT N-Queens Enumerator Package

This package formulates the N-queens puzzle as a constraint-satisfaction
problem over integer variables and enumerates every solution with the Z3
SMT solver, blocking each found model before asking for the next one.

Modules:
    - interfaces: Abstract base classes for the decision procedure and solver
    - variables: Decision variable factory
    - constraints: Queen placement constraint builder
    - solver: Z3 decision procedure, enumeration loop and queen solver
    - board: Position extraction and text rendering
    - utils: Attack checking, known counts and solvability info
    - config: Configuration management
    - visualize: Board plots and result saving
"""

from .interfaces import CheckResult, DecisionProcedure, SolverInterface
from .variables import create_int_vector
from .constraints import build_queens_constraints
from .solver import (
    IndeterminateResultError,
    QueenSolver,
    SolveResult,
    SolverContextError,
    Z3DecisionProcedure,
    enumerate_models,
    queen_solve,
)
from .board import (
    Position,
    get_queens_positions,
    format_solution,
    render_board,
    render_algebraic,
    to_algebraic,
)
from .config import Config
from .visualize import (
    visualize_board,
    plot_solution_gallery,
    plot_solution_counts,
    save_solutions_text,
    save_run_results,
    create_run_output_folder,
)

__all__ = [
    'CheckResult',
    'DecisionProcedure',
    'SolverInterface',
    'create_int_vector',
    'build_queens_constraints',
    'IndeterminateResultError',
    'QueenSolver',
    'SolveResult',
    'SolverContextError',
    'Z3DecisionProcedure',
    'enumerate_models',
    'queen_solve',
    'Position',
    'get_queens_positions',
    'format_solution',
    'render_board',
    'render_algebraic',
    'to_algebraic',
    'Config',
    'visualize_board',
    'plot_solution_gallery',
    'plot_solution_counts',
    'save_solutions_text',
    'save_run_results',
    'create_run_output_folder',
]
