"""
Main entry point for the SMT N-Queens enumerator.

This script enumerates every N-queens solution for one or more board sizes
with the Z3 SMT solver and prints each solution board.

Usage:
    python main.py
    python main.py --config config.yaml
    python main.py --size 4 8 --notation algebraic
    python main.py --size 10 --workers 2 --save
"""

import argparse
import sys
from concurrent.futures import ProcessPoolExecutor
from typing import Dict

from queens_smt.config import Config
from queens_smt.board import format_solution
from queens_smt.solver import (
    IndeterminateResultError,
    QueenSolver,
    SolveResult,
    SolverContextError,
    queen_solve,
)
from queens_smt.utils import check_solvability, expected_solution_count
from queens_smt.visualize import (
    visualize_board,
    plot_solution_counts,
    save_run_results,
)


# =============================================================================
# Worker
# =============================================================================

def solve_size(size: int, config_data: dict) -> SolveResult:
    """Enumerate one board size in a worker process without printing boards."""
    config = Config.from_dict(config_data)
    solver = QueenSolver(size, config.symmetry_breaking, config.timeout_ms)
    return solver.run(max_solutions=config.max_solutions)


# =============================================================================
# Runner Classes
# =============================================================================

class SolverRunner:
    """
    Orchestrates solver execution based on configuration.
    """

    def __init__(self, config: Config):
        """
        Initialize runner with configuration.

        Args:
            config: Configuration instance
        """
        self.config = config

    def run_single(self, size: int) -> SolveResult:
        """
        Enumerate one board size, printing each solution as it is found.

        Args:
            size: Board dimension N

        Returns:
            SolveResult for the board size
        """
        if self.config.verbose:
            self._print_solvability(check_solvability(size))

        return queen_solve(
            size,
            notation=self.config.notation,
            filler=self.config.filler,
            symmetry_breaking=self.config.symmetry_breaking,
            timeout_ms=self.config.timeout_ms,
            max_solutions=self.config.max_solutions,
            verbose=self.config.verbose,
            log_interval=self.config.log_interval,
        )

    def run_parallel(self) -> Dict[int, SolveResult]:
        """
        Enumerate all board sizes in a process pool.

        Each size is an independent job; results are printed in size order
        once every job has finished.

        Returns:
            Dictionary mapping board size to SolveResult
        """
        config_data = self.config.to_dict()
        with ProcessPoolExecutor(max_workers=self.config.workers) as pool:
            futures = [
                pool.submit(solve_size, size, config_data)
                for size in self.config.sizes
            ]
            results = [future.result() for future in futures]

        for result in results:
            self._print_result(result)

        return {result.board_size: result for result in results}

    def run(self) -> Dict[int, SolveResult]:
        """
        Execute solver based on configuration.

        Returns:
            Dictionary with results for each board size
        """
        if self.config.workers > 1 and len(self.config.sizes) > 1:
            return self.run_parallel()

        all_results = {}
        for size in self.config.sizes:
            all_results[size] = self.run_single(size)
        return all_results

    def _print_result(self, result: SolveResult) -> None:
        """Print a finished result in the same layout as queen_solve."""
        n = result.board_size
        if self.config.verbose:
            self._print_solvability(check_solvability(n))
        print(f"run queen solve for n={n}")
        for positions in result.solutions:
            print()
            print(format_solution(positions, n, self.config.notation, self.config.filler))
        print(f"solutions count for n = {n}: {result.count}")
        print()

    def _print_solvability(self, info: dict) -> None:
        """Print solvability information."""
        print(f"\nSolvability Check for N={info['N']}:")
        print(f"  Queens: {info['queens']}, Cells: {info['cells']}")
        print(f"  Upper bound (N!): {info['upper_bound']:,}")

        if info['known_solutions'] is not None:
            print(f"  Known solutions: {info['known_solutions']:,}")
        if info['solvable']:
            print(f"  ✓ SOLVABLE")
        else:
            print(f"  ✗ UNSOLVABLE: no placement exists for N={info['N']}")
        print()


# =============================================================================
# CLI Interface
# =============================================================================

def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='SMT N-Queens Enumerator',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Config file
    parser.add_argument(
        '--config', '-c',
        type=str,
        default='config.yaml',
        help='Path to YAML configuration file'
    )

    # Override options
    parser.add_argument(
        '--size', '-n',
        type=int,
        nargs='+',
        help='Board size(s) N (overrides config)'
    )

    parser.add_argument(
        '--notation',
        type=str,
        choices=['board', 'algebraic'],
        help='Solution rendering (overrides config)'
    )

    parser.add_argument(
        '--filler',
        type=str,
        help='Glyph for empty cells in board notation (overrides config)'
    )

    parser.add_argument(
        '--no-symmetry-breaking',
        action='store_true',
        help='Report every queen labelling of each board'
    )

    parser.add_argument(
        '--timeout-ms',
        type=int,
        help='Per-check solver timeout in milliseconds, 0 = none (overrides config)'
    )

    parser.add_argument(
        '--max-solutions',
        type=int,
        help='Stop after this many solutions per size, 0 = all (overrides config)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        help='Worker processes across board sizes (overrides config)'
    )

    parser.add_argument(
        '--log-interval',
        type=int,
        help='Print progress every N solutions (0 = off)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help='Save results (solutions, metadata and plots)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Output directory for saved results'
    )

    parser.add_argument(
        '--show',
        action='store_true',
        help='Show plots interactively'
    )

    return parser.parse_args(argv)


def load_config_with_overrides(args: argparse.Namespace) -> Config:
    """
    Load configuration from file and apply CLI overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        Configuration with overrides applied
    """
    try:
        config = Config.from_yaml(args.config)
    except FileNotFoundError:
        print(f"Warning: Config file '{args.config}' not found, using defaults")
        config = Config()
    except Exception as e:
        print(f"Error loading config: {e}")
        sys.exit(1)

    # Apply CLI overrides
    if args.size:
        config.sizes = args.size
    if args.notation:
        config.notation = args.notation
    if args.filler is not None:
        config.filler = args.filler
    if args.no_symmetry_breaking:
        config.symmetry_breaking = False
    if args.timeout_ms is not None:
        config.timeout_ms = args.timeout_ms
    if args.max_solutions is not None:
        config.max_solutions = args.max_solutions
    if args.workers is not None:
        config.workers = args.workers
    if args.log_interval is not None:
        config.log_interval = args.log_interval
    if args.verbose:
        config.verbose = True
    if args.save:
        config.save = True
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.show:
        config.show = True

    return config


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    config = load_config_with_overrides(args)

    # Validate
    errors = config.validate()
    if errors:
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    if config.verbose:
        config.print_summary()

    # Run solver
    runner = SolverRunner(config)
    try:
        results = runner.run()
    except IndeterminateResultError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except SolverContextError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if config.verbose:
        print(f"{'#'*60}")
        print("# Final Results")
        print(f"{'#'*60}")

        for size, result in results.items():
            expected = expected_solution_count(size, config.symmetry_breaking)
            status = "complete" if result.complete else "stopped at limit"
            line = f"N={size}: {result.count} solutions ({status}, {result.elapsed:.2f}s)"
            if expected is not None and result.complete:
                line += " ✓" if result.count == expected else f" ✗ expected {expected}"
            print(line)

    if config.save:
        metadata = {
            'symmetry_breaking': config.symmetry_breaking,
            'timeout_ms': config.timeout_ms,
            'max_solutions': config.max_solutions,
        }
        for size, result in results.items():
            saved = save_run_results(config.output_dir, result, metadata, save_plots=True)
            print(f"N={size}: Saved to {saved['run_folder']}/")

    if config.show:
        for size, result in results.items():
            if result.count > 0:
                visualize_board(result.solutions[0], size, show=True,
                                metadata={'solution_index': 0})
        plot_solution_counts(
            {size: result.count for size, result in results.items()},
            show=True,
            metadata={'symmetry_breaking': config.symmetry_breaking},
        )


if __name__ == "__main__":
    main()
