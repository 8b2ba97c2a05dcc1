"""
Experiments for the SMT N-Queens Enumerator

This script runs experiments on the enumeration loop:
1. Solution counts vs the known classical counts
2. Effect of the row-major symmetry-breaking constraints
3. Enumeration time as function of N
"""

import numpy as np
import matplotlib.pyplot as plt
import math
import time

from queens_smt.solver import QueenSolver
from queens_smt.utils import KNOWN_SOLUTION_COUNTS, expected_solution_count
from queens_smt.visualize import plot_solution_counts


def run_single_experiment(N, symmetry_breaking=True, max_solutions=0, timeout_ms=0):
    """Enumerate one board size and return results."""
    solver = QueenSolver(N, symmetry_breaking=symmetry_breaking, timeout_ms=timeout_ms)

    start = time.time()
    result = solver.run(max_solutions=max_solutions)
    elapsed = time.time() - start

    return {
        'N': N,
        'symmetry_breaking': symmetry_breaking,
        'count': result.count,
        'complete': result.complete,
        'constraints': result.constraint_count,
        'time': elapsed,
    }


def experiment_1_solution_counts(N_values=range(1, 10)):
    """
    Task 1: Compare enumerated solution counts to the known values.
    """
    print(f"\n{'='*60}")
    print("Experiment 1: Solution Counts")
    print(f"{'='*60}")

    counts = {}
    for N in N_values:
        result = run_single_experiment(N)
        counts[N] = result['count']
        known = KNOWN_SOLUTION_COUNTS.get(N)
        status = 'OK' if known == result['count'] else f'expected {known}'
        print(f"  N={N:>2}: {result['count']:>6} solutions ({result['time']:.2f}s) {status}")

    plot_solution_counts(counts, filename='exp1_solution_counts.png',
                         metadata={'symmetry_breaking': True})

    print(f"\nSaved: exp1_solution_counts.png")
    return counts


def experiment_2_symmetry_breaking(N_values=range(1, 6)):
    """
    Task 2: Counts and time with and without the ordering constraints.

    Without ordering every board is reported once per queen labelling, so the
    count grows by a factor N!.
    """
    print(f"\n{'='*60}")
    print("Experiment 2: Symmetry Breaking")
    print(f"{'='*60}")

    results = []
    for N in N_values:
        with_order = run_single_experiment(N, symmetry_breaking=True)
        without_order = run_single_experiment(N, symmetry_breaking=False)
        results.append((N, with_order, without_order))

        expected = expected_solution_count(N, symmetry_breaking=False)
        print(f"  N={N}: ordered={with_order['count']} ({with_order['time']:.2f}s), "
              f"labelled={without_order['count']} ({without_order['time']:.2f}s), "
              f"expected labelled={expected}")

    Ns = [r[0] for r in results]
    times_on = [r[1]['time'] for r in results]
    times_off = [r[2]['time'] for r in results]

    plt.figure(figsize=(10, 6))
    plt.plot(Ns, times_on, 'o-', label='With ordering')
    plt.plot(Ns, times_off, 's--', label='Without ordering')
    plt.xlabel('Board size N')
    plt.ylabel('Enumeration time (s)')
    plt.yscale('log')
    plt.title('Effect of Symmetry Breaking on Enumeration Time')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.savefig('exp2_symmetry_breaking.png', dpi=150)
    plt.close()

    print(f"\nSaved: exp2_symmetry_breaking.png")
    return results


def experiment_3_time_vs_N(N_values=range(4, 11)):
    """
    Task 3: Enumeration time and time per solution as N grows.
    """
    print(f"\n{'='*60}")
    print("Experiment 3: Enumeration Time vs N")
    print(f"{'='*60}")

    results = [run_single_experiment(N) for N in N_values]

    Ns = np.array([r['N'] for r in results])
    times = np.array([r['time'] for r in results])
    counts = np.array([r['count'] for r in results])
    per_solution = times / np.maximum(counts, 1)

    fig, ax1 = plt.subplots(figsize=(10, 6))
    ax1.plot(Ns, times, 'b-o', label='Total time')
    ax1.set_xlabel('Board size N')
    ax1.set_ylabel('Total time (s)', color='b')
    ax1.set_yscale('log')

    ax2 = ax1.twinx()
    ax2.plot(Ns, per_solution * 1000, 'r--s', label='Time per solution')
    ax2.set_ylabel('Time per solution (ms)', color='r')

    plt.title('Enumeration Time vs N')
    ax1.grid(True, alpha=0.3)
    plt.savefig('exp3_time_vs_N.png', dpi=150)
    plt.close()

    # Print summary
    print("\n" + "="*60)
    print(f"{'N':>3} | {'Solutions':>9} | {'N!':>9} | {'Time (s)':>9} | {'ms/sol':>8}")
    print("-"*60)
    for r, ps in zip(results, per_solution):
        print(f"{r['N']:>3} | {r['count']:>9} | {math.factorial(r['N']):>9} | "
              f"{r['time']:>9.2f} | {ps*1000:>8.1f}")
    print("="*60)

    print(f"\nSaved: exp3_time_vs_N.png")
    return results


def run_all_experiments():
    """Run all experiments."""
    print("\n" + "="*60)
    print("SMT N-Queens Enumerator")
    print("Running all experiments...")
    print("="*60)

    experiment_1_solution_counts(N_values=range(1, 9))
    experiment_2_symmetry_breaking(N_values=range(1, 6))
    experiment_3_time_vs_N(N_values=range(4, 10))

    print("\n" + "="*60)
    print("All experiments completed!")
    print("Generated plots:")
    print("  - exp1_solution_counts.png")
    print("  - exp2_symmetry_breaking.png")
    print("  - exp3_time_vs_N.png")
    print("="*60)


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1:
        exp = sys.argv[1]
        if exp == '1':
            experiment_1_solution_counts()
        elif exp == '2':
            experiment_2_symmetry_breaking()
        elif exp == '3':
            experiment_3_time_vs_N()
        else:
            print("Usage: python experiments.py [1|2|3]")
    else:
        run_all_experiments()
