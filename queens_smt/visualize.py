"""
Visualization and output functions for the SMT N-Queens solver.

This module provides:
- Chessboard rendering of a single solution
- Gallery of many solutions in one figure
- Solution count plot across board sizes
- Save functionality with metadata
- Text output format (one solution per line, algebraic squares)
"""

import numpy as np
import matplotlib.pyplot as plt
import math
from typing import List, Dict, Optional, Sequence, Tuple
from pathlib import Path
import json
from datetime import datetime

from .board import build_board_grid, to_algebraic, QUEEN
from .utils import KNOWN_SOLUTION_COUNTS


LIGHT_SQUARE = '#f0d9b5'
DARK_SQUARE = '#b58863'


def draw_board(ax, positions: Sequence[Tuple[int, int]], N: int) -> None:
    """Draw checkered squares and queens on an axis, row 1 at the bottom."""
    grid = build_board_grid(positions, N)

    for row in range(N):
        for col in range(N):
            color = LIGHT_SQUARE if (row + col) % 2 else DARK_SQUARE
            ax.add_patch(plt.Rectangle(
                (col, row), 1, 1,
                facecolor=color, edgecolor='none'
            ))
            if grid[row, col] == QUEEN:
                ax.text(col + 0.5, row + 0.5, '♛', ha='center', va='center',
                        fontsize=max(6, 200 // (N * 2)), color='black')

    ax.set_xlim(0, N)
    ax.set_ylim(0, N)
    ax.set_aspect('equal')


def visualize_board(
    positions: Sequence[Tuple[int, int]],
    N: int,
    filename: Optional[str] = None,
    show: bool = False,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Draw one N-queens solution as a chessboard.

    Args:
        positions: Queen positions (x, y), 1-based
        N: Board dimension
        filename: Optional path to save the figure
        show: Whether to display the plot
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    fig, ax = plt.subplots(figsize=(8, 8))
    draw_board(ax, positions, N)

    ax.set_xticks(np.arange(N) + 0.5)
    ax.set_yticks(np.arange(N) + 0.5)
    if N <= 26:
        ax.set_xticklabels([chr(ord('A') + i) for i in range(N)])
    else:
        ax.set_xticklabels(np.arange(1, N + 1))
    ax.set_yticklabels(np.arange(1, N + 1))
    ax.set_xlabel('x (column)', fontsize=12, fontweight='bold')
    ax.set_ylabel('y (row)', fontsize=12, fontweight='bold')

    title = f'{N}-Queens Solution'
    if metadata and 'solution_index' in metadata:
        title += f" #{metadata['solution_index'] + 1}"
    if N <= 26:
        title += '\n' + ' '.join(to_algebraic(positions))
    ax.set_title(title, fontsize=13, fontweight='bold')

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight', facecolor='white')
        if not show:
            plt.close()
        return filename

    if show:
        plt.show()

    return None


def plot_solution_gallery(
    solutions: List[List[Tuple[int, int]]],
    N: int,
    filename: Optional[str] = None,
    show: bool = False,
    max_boards: int = 100,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Draw up to max_boards solutions in a square grid of small boards.

    Args:
        solutions: List of solutions, each a list of positions
        N: Board dimension
        filename: Optional path to save the figure
        show: Whether to display the plot
        max_boards: Maximum number of boards to draw
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    shown = solutions[:max_boards]
    if not shown:
        return None

    cols = math.ceil(math.sqrt(len(shown)))
    rows = math.ceil(len(shown) / cols)
    fig, axes = plt.subplots(rows, cols, figsize=(2 * cols, 2 * rows), squeeze=False)

    for idx, ax in enumerate(axes.flat):
        ax.axis('off')
        if idx < len(shown):
            draw_board(ax, shown[idx], N)
            ax.set_title(f'#{idx + 1}', fontsize=8)

    title = f'{N}-Queens: {len(shown)} of {len(solutions)} solutions'
    if metadata and not metadata.get('symmetry_breaking', True):
        title += ' (labelled)'
    fig.suptitle(title, fontsize=13, fontweight='bold')

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight', facecolor='white')
        if not show:
            plt.close()
        return filename

    if show:
        plt.show()

    return None


def plot_solution_counts(
    counts: Dict[int, int],
    filename: Optional[str] = None,
    show: bool = False,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Plot solutions found per board size against the known classical counts.

    Args:
        counts: Mapping from board size to number of solutions found
        filename: Optional path to save the figure
        show: Whether to display the plot
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    sizes = sorted(counts)
    found = [counts[n] for n in sizes]
    known = [KNOWN_SOLUTION_COUNTS.get(n, np.nan) for n in sizes]

    plt.figure(figsize=(12, 7))
    x = np.arange(len(sizes))
    width = 0.4

    plt.bar(x - width / 2, found, width, label='Found', color='steelblue')
    plt.bar(x + width / 2, known, width, label='Known (OEIS A000170)',
            color='lightgray', edgecolor='black')

    plt.xticks(x, [str(n) for n in sizes])
    plt.xlabel('Board size N', fontsize=12)
    plt.ylabel('Solutions', fontsize=12)
    if max(found + [0]) > 100:
        plt.yscale('log')

    title = 'N-Queens Solution Counts'
    if metadata and 'symmetry_breaking' in metadata:
        title += f"\nSymmetry breaking={metadata['symmetry_breaking']}"
    plt.title(title, fontsize=13, fontweight='bold')
    plt.legend()
    plt.grid(True, alpha=0.3, axis='y')

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight')
        if not show:
            plt.close()
        return filename

    if show:
        plt.show()

    return None


def save_solutions_text(
    solutions: List[List[Tuple[int, int]]],
    filename: str
) -> str:
    """
    Save solutions one per line.

    Format: space-separated squares per line. Algebraic squares (A1, C4) are
    used up to 26 columns, "x,y" pairs beyond that. No headers.

    Args:
        solutions: List of solutions, each a list of positions
        filename: Path to save the file

    Returns:
        Path to saved file
    """
    with open(filename, 'w') as f:
        for positions in solutions:
            if all(x <= 26 for x, _ in positions):
                squares = to_algebraic(positions)
            else:
                squares = [f"{x},{y}" for x, y in positions]
            f.write(' '.join(squares) + '\n')

    return filename


def create_run_output_folder(
    base_output_dir: str,
    board_size: int
) -> str:
    """
    Create a timestamped output folder for a run.

    Structure: base_output_dir/N{board_size}/run_{datetime}/

    Args:
        base_output_dir: Base output directory
        board_size: Board dimension N

    Returns:
        Path to created folder
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    run_folder = Path(base_output_dir) / f"N{board_size}" / f"run_{timestamp}"
    run_folder.mkdir(parents=True, exist_ok=True)
    return str(run_folder)


def save_run_results(
    output_dir: str,
    result,
    metadata: Dict,
    save_plots: bool = True
) -> Dict[str, str]:
    """
    Save all results for one board size to a timestamped folder.

    Creates: output_dir/N{size}/run_{datetime}/

    Always saves:
    - solutions.txt: One solution per line
    - metadata.json: Run parameters and results

    Optionally saves:
    - gallery.png: Solution gallery

    Args:
        output_dir: Base output directory
        result: SolveResult for the board size
        metadata: Dict with all run parameters
        save_plots: Whether to save the gallery plot

    Returns:
        Dict mapping result type to filename
    """
    N = result.board_size
    run_folder = create_run_output_folder(output_dir, N)
    run_path = Path(run_folder)

    saved_files = {'run_folder': run_folder}

    solutions_txt = run_path / "solutions.txt"
    save_solutions_text(result.solutions, str(solutions_txt))
    saved_files['solutions_txt'] = str(solutions_txt)

    json_metadata = dict(metadata)
    json_metadata['board_size'] = N
    json_metadata['solutions_count'] = result.count
    json_metadata['known_solutions'] = KNOWN_SOLUTION_COUNTS.get(N)
    json_metadata['complete'] = result.complete
    json_metadata['constraint_count'] = result.constraint_count
    json_metadata['elapsed_seconds'] = result.elapsed
    json_metadata['timestamp'] = datetime.now().isoformat()
    json_metadata['solutions'] = [
        [[int(x), int(y)] for x, y in positions] for positions in result.solutions
    ]

    json_file = run_path / "metadata.json"
    with open(json_file, 'w') as f:
        json.dump(json_metadata, f, indent=2)
    saved_files['metadata'] = str(json_file)

    if save_plots and result.count > 0:
        gallery_file = run_path / "gallery.png"
        plot_solution_gallery(result.solutions, N, filename=str(gallery_file),
                              metadata=metadata)
        saved_files['gallery'] = str(gallery_file)

    return saved_files
