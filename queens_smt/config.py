"""
Configuration management for the SMT N-Queens solver.

This module provides a clean interface for loading and validating
configuration from YAML files.
"""

import yaml
from dataclasses import dataclass, field
from typing import List

from .board import MAX_ALGEBRAIC_SIZE


@dataclass
class Config:
    """
    Configuration container for the N-queens enumerator.

    Attributes:
        sizes: List of board sizes to run
        notation: Solution rendering ('board' or 'algebraic')
        filler: Glyph for empty cells in board notation
        symmetry_breaking: Whether to order queens row-major
        timeout_ms: Per-check solver timeout in milliseconds (0 to disable)
        max_solutions: Stop after this many solutions per size (0 for all)
        workers: Number of worker processes across board sizes
        log_interval: Print progress every N solutions (0 to disable)
        verbose: Whether to print progress
        show: Whether to show plots
        save: Whether to save solutions, metadata and plots
        output_dir: Directory to save results
    """

    # Board configuration
    sizes: List[int] = field(default_factory=lambda: [3, 4, 8])

    # Output configuration
    notation: str = 'board'
    filler: str = '+'

    # Solver configuration
    symmetry_breaking: bool = True
    timeout_ms: int = 0
    max_solutions: int = 0

    # Execution configuration
    workers: int = 1
    log_interval: int = 0
    verbose: bool = False

    # Visualization and output
    show: bool = False
    save: bool = False
    output_dir: str = 'results'

    @classmethod
    def from_yaml(cls, path: str) -> 'Config':
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        # Accept a single 'size' as well as a 'sizes' list
        sizes = data.get('sizes')
        if sizes is None:
            size = data.get('size')
            sizes = [size] if size is not None else [3, 4, 8]
        if not isinstance(sizes, list):
            sizes = [sizes]

        return cls(
            sizes=sizes,
            notation=data.get('notation', 'board'),
            filler=data.get('filler', '+'),
            symmetry_breaking=data.get('symmetry_breaking', True),
            timeout_ms=data.get('timeout_ms', 0),
            max_solutions=data.get('max_solutions', 0),
            workers=data.get('workers', 1),
            log_interval=data.get('log_interval', 0),
            verbose=data.get('verbose', False),
            show=data.get('show', False),
            save=data.get('save', False),
            output_dir=data.get('output_dir', 'results'),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'sizes': self.sizes,
            'notation': self.notation,
            'filler': self.filler,
            'symmetry_breaking': self.symmetry_breaking,
            'timeout_ms': self.timeout_ms,
            'max_solutions': self.max_solutions,
            'workers': self.workers,
            'log_interval': self.log_interval,
            'verbose': self.verbose,
            'show': self.show,
            'save': self.save,
            'output_dir': self.output_dir,
        }

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate sizes
        if not self.sizes:
            errors.append("At least one board size must be specified")
        for size in self.sizes:
            if not isinstance(size, int) or isinstance(size, bool):
                errors.append(f"Board size must be an integer, got {size!r}")
            elif size < 1:
                errors.append(f"Board size must be positive, got {size}")
        int_sizes = [s for s in self.sizes if isinstance(s, int)]
        duplicates = sorted({s for s in int_sizes if int_sizes.count(s) > 1})
        if duplicates:
            errors.append(f"Duplicate board sizes: {duplicates}")

        # Validate notation
        valid_notations = ['board', 'algebraic']
        if self.notation not in valid_notations:
            errors.append(f"Invalid notation '{self.notation}', must be one of {valid_notations}")
        elif self.notation == 'algebraic':
            too_large = [s for s in self.sizes if isinstance(s, int) and s > MAX_ALGEBRAIC_SIZE]
            if too_large:
                errors.append(
                    f"Algebraic notation supports at most {MAX_ALGEBRAIC_SIZE} columns, "
                    f"got sizes {too_large}"
                )

        # Validate filler
        if not isinstance(self.filler, str) or len(self.filler) != 1:
            errors.append(f"filler must be a single character, got {self.filler!r}")
        elif self.filler == 'Q':
            errors.append("filler must differ from the queen glyph 'Q'")

        # Validate solver limits
        if self.timeout_ms < 0:
            errors.append(f"timeout_ms must be non-negative, got {self.timeout_ms}")
        if self.max_solutions < 0:
            errors.append(f"max_solutions must be non-negative, got {self.max_solutions}")

        # Validate execution
        if self.workers < 1:
            errors.append(f"workers must be positive, got {self.workers}")
        if self.log_interval < 0:
            errors.append(f"log_interval must be non-negative, got {self.log_interval}")

        return errors

    def print_summary(self) -> None:
        """Print configuration summary."""
        print("=" * 60)
        print("Configuration Summary")
        print("=" * 60)
        print(f"Board sizes: {self.sizes}")
        print(f"Notation: {self.notation}")
        print(f"Symmetry breaking: {self.symmetry_breaking}")
        print(f"Timeout: {self.timeout_ms} ms" if self.timeout_ms > 0 else "Timeout: none")
        if self.max_solutions > 0:
            print(f"Max solutions: {self.max_solutions:,}")
        print(f"Workers: {self.workers}")
        if self.log_interval > 0:
            print(f"Log interval: {self.log_interval:,}")
        print(f"Save: {self.save}" + (f" → {self.output_dir}" if self.save else ""))
        print("=" * 60)
