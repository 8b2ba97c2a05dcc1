"""
Decision variable factory.
"""

from typing import List

import z3


def create_int_vector(context: z3.Context, n: int, name: str) -> List[z3.ArithRef]:
    """
    Create n integer constants named name_0 ... name_{n-1}.

    Args:
        context: Z3 context the variables are registered with
        n: Number of variables
        name: Axis label used as name prefix

    Returns:
        List of Z3 integer constants.
    """
    if n < 0:
        raise ValueError(f"Variable count must be non-negative, got {n}")

    prefix = name + '_'
    return [z3.Int(f"{prefix}{i}", context) for i in range(n)]
