"""
Exact Solve Module - Classify a grid by running the full roster.

Every built-in strategy is sound, so reaching a fully fixed grid proves
the puzzle has exactly one solution.
"""

from enum import Enum
from typing import Sequence

from .convergence import propagate
from .solver import Contradiction, Grid, Strategy


class SolveStatus(Enum):
    """Outcome of an exact solve."""
    FINISH = "finish"  # solved, unique
    ERROR = "error"    # contradiction, no solution
    OPEN = "open"      # fixed point reached without a full solution


def solve(grid: Grid, roster: Sequence[Strategy]) -> SolveStatus:
    """
    Propagate the full roster on grid in place and classify the result.

    Args:
        grid: Grid to solve (mutated)
        roster: Every available strategy

    Returns:
        SolveStatus of the grid after propagation
    """
    try:
        propagate(grid, roster)
    except Contradiction:
        return SolveStatus.ERROR

    if not grid.is_valid():
        return SolveStatus.ERROR
    if grid.is_solved():
        return SolveStatus.FINISH
    return SolveStatus.OPEN
