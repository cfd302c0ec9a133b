"""
Convergence Module - Drive a grid to a fixed point under a strategy set.

Round convention: every pass over the strategy set counts, including the
final pass that detects no change. A set that changes nothing therefore
reports one round.
"""

from dataclasses import dataclass
from typing import Sequence

from .solver import Grid, Strategy


@dataclass
class Convergence:
    """
    Result of running a strategy set to its fixed point.

    Attributes:
        grid: Converged grid (a clone, the input is untouched)
        rounds: Passes executed, including the terminating one
        solved: True if every cell ended up fixed
    """
    grid: Grid
    rounds: int
    solved: bool


def propagate(grid: Grid, strategies: Sequence[Strategy]) -> int:
    """
    Apply strategies in order, round after round, until nothing changes
    or the grid is solved. Mutates grid in place.

    Args:
        grid: Grid to mutate
        strategies: Strategies in canonical roster order

    Returns:
        Number of rounds executed

    Raises:
        Contradiction: If a strategy proves the grid inconsistent
    """
    rounds = 0
    while True:
        rounds += 1
        changed = False
        for strategy in strategies:
            if strategy.apply(grid):
                changed = True
        if not changed or grid.is_solved():
            return rounds


def converge(grid: Grid, strategies: Sequence[Strategy]) -> Convergence:
    """Run strategies to a fixed point on a clone of grid."""
    result = grid.clone()
    rounds = propagate(result, strategies)
    return Convergence(grid=result, rounds=rounds, solved=result.is_solved())
