"""
Unregistered strategies with scripted behaviour, for engine tests.
"""

import numpy as np

from sudoku_stats.solver import ALPHABET, Grid, Strategy


class RevealStrategy(Strategy):
    """Fix the next `per_round` open cells from a known solution."""
    name = "reveal"
    description = "Reveal - Copy cells from a known solution"

    def __init__(self, solution: str, per_round: int = 17, name: str = None):
        self.solution = solution
        self.per_round = per_round
        if name is not None:
            self.name = name

    def apply(self, grid: Grid) -> bool:
        targets = np.flatnonzero(grid.undetermined_mask())[:self.per_round].tolist()
        for index in targets:
            grid.set_cell(index, ALPHABET.index(self.solution[index]))
        return bool(targets)


class IdleStrategy(Strategy):
    """Never changes anything."""
    name = "idle"
    description = "Idle - No deductions"

    def __init__(self, name: str = None):
        if name is not None:
            self.name = name

    def apply(self, grid: Grid) -> bool:
        return False


class ExplodingStrategy(Strategy):
    """Fails the test if it is ever applied."""
    name = "exploding"
    description = "Exploding - Must not run"

    def __init__(self, name: str = None):
        if name is not None:
            self.name = name

    def apply(self, grid: Grid) -> bool:
        raise AssertionError(f"{self.name} should not have been applied")
