"""
Puzzle Generator Module - Random minimal puzzles.

Generation has two steps:
  1. Fill: build a random complete grid. Cells are walked from both ends
     towards the middle; each gets a random candidate that survives an
     exact solve. A failed sweep throws the whole attempt away and starts
     over (no backtracking stack).
  2. Minimize: clear batches of clues while the exact solve still finishes.
     Batches shrink by n each pass down to single clues, and single-clue
     passes repeat until one of them clears nothing.
"""

import logging
import random
from typing import List, Optional, Sequence

from .exact import SolveStatus, solve
from .solver import Contradiction, Geometry, Grid, Strategy, validate_order

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """
    Generate minimal, uniquely solvable puzzles.

    Attributes:
        roster: Strategies used by the exact solve
        rng: Source of randomness (seed it for reproducible corpora)
    """

    def __init__(self, roster: Sequence[Strategy], rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            roster: Full strategy roster for exact solving
            rng: Random source, a fresh unseeded one if omitted
        """
        self.roster: List[Strategy] = list(roster)
        self.rng = rng if rng is not None else random.Random()

    def generate(self, order: int) -> Grid:
        """
        Generate one minimal puzzle.

        Args:
            order: Grid side length (perfect square)

        Returns:
            Puzzle grid that the roster solves uniquely

        Raises:
            ValueError: If order is not a supported perfect square
        """
        validate_order(order)
        puzzle = self.minimize(self.generate_filled(order))
        logger.debug(f"Generated order {order} puzzle with {puzzle.fixed_count()} clues")
        return puzzle

    def generate_filled(self, order: int) -> Grid:
        """
        Build a random, completely filled valid grid.

        Retries with fresh randomness until an attempt succeeds.
        """
        geometry = Geometry.build(order)
        attempt = 0
        while True:
            attempt += 1
            grid = self._fill_attempt(geometry)
            if grid.is_solved() and grid.is_valid():
                logger.debug(f"Filled order {order} grid after {attempt} attempt(s)")
                return grid
            logger.debug(f"Fill attempt {attempt} for order {order} left "
                         f"{grid.size - grid.fixed_count()} cells open, restarting")

    def minimize(self, filled: Grid) -> Grid:
        """
        Remove clues from a filled grid while it stays uniquely solvable.

        Args:
            filled: Complete grid (left untouched)

        Returns:
            Puzzle where no single clue can be cleared without the exact
            solve losing its unique finish
        """
        grid = filled.clone()
        order = grid.order
        batch_size = int(order ** 1.5) + 2

        while True:
            indices = grid.fixed_indices()
            self.rng.shuffle(indices)
            cleared = 0

            for start in range(0, len(indices), batch_size):
                batch = indices[start:start + batch_size]
                attempt = grid.clone()
                for index in batch:
                    attempt.clear_cell(index)
                if solve(attempt, self.roster) is SolveStatus.FINISH:
                    for index in batch:
                        grid.clear_cell(index)
                    cleared += len(batch)

            logger.debug(f"Batch size {batch_size}: cleared {cleared}, "
                         f"{grid.fixed_count()} clues left")
            # a single-clue pass that clears nothing proves minimality
            if batch_size <= 1 and cleared == 0:
                return grid
            batch_size = max(batch_size - order, 1)

    def _fill_attempt(self, geometry: Geometry) -> Grid:
        grid = self._seed_first_row(geometry)
        last = geometry.size - 1
        for i in range(last // 2 + 1):
            if grid.is_solved():
                break
            grid = self._try_fill_cell(grid, i)
            grid = self._try_fill_cell(grid, last - i)
        return grid

    def _seed_first_row(self, geometry: Geometry) -> Grid:
        """Grid with a random permutation in the first row, exact-solved."""
        order = geometry.order
        while True:
            grid = Grid(order, geometry)
            row = list(range(order))
            self.rng.shuffle(row)
            for col, element in enumerate(row):
                grid.set_cell(col, element)
            if solve(grid, self.roster) is not SolveStatus.ERROR:
                return grid
            logger.debug("First row rejected by exact solve, drawing another")

    def _try_fill_cell(self, grid: Grid, index: int) -> Grid:
        """
        Try the candidates of one cell in random order.

        Returns:
            The first solved clone that stays valid, or grid unchanged if
            no candidate works
        """
        if grid.values[index] >= 0 or grid.is_solved():
            return grid

        remaining = sorted(grid.candidates_of(index))
        while remaining:
            element = remaining.pop(self.rng.randrange(len(remaining)))
            attempt = grid.clone()
            try:
                attempt.set_cell(index, element)
            except Contradiction:
                continue
            if solve(attempt, self.roster) is not SolveStatus.ERROR and attempt.is_valid():
                return attempt

        return grid
