"""
Base Strategy Module - Abstract base class for propagation strategies.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Tuple

import numpy as np

from .grid import Grid


class Strategy(ABC):
    """
    Abstract base class for all propagation strategies.

    A strategy inspects a grid and applies every deduction its rule allows
    in one pass. It must be deterministic: the same grid state always
    produces the same mutations.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def apply(self, grid: Grid) -> bool:
        """
        Apply one pass of the rule to the grid in place.

        Args:
            grid: Grid to mutate

        Returns:
            True if any cell was fixed or any candidate removed

        Raises:
            Contradiction: If the rule proves the grid has no solution
        """
        pass

    def iter_units(self, grid: Grid) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """
        Yield every unit with the candidate matrix of its open cells.

        Yields:
            (cells, matrix) where cells are the undetermined cell indices
            of the unit and matrix[i, e] tells if cells[i] allows e
        """
        for unit in grid.geometry.units:
            cells = unit[grid.values[unit] < 0]
            if len(cells) == 0:
                continue
            yield cells, grid.candidates[cells]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
