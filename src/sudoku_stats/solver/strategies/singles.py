"""
Single Strategies - Placements forced by one remaining option.
"""

import numpy as np

from ..base import Strategy
from ..grid import Contradiction, Grid
from ..factory import register_strategy


@register_strategy
class NakedSingleStrategy(Strategy):
    """
    Fix every undetermined cell that has exactly one candidate left.
    """
    name = "naked_single"
    description = "Naked single - Cell with only one candidate"

    def apply(self, grid: Grid) -> bool:
        counts = grid.candidates.sum(axis=1)
        targets = np.flatnonzero(grid.undetermined_mask() & (counts == 1))

        changed = False
        for index in targets.tolist():
            if grid.values[index] >= 0:
                continue
            element = int(np.argmax(grid.candidates[index]))
            changed |= grid.set_cell(index, element)
        return changed


@register_strategy
class HiddenSingleStrategy(Strategy):
    """
    Fix a cell when it is the only place left for an element in a unit.

    A missing element with no place left in a unit is a contradiction.
    """
    name = "hidden_single"
    description = "Hidden single - Element fits only one cell of a unit"

    def apply(self, grid: Grid) -> bool:
        changed = False

        for unit in grid.geometry.units:
            values = grid.values[unit]
            cells = unit[values < 0]
            if len(cells) == 0:
                continue

            missing = np.ones(grid.order, dtype=bool)
            missing[values[values >= 0]] = False
            matrix = grid.candidates[cells]
            counts = matrix.sum(axis=0)

            if np.any(missing & (counts == 0)):
                raise Contradiction(f"An element has no place left in unit {unit.tolist()}")

            for element in np.flatnonzero(missing & (counts == 1)).tolist():
                index = int(cells[np.argmax(matrix[:, element])])
                # an earlier placement in this unit may have taken the cell
                if grid.values[index] >= 0 or not grid.candidates[index, element]:
                    continue
                changed |= grid.set_cell(index, element)

        return changed
