"""
Locked Candidate Strategies - Eliminations from block/line intersections.
"""

import numpy as np

from ..base import Strategy
from ..grid import Grid
from ..factory import register_strategy


def _eliminate_outside(grid: Grid, unit: np.ndarray, keep: np.ndarray, element: int) -> bool:
    """Remove element from every cell of unit that is not in keep."""
    changed = False
    for index in np.setdiff1d(unit, keep).tolist():
        if grid.values[index] < 0 and grid.candidates[index, element]:
            changed |= grid.eliminate(index, [element])
    return changed


@register_strategy
class PointingStrategy(Strategy):
    """
    If an element's candidates inside a block all lie on one row (or
    column), no other cell of that row (or column) can hold it.
    """
    name = "pointing"
    description = "Pointing - Block candidates confined to one line"

    def apply(self, grid: Grid) -> bool:
        geometry = grid.geometry
        order = grid.order
        changed = False

        for block in geometry.blocks:
            cells = block[grid.values[block] < 0]
            if len(cells) < 2:
                continue
            for element in range(order):
                holders = cells[grid.candidates[cells, element]]
                if len(holders) < 2:
                    continue

                rows = np.unique(holders // order)
                if len(rows) == 1:
                    changed |= _eliminate_outside(grid, geometry.rows[rows[0]], block, element)

                cols = np.unique(holders % order)
                if len(cols) == 1:
                    changed |= _eliminate_outside(grid, geometry.cols[cols[0]], block, element)

        return changed


@register_strategy
class ClaimingStrategy(Strategy):
    """
    If an element's candidates on a row (or column) all lie in one block,
    no other cell of that block can hold it.
    """
    name = "claiming"
    description = "Claiming - Line candidates confined to one block"

    def apply(self, grid: Grid) -> bool:
        geometry = grid.geometry
        changed = False

        for line in np.concatenate([geometry.rows, geometry.cols]):
            cells = line[grid.values[line] < 0]
            if len(cells) < 2:
                continue
            for element in range(grid.order):
                holders = cells[grid.candidates[cells, element]]
                if len(holders) < 2:
                    continue

                blocks = np.unique(geometry.block_of[holders])
                if len(blocks) == 1:
                    changed |= _eliminate_outside(grid, geometry.blocks[blocks[0]], line, element)

        return changed
