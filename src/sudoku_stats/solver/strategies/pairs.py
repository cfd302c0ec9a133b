"""
Pair Strategies - Two cells locking two elements within a unit.
"""

from typing import Dict, List, Tuple

import numpy as np

from ..base import Strategy
from ..grid import Contradiction, Grid
from ..factory import register_strategy


@register_strategy
class NakedPairsStrategy(Strategy):
    """
    Two cells of a unit with the same two candidates own those elements;
    remove them from the rest of the unit.
    """
    name = "naked_pairs"
    description = "Naked pairs - Two cells sharing the same two candidates"

    def apply(self, grid: Grid) -> bool:
        changed = False

        for cells, matrix in self.iter_units(grid):
            owners: Dict[Tuple[int, ...], List[int]] = {}
            for cell, row in zip(cells.tolist(), matrix):
                if np.count_nonzero(row) == 2:
                    owners.setdefault(tuple(np.flatnonzero(row).tolist()), []).append(cell)

            for pair, pair_cells in owners.items():
                if len(pair_cells) < 2:
                    continue
                if len(pair_cells) > 2:
                    raise Contradiction(f"Cells {pair_cells} share the two candidates {pair}")
                for cell in cells.tolist():
                    if cell not in pair_cells:
                        changed |= grid.eliminate(cell, pair)

        return changed


@register_strategy
class HiddenPairsStrategy(Strategy):
    """
    Two elements that can only go in the same two cells of a unit claim
    those cells; every other candidate is removed from them.
    """
    name = "hidden_pairs"
    description = "Hidden pairs - Two elements confined to the same two cells"

    def apply(self, grid: Grid) -> bool:
        changed = False

        for cells, matrix in self.iter_units(grid):
            counts = matrix.sum(axis=0)
            groups: Dict[Tuple[int, ...], List[int]] = {}
            for element in np.flatnonzero(counts == 2).tolist():
                holders = tuple(cells[matrix[:, element]].tolist())
                groups.setdefault(holders, []).append(element)

            for holders, elements in groups.items():
                if len(elements) < 2:
                    continue
                if len(elements) > 2:
                    raise Contradiction(f"Elements {elements} confined to the two cells {holders}")
                others = [e for e in range(grid.order) if e not in elements]
                for cell in holders:
                    changed |= grid.eliminate(cell, others)

        return changed
