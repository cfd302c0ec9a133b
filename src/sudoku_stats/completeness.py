"""
Completeness Module - How close an unsolved run got to a full solution.

Two scores, each with an absolute and a relative variant:
  - no candidates: share of fixed cells
  - with candidates: fixed cells earn n points, undetermined cells earn
    n minus their remaining candidate count, out of n points per cell

Relative variants only look at the cells that were undetermined in the
original puzzle, and are 0.0 when there is no such cell.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .solver import Grid


@dataclass(frozen=True)
class Completeness:
    """
    Attributes:
        absolute: Score over all cells, in [0, 1]
        relative: Score over cells open in the original puzzle, in [0, 1]
    """
    absolute: float
    relative: float

    def to_dict(self) -> dict:
        return {"absolute": self.absolute, "relative": self.relative}

    @classmethod
    def from_dict(cls, data: dict) -> 'Completeness':
        return cls(absolute=float(data["absolute"]), relative=float(data["relative"]))


def _points(grid: Grid) -> np.ndarray:
    """Per-cell credit: n if fixed, else n - |candidates|."""
    order = grid.order
    remaining = grid.candidates.sum(axis=1)
    return np.where(grid.values >= 0, order, order - remaining)


def completeness_no_candidates(result: Grid, original: Grid) -> Completeness:
    """Share of cells that are fixed."""
    fixed = result.values >= 0
    opportunity = original.undetermined_mask()
    open_count = int(np.count_nonzero(opportunity))

    absolute = np.count_nonzero(fixed) / result.size
    relative = np.count_nonzero(fixed[opportunity]) / open_count if open_count else 0.0
    return Completeness(absolute=float(absolute), relative=float(relative))


def completeness_with_candidates(result: Grid, original: Grid) -> Completeness:
    """Share of candidate eliminations done, counting fixed cells as complete."""
    order = result.order
    points = _points(result)
    opportunity = original.undetermined_mask()
    open_count = int(np.count_nonzero(opportunity))

    absolute = points.sum() / (result.size * order)
    relative = points[opportunity].sum() / (open_count * order) if open_count else 0.0
    return Completeness(absolute=float(absolute), relative=float(relative))


def completeness(result: Grid, original: Grid) -> Tuple[Completeness, Completeness]:
    """
    Score a converged grid against the puzzle it started from.

    Args:
        result: Converged, usually unsolved grid
        original: Puzzle before propagation

    Returns:
        (with_candidates, no_candidates)

    Raises:
        ValueError: If the grids have different orders
    """
    if result.order != original.order:
        raise ValueError(f"Order mismatch: {result.order} vs {original.order}")
    return (
        completeness_with_candidates(result, original),
        completeness_no_candidates(result, original),
    )
