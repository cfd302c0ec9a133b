"""
Grid Module - Mutable candidate grid for block Latin square puzzles.

A grid of order n has n*n cells. Every cell is either fixed to an element
in [0, n) or undetermined with a set of remaining candidates. No two fixed
cells sharing a row, column or block hold the same element; every mutation
keeps that true.
"""

import math
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional

import numpy as np

# Element e is written as ALPHABET[e]
ALPHABET = "123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
EMPTY_CHAR = "."
BLANK_CHARS = frozenset(".0 ")

MAX_ORDER = 25


class Contradiction(Exception):
    """Raised when a mutation proves the grid has no solution."""


def _uses_space_blanks(text: str) -> bool:
    return " " in text and "." not in text and "0" not in text


def validate_order(order: int) -> int:
    """
    Check that order is a supported perfect square.

    Args:
        order: Grid side length

    Returns:
        Block width (square root of order)

    Raises:
        ValueError: If order is not a positive perfect square <= MAX_ORDER
    """
    if not isinstance(order, int) or isinstance(order, bool) or order <= 0:
        raise ValueError(f"Order must be a positive integer, got {order!r}")
    width = math.isqrt(order)
    if width * width != order:
        raise ValueError(f"Order must be a perfect square, got {order}")
    if order > MAX_ORDER:
        raise ValueError(f"Order {order} exceeds the largest supported order {MAX_ORDER}")
    return width


@dataclass(frozen=True, eq=False)
class Geometry:
    """
    Index tables for one grid order. Shared by a grid and all its clones.

    Attributes:
        order: Grid side length n
        width: Block width sqrt(n)
        rows: (n, n) array, cell indices of each row
        cols: (n, n) array, cell indices of each column
        blocks: (n, n) array, cell indices of each block
        units: (3n, n) array, rows then columns then blocks
        peers: (n*n, p) array, indices sharing a unit with each cell
        block_of: (n*n,) array, block number of each cell
    """
    order: int
    width: int
    rows: np.ndarray
    cols: np.ndarray
    blocks: np.ndarray
    units: np.ndarray
    peers: np.ndarray
    block_of: np.ndarray

    @classmethod
    def build(cls, order: int) -> 'Geometry':
        width = validate_order(order)
        size = order * order
        indices = np.arange(size).reshape(order, order)

        rows = indices.copy()
        cols = indices.T.copy()
        blocks = np.array([
            indices[br:br + width, bc:bc + width].ravel()
            for br in range(0, order, width)
            for bc in range(0, order, width)
        ]).reshape(order, order)

        block_of = np.empty(size, dtype=np.intp)
        for b, cells in enumerate(blocks):
            block_of[cells] = b

        peers = []
        for index in range(size):
            r, c = divmod(index, order)
            seen = set(rows[r]) | set(cols[c]) | set(blocks[block_of[index]])
            seen.discard(index)
            peers.append(sorted(seen))

        return cls(
            order=order,
            width=width,
            rows=rows,
            cols=cols,
            blocks=blocks,
            units=np.concatenate([rows, cols, blocks]),
            peers=np.array(peers, dtype=np.intp),
            block_of=block_of,
        )

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.order * self.order


class Grid:
    """
    Cell state of one puzzle.

    Attributes:
        geometry: Shared index tables
        values: (n*n,) int array, fixed element or -1 if undetermined
        candidates: (n*n, n) bool array of remaining candidates
    """

    def __init__(self, order: int, geometry: Optional[Geometry] = None):
        """
        Create an empty grid where every cell has all candidates.

        Args:
            order: Grid side length (perfect square)
            geometry: Prebuilt index tables to share, built if omitted
        """
        if geometry is None:
            geometry = Geometry.build(order)
        elif geometry.order != order:
            raise ValueError("Geometry does not match grid order")
        self.geometry = geometry
        self.values = np.full(geometry.size, -1, dtype=np.int16)
        self.candidates = np.ones((geometry.size, order), dtype=bool)

    @classmethod
    def from_string(cls, text: str, order: int,
                    geometry: Optional[Geometry] = None) -> 'Grid':
        """
        Parse a canonical puzzle string.

        Args:
            text: One character per cell, '.', '0' or ' ' for blanks. A string
                that writes its blanks as spaces may have them trimmed off the
                end; any other string must cover every cell
            order: Grid side length
            geometry: Prebuilt index tables to share

        Returns:
            Grid with the givens fixed and candidates propagated

        Raises:
            ValueError: If the string has the wrong length or bad characters
            Contradiction: If the givens clash
        """
        grid = cls(order, geometry)
        text = text.rstrip("\r\n")
        # only space-blank strings are ever stored with their tail trimmed
        if len(text) < grid.size and _uses_space_blanks(text):
            text = text.ljust(grid.size, " ")
        if len(text) != grid.size:
            raise ValueError(f"Expected {grid.size} cells for order {order}, got {len(text)}")

        symbols = ALPHABET[:order]
        for index, char in enumerate(text.upper()):
            if char in BLANK_CHARS:
                continue
            element = symbols.find(char)
            if element < 0:
                raise ValueError(f"Invalid character {char!r} at cell {index} for order {order}")
            grid.set_cell(index, element)
        return grid

    def to_string(self) -> str:
        """Serialize to the canonical single-line form."""
        return "".join(
            ALPHABET[v] if v >= 0 else EMPTY_CHAR for v in self.values.tolist()
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Grid(order={self.order}, '{self.to_string()}')"

    def clone(self) -> 'Grid':
        """Independent copy of all cell state."""
        other = Grid.__new__(Grid)
        other.geometry = self.geometry
        other.values = self.values.copy()
        other.candidates = self.candidates.copy()
        return other

    @property
    def order(self) -> int:
        return self.geometry.order

    @property
    def size(self) -> int:
        return self.geometry.size

    def get_cell(self, index: int) -> Optional[int]:
        """Fixed element at index, or None if undetermined."""
        value = int(self.values[index])
        return value if value >= 0 else None

    def candidates_of(self, index: int) -> FrozenSet[int]:
        """Remaining candidates of a cell (the element itself if fixed)."""
        return frozenset(np.flatnonzero(self.candidates[index]).tolist())

    def undetermined_mask(self) -> np.ndarray:
        return self.values < 0

    def fixed_count(self) -> int:
        return int(np.count_nonzero(self.values >= 0))

    def fixed_indices(self) -> List[int]:
        return np.flatnonzero(self.values >= 0).tolist()

    def is_solved(self) -> bool:
        """True when every cell is fixed."""
        return bool(np.all(self.values >= 0))

    def is_valid(self) -> bool:
        """
        Global consistency check.

        Returns:
            True if no unit holds a fixed element twice and no undetermined
            cell has run out of candidates
        """
        for unit in self.geometry.units:
            placed = self.values[unit]
            placed = placed[placed >= 0]
            if len(placed) != len(np.unique(placed)):
                return False
        open_cells = self.undetermined_mask()
        return not np.any(open_cells & ~self.candidates.any(axis=1))

    def set_cell(self, index: int, element: int) -> bool:
        """
        Fix a cell and remove the element from its peers' candidates.

        Args:
            index: Cell index
            element: Element in [0, order)

        Returns:
            True if the grid changed, False if already fixed to element

        Raises:
            Contradiction: If element is not a candidate of the cell or a
                peer loses its last candidate
        """
        current = self.values[index]
        if current >= 0:
            if current == element:
                return False
            raise Contradiction(f"Cell {index} is already fixed to {current}")
        if not self.candidates[index, element]:
            raise Contradiction(f"Element {element} is not a candidate of cell {index}")

        self.values[index] = element
        self.candidates[index] = False
        self.candidates[index, element] = True

        peers = self.geometry.peers[index]
        self.candidates[peers, element] = False
        open_peers = peers[self.values[peers] < 0]
        if not self.candidates[open_peers].any(axis=1).all():
            raise Contradiction(f"Fixing cell {index} to {element} empties a peer")
        return True

    def eliminate(self, index: int, elements: Iterable[int]) -> bool:
        """
        Remove candidates from an undetermined cell.

        Args:
            index: Cell index
            elements: Elements to rule out

        Returns:
            True if at least one candidate was removed

        Raises:
            Contradiction: If the cell would be left without candidates
        """
        if self.values[index] >= 0:
            return False
        elements = list(elements)
        if not elements:
            return False
        row = self.candidates[index]
        if not row[elements].any():
            return False
        row[elements] = False
        if not row.any():
            raise Contradiction(f"Cell {index} has no candidates left")
        return True

    def clear_cell(self, index: int) -> bool:
        """
        Turn a fixed cell back into an undetermined one.

        The candidates of the cell and of its undetermined peers are
        recomputed from the fixed cells that remain.

        Returns:
            True if the cell was fixed
        """
        if self.values[index] < 0:
            return False
        self.values[index] = -1
        peers = self.geometry.peers[index]
        affected = [index] + peers[self.values[peers] < 0].tolist()
        for cell in affected:
            self._recompute_candidates(cell)
        return True

    def _recompute_candidates(self, index: int) -> None:
        peers = self.geometry.peers[index]
        taken = self.values[peers]
        row = np.ones(self.order, dtype=bool)
        row[taken[taken >= 0]] = False
        self.candidates[index] = row

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return False
        return (self.order == other.order
                and np.array_equal(self.values, other.values)
                and np.array_equal(self.candidates, other.candidates))
