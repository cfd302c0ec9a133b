"""
Solver Package - Grid model and pluggable propagation strategies.

This package is the solver collaborator of the study: it owns the grid
representation and the roster of named strategies that the combination
engine applies. Strategies are only ever called through
Strategy.apply(grid) -> bool.

Public API:
    - Grid: Mutable candidate grid with clone() and string (de)serialization
    - Geometry: Shared row/column/block index tables
    - Contradiction: Raised when a grid is proven unsolvable
    - Strategy: Abstract base for strategies
    - create_strategy(): Factory function
    - create_roster(): Ordered list of strategy instances
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata

Usage:
    from sudoku_stats.solver import Grid, create_roster

    grid = Grid.from_string(puzzle, 9)
    for strategy in create_roster(["naked_single", "hidden_single"]):
        strategy.apply(grid)
"""

# Core data structures
from .grid import (
    ALPHABET,
    MAX_ORDER,
    Contradiction,
    Geometry,
    Grid,
    validate_order,
)

# Strategy framework
from .base import Strategy
from .factory import (
    create_roster,
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "ALPHABET",
    "MAX_ORDER",
    "Contradiction",
    "Geometry",
    "Grid",
    "validate_order",
    # Strategy framework
    "Strategy",
    "create_roster",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "register_strategy",
]
