"""
Corpus Module - Deduplicated puzzle corpus backed by the puzzle cache.
"""

import logging
from typing import Callable, List, Optional

from .cache import PuzzleCache
from .generator import PuzzleGenerator
from .solver import validate_order

logger = logging.getLogger(__name__)


def build_corpus(
    amount: int,
    order: int,
    generator: PuzzleGenerator,
    cache: Optional[PuzzleCache] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> List[str]:
    """
    Return `amount` distinct puzzles, generating only what the cache lacks.

    Args:
        amount: Number of puzzles wanted
        order: Grid order
        generator: Puzzle generator for missing puzzles
        cache: Puzzle cache to read from and append to
        progress_callback: Called with (available, amount) after each puzzle

    Returns:
        Canonical puzzle strings, cached ones first

    Raises:
        ValueError: If order is invalid or amount is negative
    """
    validate_order(order)
    if amount < 0:
        raise ValueError(f"Corpus size must not be negative, got {amount}")

    previous = cache.get(order) if cache is not None else None
    # dict keeps first occurrence order
    puzzles = dict.fromkeys(previous or [])
    if previous and len(puzzles) != len(previous):
        logger.info(f"Dropped {len(previous) - len(puzzles)} duplicate cached puzzles")
    logger.info(f"Order {order}: {len(puzzles)} cached puzzles, {amount} wanted")

    while len(puzzles) < amount:
        puzzle = generator.generate(order).to_string()
        if puzzle in puzzles:
            logger.debug(f"Discarding duplicate puzzle {puzzle}")
            continue
        puzzles[puzzle] = None
        if cache is not None:
            cache.append(order, puzzle)
        if progress_callback:
            progress_callback(len(puzzles), amount)

    return list(puzzles)[:amount]
