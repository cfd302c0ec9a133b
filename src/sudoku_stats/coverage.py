"""
Coverage Module - Run every strategy subset of size k over a corpus.

For each puzzle and each k-subset of the roster, the subset is driven to
a fixed point on a clone of the puzzle and the result classified as
Solved or Unsolved. A cached result for (order, k) that matches the
corpus is returned as is.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .cache import CoverageResult, ResultCache
from .combinations import every_combination
from .completeness import completeness
from .convergence import Convergence, converge
from .outcome import CoverageRecord, Outcome, Solved, Unsolved
from .solver import Geometry, Grid, Strategy, validate_order

logger = logging.getLogger(__name__)


def classify(convergence: Convergence, original: Grid) -> Outcome:
    """
    Turn a convergence into an outcome.

    Args:
        convergence: Result of running a strategy set
        original: Puzzle the run started from

    Returns:
        Solved with the round count, or Unsolved with completeness scores
    """
    if convergence.solved:
        return Solved(rounds=convergence.rounds)
    with_candidates, no_candidates = completeness(convergence.grid, original)
    return Unsolved(
        with_candidates=with_candidates,
        no_candidates=no_candidates,
        residual=convergence.grid.to_string(),
    )


class CoverageEngine:
    """
    Evaluate strategy combinations over a puzzle corpus.

    Attributes:
        roster: Strategies in canonical order
        result_cache: Optional full-result cache keyed by (order, k)
        progress_callback: Called with (done, total) after each puzzle
    """

    def __init__(
        self,
        roster: Sequence[Strategy],
        result_cache: Optional[ResultCache] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        """
        Initialize the engine.

        Args:
            roster: Strategies in canonical order
            result_cache: Cache to consult before and fill after a run
            progress_callback: Optional progress hook

        Raises:
            ValueError: If the roster is empty or has duplicate names
        """
        names = [strategy.name for strategy in roster]
        if not names:
            raise ValueError("Roster must contain at least one strategy")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate strategy names in roster: {names}")

        self.roster: List[Strategy] = list(roster)
        self.result_cache = result_cache
        self.progress_callback = progress_callback

    @property
    def strategy_names(self) -> List[str]:
        return [strategy.name for strategy in self.roster]

    def run(self, order: int, k: int, puzzles: Iterable[str]) -> CoverageResult:
        """
        Evaluate every k-subset of the roster on every puzzle.

        Args:
            order: Grid order of the corpus
            k: Subset size
            puzzles: Canonical puzzle strings

        Returns:
            Records grouped by puzzle, in corpus order; within a puzzle in
            combination order

        Raises:
            ValueError: If order or k is invalid
        """
        validate_order(order)
        if k < 1:
            raise ValueError(f"Combination size must be at least 1, got {k}")
        puzzles = list(puzzles)

        if self.result_cache is not None:
            cached = self.result_cache.get(order, k)
            if cached is not None:
                if self.matches(cached, puzzles, k):
                    logger.info(f"{order}-{k} (cached)")
                    return cached
                logger.info(f"Cached result for {order}-{k} does not match the corpus, recomputing")

        geometry = Geometry.build(order)
        result: Dict[str, List[CoverageRecord]] = {}
        for done, puzzle in enumerate(puzzles, start=1):
            result[puzzle] = self.evaluate(Grid.from_string(puzzle, order, geometry), k, puzzle)
            if self.progress_callback:
                self.progress_callback(done, len(puzzles))

        solved = sum(record.solved for records in result.values() for record in records)
        total = sum(len(records) for records in result.values())
        logger.info(f"{order}-{k}: {solved}/{total} combinations solved")

        if self.result_cache is not None:
            self.result_cache.put(order, k, result)
        return result

    def evaluate(self, grid: Grid, k: int, puzzle: Optional[str] = None) -> List[CoverageRecord]:
        """
        Evaluate every k-subset on one puzzle.

        Args:
            grid: Parsed puzzle (not mutated)
            k: Subset size
            puzzle: Key to record, the grid's canonical string if omitted

        Returns:
            One record per subset, in combination order
        """
        if puzzle is None:
            puzzle = grid.to_string()
        baseline = converge(grid, self.roster).rounds

        records = []
        for strategies in every_combination(self.roster, k):
            convergence = converge(grid, strategies)
            records.append(CoverageRecord(
                puzzle=puzzle,
                strategies=tuple(strategy.name for strategy in strategies),
                outcome=classify(convergence, grid),
                baseline_rounds=baseline,
            ))
        return records

    def matches(self, cached: CoverageResult, puzzles: Sequence[str], k: int) -> bool:
        """
        Check a cached result has the shape of a run over puzzles.

        Every puzzle must be present, nothing else, each with exactly the
        k-subsets of the current roster in combination order.
        """
        if len(cached) != len(puzzles) or set(cached) != set(puzzles):
            return False

        expected = list(every_combination(self.strategy_names, k))
        for puzzle, records in cached.items():
            if [record.strategies for record in records] != expected:
                return False
            if any(record.puzzle != puzzle for record in records):
                return False
        return True
