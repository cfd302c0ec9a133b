"""
Sudoku Stats - How far do small propagation strategies get, alone or combined?

Builds a corpus of minimal puzzles and runs every k-subset of a strategy
roster over it, recording which subsets solve each puzzle and how close
the others get.

Public API:
    - PuzzleGenerator: Random minimal puzzles
    - build_corpus(): Deduplicated, cached puzzle corpus
    - CoverageEngine: Evaluate every k-subset over a corpus
    - every_combination(): Canonical k-subsets of a roster
    - converge(): Run a strategy set to its fixed point
    - completeness(): Score an unsolved result
    - solve(): Exact solve classifier
    - PuzzleCache / ResultCache: On-disk caches
"""

from .cache import CoverageResult, PuzzleCache, ResultCache
from .combinations import combination_count, every_combination
from .completeness import Completeness, completeness
from .convergence import Convergence, converge, propagate
from .corpus import build_corpus
from .coverage import CoverageEngine, classify
from .exact import SolveStatus, solve
from .generator import PuzzleGenerator
from .outcome import CoverageRecord, Outcome, Solved, Unsolved

__version__ = "0.1.0"

__all__ = [
    "Completeness",
    "Convergence",
    "CoverageEngine",
    "CoverageRecord",
    "CoverageResult",
    "Outcome",
    "PuzzleCache",
    "PuzzleGenerator",
    "ResultCache",
    "Solved",
    "SolveStatus",
    "Unsolved",
    "build_corpus",
    "classify",
    "combination_count",
    "completeness",
    "converge",
    "every_combination",
    "propagate",
    "solve",
]
