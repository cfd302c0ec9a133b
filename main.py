"""
Sudoku Stats - Entry Point

Builds the puzzle corpus for each order, evaluates every strategy subset
up to the configured size and writes the aggregated statistics.

Example:
    python main.py
    python main.py --amount 50 --order 4 --order 9 --max-k 3 --seed 1
"""

import sys
import logging
import argparse
import random
from pathlib import Path
from typing import Any, Dict, Optional

from tqdm import tqdm

from sudoku_stats import (
    CoverageEngine,
    PuzzleCache,
    PuzzleGenerator,
    ResultCache,
    build_corpus,
)
from sudoku_stats.settings import load_settings, save_settings
from sudoku_stats.solver import create_roster, validate_order
from sudoku_stats.stats import collect_stats, write_stats


logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("study.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class ProgressBar:
    """Adapts a (done, total) progress callback to a tqdm bar."""

    def __init__(self, desc: str):
        self.desc = desc
        self._bar: Optional[tqdm] = None

    def __call__(self, done: int, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(total=total, desc=self.desc, leave=False)
        self._bar.n = done
        self._bar.refresh()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


class Study:
    """
    Runs the whole study from a settings dictionary.
    """

    def __init__(self, settings: Dict[str, Any]):
        """
        Initialize the study.

        Args:
            settings: Merged settings (see settings.DEFAULT_SETTINGS)

        Raises:
            ValueError: If an order, the combination size or a strategy name is invalid
        """
        self.settings = settings
        self.orders = [int(order) for order in settings["orders"]]
        for order in self.orders:
            validate_order(order)
        self.max_k = int(settings["max_combination_size"])
        if self.max_k < 1:
            raise ValueError(f"max_combination_size must be at least 1, got {self.max_k}")

        self.roster = create_roster(settings.get("strategies"))
        self.data_dir = Path(settings["data_dir"])
        self.puzzle_cache = PuzzleCache(self.data_dir)
        self.result_cache = ResultCache(self.data_dir)
        self.generator = PuzzleGenerator(self.roster, random.Random(settings.get("seed")))

    def run(self) -> int:
        """
        Run the study.

        Returns:
            Exit code
        """
        amount = int(self.settings["corpus_size"])
        names = ", ".join(strategy.name for strategy in self.roster)
        logger.info(f"Roster ({len(self.roster)}): {names}")

        corpora = {}
        for order in self.orders:
            progress = ProgressBar(f"Generating order {order}")
            try:
                corpora[order] = build_corpus(
                    amount, order, self.generator, self.puzzle_cache, progress
                )
            finally:
                progress.close()

        results = {order: {} for order in self.orders}
        for k in range(1, min(self.max_k, len(self.roster)) + 1):
            for order in self.orders:
                progress = ProgressBar(f"{order}-{k}")
                engine = CoverageEngine(self.roster, self.result_cache, progress)
                try:
                    results[order][k] = engine.run(order, k, corpora[order])
                finally:
                    progress.close()

        stats = {
            order: collect_stats(by_k, len(self.roster))
            for order, by_k in results.items()
        }
        write_stats(stats, self.data_dir / "stats")
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sudoku Stats - Evaluate propagation strategy combinations"
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Settings file (default: config.json)"
    )
    parser.add_argument(
        "--amount", "-n",
        type=int,
        help="Number of puzzles per order"
    )
    parser.add_argument(
        "--order", "-o",
        type=int,
        action="append",
        help="Grid order, repeat for several (default: 9)"
    )
    parser.add_argument(
        "--max-k", "-k",
        type=int,
        help="Largest strategy combination size"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Random seed for puzzle generation"
    )
    parser.add_argument(
        "--data-dir",
        help="Directory for caches and stats"
    )
    parser.add_argument(
        "--strategy",
        action="append",
        help="Restrict the roster, repeat for several"
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective settings back to the settings file"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args()


def main():
    """Load settings, apply CLI overrides and run the study."""
    args = parse_args()
    configure_logging(args.debug)

    settings = load_settings(args.config)
    overrides = {
        "corpus_size": args.amount,
        "orders": args.order,
        "max_combination_size": args.max_k,
        "seed": args.seed,
        "data_dir": args.data_dir,
        "strategies": args.strategy,
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})

    try:
        study = Study(settings)
    except ValueError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(2)

    if args.save_config:
        save_settings(settings, args.config)

    sys.exit(study.run())


if __name__ == "__main__":
    main()
