"""
Stats Module - Aggregate coverage records into summary tables.

Three views per (order, k):
  - amount_solved: how often each combination / strategy solved a puzzle
  - rounds: fewest rounds seen and average rounds of solved runs
  - unsolved: unsolved counts with mean completeness and baseline rounds

Combination keys join strategy names with SEPARATOR.
"""

import csv
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterator, List, Sequence, Union

import numpy as np

from .cache import CoverageResult
from .combinations import combination_count
from .outcome import CoverageRecord, Solved, Unsolved

logger = logging.getLogger(__name__)

SEPARATOR = "|"
STAT_NAMES = ("amount_solved", "rounds", "unsolved")


def iter_records(result: CoverageResult) -> Iterator[CoverageRecord]:
    for records in result.values():
        yield from records


def combination_key(strategies: Sequence[str]) -> str:
    return SEPARATOR.join(strategies)


def sort_key(row: Dict[str, Any]):
    """Larger combinations first, then by name ignoring case."""
    strategies = row["strategies"]
    return (-len(strategies), combination_key(strategies).casefold())


def _means(values: Dict[str, List[float]]) -> Dict[str, float]:
    return {key: float(np.mean(items)) for key, items in values.items()}


def amount_solved(result: CoverageResult) -> Dict[str, Dict[str, int]]:
    """
    Count solved runs.

    Returns:
        {"combination": {key: count}, "per_strategy": {name: count}}
    """
    combination: Dict[str, int] = defaultdict(int)
    per_strategy: Dict[str, int] = defaultdict(int)

    for record in iter_records(result):
        if not record.solved:
            continue
        combination[combination_key(record.strategies)] += 1
        for name in record.strategies:
            per_strategy[name] += 1

    return {"combination": dict(combination), "per_strategy": dict(per_strategy)}


def rounds(result: CoverageResult) -> Dict[str, Any]:
    """
    Round statistics of solved runs.

    Returns:
        {"least": {"rounds", "combinations"}, "avg": {key: mean},
         "avg_by_strategy": {name: mean}}; least rounds is None when
        nothing was solved
    """
    least_rounds = None
    least: List[List[str]] = []
    by_combination: Dict[str, List[float]] = defaultdict(list)
    by_strategy: Dict[str, List[float]] = defaultdict(list)

    for record in iter_records(result):
        if not isinstance(record.outcome, Solved):
            continue
        count = record.outcome.rounds
        strategies = list(record.strategies)

        if least_rounds is None or count < least_rounds:
            least_rounds = count
            least = [strategies]
        elif count == least_rounds and strategies not in least:
            least.append(strategies)

        by_combination[combination_key(strategies)].append(count)
        for name in strategies:
            by_strategy[name].append(count)

    return {
        "least": {"rounds": least_rounds, "combinations": least},
        "avg": _means(by_combination),
        "avg_by_strategy": _means(by_strategy),
    }


def unsolved(result: CoverageResult, k: int, roster_size: int) -> List[Dict[str, Any]]:
    """
    Per combination (and per strategy when k > 1) unsolved summary.

    Per-strategy counts are divided by the number of k-subsets each
    strategy belongs to, so they compare with single-strategy runs.

    Returns:
        Rows with strategies, amount_unsolved, completeness means and mean
        baseline rounds, sorted by sort_key
    """
    amount: Dict[str, int] = defaultdict(int)
    with_candidates: Dict[str, List[float]] = defaultdict(list)
    no_candidates: Dict[str, List[float]] = defaultdict(list)
    baseline: Dict[str, List[float]] = defaultdict(list)

    def add(key: str, record: CoverageRecord, outcome: Unsolved) -> None:
        amount[key] += 1
        with_candidates[key].append(outcome.with_candidates.absolute)
        no_candidates[key].append(outcome.no_candidates.absolute)
        baseline[key].append(record.baseline_rounds)

    for record in iter_records(result):
        if not isinstance(record.outcome, Unsolved):
            continue
        add(combination_key(record.strategies), record, record.outcome)
        if len(record.strategies) > 1:
            for name in record.strategies:
                add(name, record, record.outcome)

    memberships = k * combination_count(roster_size, k) / roster_size if roster_size else 0

    rows = []
    for key, count in amount.items():
        strategies = key.split(SEPARATOR)
        if k > 1 and len(strategies) == 1 and memberships:
            count = count / memberships
        rows.append({
            "strategies": strategies,
            "amount_unsolved": count,
            "completeness_with_candidates": float(np.mean(with_candidates[key])),
            "completeness_no_candidates": float(np.mean(no_candidates[key])),
            "baseline_rounds": float(np.mean(baseline[key])),
        })

    rows.sort(key=sort_key)
    return rows


def collect_stats(results_by_k: Dict[int, CoverageResult], roster_size: int) -> Dict[str, Dict[int, Any]]:
    """
    Compute every view for each k of one order.

    Args:
        results_by_k: Coverage results keyed by subset size
        roster_size: Number of strategies in the roster

    Returns:
        {stat name: {k: value}}
    """
    return {
        "amount_solved": {k: amount_solved(r) for k, r in results_by_k.items()},
        "rounds": {k: rounds(r) for k, r in results_by_k.items()},
        "unsolved": {k: unsolved(r, k, roster_size) for k, r in results_by_k.items()},
    }


def write_stats(stats_by_order: Dict[int, Dict[str, Dict[int, Any]]], out_dir: Union[str, Path]) -> None:
    """
    Write <name>.json for every view and unsolved.csv.

    JSON files are keyed {order: {k: value}}.

    Args:
        stats_by_order: collect_stats output keyed by order
        out_dir: Output directory, created if missing
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    for name in STAT_NAMES:
        data = {order: stats[name] for order, stats in stats_by_order.items()}
        with open(out_dir / f"{name}.json", 'w', encoding='utf-8') as f:
            json.dump(data, f, indent='\t')

    fields = ["order", "k", "strategies", "amount_unsolved",
              "completeness_with_candidates", "completeness_no_candidates", "baseline_rounds"]
    with open(out_dir / "unsolved.csv", 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fields)
        writer.writeheader()
        for order, stats in stats_by_order.items():
            for k, rows in stats["unsolved"].items():
                for row in rows:
                    writer.writerow({
                        **row,
                        "order": order,
                        "k": k,
                        "strategies": combination_key(row["strategies"]),
                    })

    logger.info(f"Stats written to {out_dir}")
