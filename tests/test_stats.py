"""
Tests for the statistics views.
"""

import csv
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sudoku_stats.completeness import Completeness
from sudoku_stats.outcome import CoverageRecord, Solved, Unsolved
from sudoku_stats.stats import (
    amount_solved,
    collect_stats,
    rounds,
    unsolved,
    write_stats,
)


def solved(puzzle, strategies, count, baseline):
    return CoverageRecord(puzzle, tuple(strategies), Solved(count), baseline)


def failed(puzzle, strategies, with_candidates, no_candidates, baseline):
    outcome = Unsolved(
        with_candidates=Completeness(with_candidates, 0.0),
        no_candidates=Completeness(no_candidates, 0.0),
        residual=puzzle,
    )
    return CoverageRecord(puzzle, tuple(strategies), outcome, baseline)


@pytest.fixture
def single_result():
    return {
        "p1": [
            solved("p1", "a", 2, 2),
            solved("p1", "b", 4, 2),
            failed("p1", "c", 0.5, 0.4, 2),
        ],
        "p2": [
            solved("p2", "a", 3, 4),
            failed("p2", "b", 0.6, 0.2, 4),
            failed("p2", "c", 0.7, 0.6, 4),
        ],
    }


@pytest.fixture
def pair_result():
    return {
        "p1": [
            solved("p1", "ab", 2, 2),
            failed("p1", "ac", 0.5, 0.5, 2),
            failed("p1", "bc", 0.3, 0.1, 2),
        ],
    }


def test_amount_solved(single_result):
    stats = amount_solved(single_result)
    assert stats["combination"] == {"a": 2, "b": 1}
    assert stats["per_strategy"] == {"a": 2, "b": 1}


def test_rounds(single_result):
    stats = rounds(single_result)
    assert stats["least"] == {"rounds": 2, "combinations": [["a"]]}
    assert stats["avg"] == {"a": 2.5, "b": 4.0}
    assert stats["avg_by_strategy"] == {"a": 2.5, "b": 4.0}


def test_rounds_nothing_solved():
    stats = rounds({"p1": [failed("p1", "a", 0.1, 0.1, 1)]})
    assert stats["least"] == {"rounds": None, "combinations": []}
    assert stats["avg"] == {}


def test_unsolved_singles(single_result):
    rows = unsolved(single_result, 1, 3)

    assert [row["strategies"] for row in rows] == [["b"], ["c"]]
    b, c = rows
    assert b["amount_unsolved"] == 1
    assert c["amount_unsolved"] == 2
    assert c["completeness_with_candidates"] == pytest.approx(0.6)
    assert c["completeness_no_candidates"] == pytest.approx(0.5)
    assert c["baseline_rounds"] == pytest.approx(3.0)


def test_unsolved_pairs_are_normalized(pair_result):
    """Each strategy is in two of the three pairs, so counts are halved."""
    rows = unsolved(pair_result, 2, 3)

    assert [row["strategies"] for row in rows] == [
        ["a", "c"], ["b", "c"], ["a"], ["b"], ["c"],
    ]
    amounts = {"|".join(row["strategies"]): row["amount_unsolved"] for row in rows}
    assert amounts == {"a|c": 1, "b|c": 1, "a": 0.5, "b": 0.5, "c": 1.0}

    c = rows[-1]
    assert c["completeness_with_candidates"] == pytest.approx(0.4)


def test_write_stats(tmp_path, single_result, pair_result):
    stats = {9: collect_stats({1: single_result, 2: pair_result}, 3)}
    write_stats(stats, tmp_path / "stats")

    out = tmp_path / "stats"
    for name in ("amount_solved", "rounds", "unsolved"):
        assert (out / f"{name}.json").exists()

    data = json.loads((out / "amount_solved.json").read_text(encoding="utf-8"))
    assert data["9"]["1"]["combination"] == {"a": 2, "b": 1}
    assert data["9"]["2"]["combination"] == {"a|b": 1}

    with open(out / "unsolved.csv", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2 + 5
    assert rows[0]["order"] == "9"
    assert rows[0]["k"] == "1"
    assert rows[0]["strategies"] == "b"
    assert rows[2]["strategies"] == "a|c"
