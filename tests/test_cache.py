"""
Tests for the on-disk caches, corpus building and settings.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from sudoku_stats.cache import PuzzleCache, ResultCache
from sudoku_stats.completeness import Completeness
from sudoku_stats.corpus import build_corpus
from sudoku_stats.outcome import CoverageRecord, Solved, Unsolved
from sudoku_stats.settings import DEFAULT_SETTINGS, load_settings, save_settings
from sudoku_stats.solver import Grid
from puzzles import PUZZLE


ORDER_4_PUZZLES = [
    "1.......2.......",
    ".2.......3......",
    "..3.......4.....",
]


class ScriptedGenerator:
    """Hands out a fixed sequence of puzzles."""

    def __init__(self, puzzles):
        self.puzzles = list(puzzles)
        self.calls = 0

    def generate(self, order):
        puzzle = self.puzzles[self.calls]
        self.calls += 1
        return Grid.from_string(puzzle, order)


class NoGenerator:
    def generate(self, order):
        raise AssertionError("corpus should have come from the cache")


def sample_records():
    solved = CoverageRecord(
        puzzle=PUZZLE,
        strategies=("naked_single", "hidden_single"),
        outcome=Solved(rounds=4),
        baseline_rounds=3,
    )
    unsolved = CoverageRecord(
        puzzle=PUZZLE,
        strategies=("pointing", "claiming"),
        outcome=Unsolved(
            with_candidates=Completeness(0.5, 0.25),
            no_candidates=Completeness(0.4, 0.1),
            residual=PUZZLE,
        ),
        baseline_rounds=3,
    )
    return {PUZZLE: [solved, unsolved]}


# ----------------------------------------------------------------------
# PuzzleCache
# ----------------------------------------------------------------------

def test_puzzle_cache_missing(tmp_path):
    assert PuzzleCache(tmp_path).get(9) is None


def test_puzzle_cache_append_and_get(tmp_path):
    cache = PuzzleCache(tmp_path / "data")
    for puzzle in ORDER_4_PUZZLES:
        cache.append(4, puzzle)

    assert cache.path(4) == tmp_path / "data" / "4.txt"
    assert cache.get(4) == ORDER_4_PUZZLES


def test_puzzle_cache_skips_bad_lines(tmp_path):
    cache = PuzzleCache(tmp_path)
    cache.path(4).write_text(
        ORDER_4_PUZZLES[0] + "\n" + "1..2\n" + "\n" + ORDER_4_PUZZLES[1] + "\n",
        encoding="utf-8",
    )
    assert cache.get(4) == ORDER_4_PUZZLES[:2]


def test_puzzle_cache_skips_unparseable_puzzles(tmp_path):
    """Right-length lines that are not puzzles never reach the corpus."""
    cache = PuzzleCache(tmp_path)
    cache.path(4).write_text(
        "11..............\n"      # clashing givens
        + "Z...............\n"    # not an order-4 symbol
        + ORDER_4_PUZZLES[0] + "\n",
        encoding="utf-8",
    )
    assert cache.get(4) == ORDER_4_PUZZLES[:1]
    assert build_corpus(1, 4, NoGenerator(), cache) == ORDER_4_PUZZLES[:1]


def test_puzzle_cache_canonicalizes(tmp_path):
    cache = PuzzleCache(tmp_path)
    cache.path(4).write_text(ORDER_4_PUZZLES[0].replace(".", "0") + "\n", encoding="utf-8")
    assert cache.get(4) == ORDER_4_PUZZLES[:1]


# ----------------------------------------------------------------------
# ResultCache
# ----------------------------------------------------------------------

def test_result_cache_round_trip(tmp_path):
    cache = ResultCache(tmp_path)
    result = sample_records()

    assert cache.get(9, 2) is None
    cache.put(9, 2, result)

    assert cache.path(9, 2).name == "combinations-9-2.json"
    assert cache.get(9, 2) == result

    data = json.loads(cache.path(9, 2).read_text(encoding="utf-8"))
    assert data["order"] == 9
    assert data["k"] == 2
    first, second = data["results"][PUZZLE]
    assert first["solved"] is True
    assert first["rounds"] == 4
    assert second["solved"] is False
    assert second["completeness_with_candidates"] == {"absolute": 0.5, "relative": 0.25}


@pytest.mark.parametrize("content", [
    "{not json",
    "[]",
    '{"results": {"x": [{"solved": true}]}}',
    '{"results": 5}',
])
def test_result_cache_malformed_is_a_miss(tmp_path, content):
    cache = ResultCache(tmp_path)
    cache.path(9, 1).write_text(content, encoding="utf-8")
    assert cache.get(9, 1) is None


# ----------------------------------------------------------------------
# build_corpus
# ----------------------------------------------------------------------

def test_build_corpus_deduplicates(tmp_path):
    cache = PuzzleCache(tmp_path)
    generator = ScriptedGenerator([
        ORDER_4_PUZZLES[0],
        ORDER_4_PUZZLES[0],
        ORDER_4_PUZZLES[1],
        ORDER_4_PUZZLES[0],
        ORDER_4_PUZZLES[2],
    ])
    progress = []

    corpus = build_corpus(3, 4, generator, cache, lambda done, total: progress.append((done, total)))

    assert corpus == ORDER_4_PUZZLES
    assert generator.calls == 5
    assert cache.get(4) == ORDER_4_PUZZLES
    assert progress == [(1, 3), (2, 3), (3, 3)]


def test_build_corpus_uses_cache(tmp_path):
    cache = PuzzleCache(tmp_path)
    for puzzle in ORDER_4_PUZZLES + [ORDER_4_PUZZLES[0]]:
        cache.append(4, puzzle)

    assert build_corpus(2, 4, NoGenerator(), cache) == ORDER_4_PUZZLES[:2]
    assert build_corpus(3, 4, NoGenerator(), cache) == ORDER_4_PUZZLES


def test_build_corpus_tops_up(tmp_path):
    cache = PuzzleCache(tmp_path)
    cache.append(4, ORDER_4_PUZZLES[0])
    generator = ScriptedGenerator(ORDER_4_PUZZLES)

    corpus = build_corpus(3, 4, generator, cache)
    assert corpus == ORDER_4_PUZZLES
    assert cache.get(4) == ORDER_4_PUZZLES


def test_build_corpus_without_cache():
    generator = ScriptedGenerator(ORDER_4_PUZZLES)
    assert build_corpus(2, 4, generator) == ORDER_4_PUZZLES[:2]
    assert build_corpus(0, 4, generator) == []


def test_build_corpus_rejects_bad_input():
    with pytest.raises(ValueError):
        build_corpus(1, 5, NoGenerator())
    with pytest.raises(ValueError):
        build_corpus(-1, 4, NoGenerator())


# ----------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------

def test_settings_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.json") == DEFAULT_SETTINGS

    broken = tmp_path / "broken.json"
    broken.write_text("{oops", encoding="utf-8")
    assert load_settings(broken) == DEFAULT_SETTINGS


def test_settings_round_trip(tmp_path):
    path = tmp_path / "config.json"
    save_settings({"corpus_size": 5, "orders": [4, 9]}, path)

    settings = load_settings(path)
    assert settings["corpus_size"] == 5
    assert settings["orders"] == [4, 9]
    assert settings["data_dir"] == DEFAULT_SETTINGS["data_dir"]
