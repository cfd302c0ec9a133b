"""
Known puzzles shared by the tests.
"""

PUZZLE_ROWS = [
    "53..7....",
    "6..195...",
    ".98....6.",
    "8...6...3",
    "4..8.3..1",
    "7...2...6",
    ".6....28.",
    "...419..5",
    "....8..79",
]

SOLUTION_ROWS = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]

PUZZLE = "".join(PUZZLE_ROWS)
SOLUTION = "".join(SOLUTION_ROWS)

PUZZLE_CLUES = 30
