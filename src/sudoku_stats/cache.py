"""
Cache Module - On-disk puzzle corpus and combination results.

Both caches are plain files under a data directory:
  - <order>.txt holds one canonical puzzle per line (append-only)
  - combinations-<order>-<k>.json holds a full coverage result

Unreadable or malformed contents are reported as a miss, never raised.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .outcome import CoverageRecord
from .solver import Contradiction, Geometry, Grid

logger = logging.getLogger(__name__)

CoverageResult = Dict[str, List[CoverageRecord]]


class PuzzleCache:
    """
    Previously generated puzzles, keyed by grid order.

    Attributes:
        data_dir: Directory holding the <order>.txt files
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path(self, order: int) -> Path:
        return self.data_dir / f"{order}.txt"

    def get(self, order: int) -> Optional[List[str]]:
        """
        Load cached puzzles of one order.

        Lines that do not parse into a consistent grid of this order are
        skipped with a warning.

        Args:
            order: Grid order

        Returns:
            Canonical puzzle strings in file order, or None if there is no
            cache file
        """
        path = self.path(order)
        if not path.exists():
            logger.debug(f"No puzzle cache for order {order}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except (IOError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read puzzle cache {path}: {e}")
            return None

        geometry = Geometry.build(order)
        puzzles = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                grid = Grid.from_string(line, order, geometry)
            except (ValueError, Contradiction) as e:
                logger.warning(f"Skipping malformed line {number} in {path}: {e}")
                continue
            if not grid.is_valid():
                logger.warning(f"Skipping inconsistent puzzle on line {number} in {path}")
                continue
            puzzles.append(grid.to_string())
        return puzzles

    def append(self, order: int, puzzle: str) -> None:
        """Append one puzzle to the cache file of its order."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.path(order), 'a', encoding='utf-8') as f:
            f.write(puzzle + "\n")


class ResultCache:
    """
    Full coverage results keyed by (order, k).

    Attributes:
        data_dir: Directory holding the combinations-<order>-<k>.json files
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path(self, order: int, k: int) -> Path:
        return self.data_dir / f"combinations-{order}-{k}.json"

    def get(self, order: int, k: int) -> Optional[CoverageResult]:
        """
        Load a cached result.

        Returns:
            Records grouped by puzzle, or None on a missing or malformed file
        """
        path = self.path(order, k)
        if not path.exists():
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return {
                puzzle: [CoverageRecord.from_dict(item) for item in items]
                for puzzle, items in data["results"].items()
            }
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load result cache {path}: {e}")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed result cache {path}: {e!r}")
        return None

    def put(self, order: int, k: int, result: CoverageResult) -> None:
        """
        Store a full result, replacing any previous one.

        Raises:
            OSError: If the file cannot be written
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "order": order,
            "k": k,
            "results": {
                puzzle: [record.to_dict() for record in records]
                for puzzle, records in result.items()
            },
        }
        with open(self.path(order, k), 'w', encoding='utf-8') as f:
            json.dump(data, f)
        logger.debug(f"Stored {len(result)} puzzle results in {self.path(order, k)}")
