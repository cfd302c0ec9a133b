"""
Outcome Module - Result of one (puzzle, strategy set) evaluation.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .completeness import Completeness


@dataclass(frozen=True)
class Solved:
    """
    Every cell reached a fixed value.

    Attributes:
        rounds: Rounds the strategy set needed
    """
    rounds: int

    @property
    def solved(self) -> bool:
        return True


@dataclass(frozen=True)
class Unsolved:
    """
    Fixed point reached without a full solution.

    Attributes:
        with_candidates: Completeness crediting candidate eliminations
        no_candidates: Completeness counting fixed cells only
        residual: Canonical string of the converged grid
    """
    with_candidates: Completeness
    no_candidates: Completeness
    residual: str

    @property
    def solved(self) -> bool:
        return False


Outcome = Union[Solved, Unsolved]


@dataclass(frozen=True)
class CoverageRecord:
    """
    One emitted evaluation, handed to aggregation.

    Attributes:
        puzzle: Canonical puzzle string
        strategies: Strategy names in roster order
        outcome: Solved or Unsolved
        baseline_rounds: Rounds the full roster needs on this puzzle
    """
    puzzle: str
    strategies: Tuple[str, ...]
    outcome: Outcome
    baseline_rounds: int

    @property
    def solved(self) -> bool:
        return self.outcome.solved

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON wire record.

        Returns:
            Dict with puzzle, strategies, solved, baseline_rounds and either
            rounds or the completeness scores and residual grid
        """
        data: Dict[str, Any] = {
            "puzzle": self.puzzle,
            "strategies": list(self.strategies),
            "solved": self.solved,
            "baseline_rounds": self.baseline_rounds,
        }
        if isinstance(self.outcome, Solved):
            data["rounds"] = self.outcome.rounds
        else:
            data["completeness_with_candidates"] = self.outcome.with_candidates.to_dict()
            data["completeness_no_candidates"] = self.outcome.no_candidates.to_dict()
            data["residual"] = self.outcome.residual
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CoverageRecord':
        """
        Rebuild a record from its wire form.

        Raises:
            KeyError, TypeError, ValueError: If the dict is malformed
        """
        outcome: Outcome
        if data["solved"]:
            outcome = Solved(rounds=int(data["rounds"]))
        else:
            outcome = Unsolved(
                with_candidates=Completeness.from_dict(data["completeness_with_candidates"]),
                no_candidates=Completeness.from_dict(data["completeness_no_candidates"]),
                residual=str(data["residual"]),
            )
        return cls(
            puzzle=str(data["puzzle"]),
            strategies=tuple(str(name) for name in data["strategies"]),
            outcome=outcome,
            baseline_rounds=int(data["baseline_rounds"]),
        )
