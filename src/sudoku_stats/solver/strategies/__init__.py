"""
Strategies Package - Built-in propagation strategies.

Import this module to register all built-in strategies. Registration
order is roster order.
"""

from .singles import NakedSingleStrategy, HiddenSingleStrategy
from .locked import PointingStrategy, ClaimingStrategy
from .pairs import NakedPairsStrategy, HiddenPairsStrategy

__all__ = [
    "NakedSingleStrategy",
    "HiddenSingleStrategy",
    "PointingStrategy",
    "ClaimingStrategy",
    "NakedPairsStrategy",
    "HiddenPairsStrategy",
]
