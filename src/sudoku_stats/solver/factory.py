"""
Strategy Factory Module - Registry and roster construction.

The registry remembers strategies in the order they were registered;
that order is the canonical roster order every combination follows.
"""

from typing import Any, Dict, List, Optional, Sequence, Type

from .base import Strategy


# name -> strategy class, in registration order
_STRATEGIES: Dict[str, Type[Strategy]] = {}


def register_strategy(cls: Type[Strategy]) -> Type[Strategy]:
    """
    Class decorator adding a strategy to the roster.

    Usage:
        @register_strategy
        class XWingStrategy(Strategy):
            name = "x_wing"
            ...

    Args:
        cls: Strategy subclass with a unique `name`

    Returns:
        cls unchanged

    Raises:
        ValueError: If another class already uses the same name
    """
    existing = _STRATEGIES.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(f"Strategy name {cls.name!r} already taken by {existing.__name__}")
    _STRATEGIES[cls.name] = cls
    return cls


def _unknown(names: Sequence[str]) -> ValueError:
    known = ", ".join(_STRATEGIES)
    return ValueError(f"Unknown strategy {', '.join(names)}; known strategies: {known}")


def create_strategy(name: str, **kwargs: Any) -> Strategy:
    """
    Instantiate one registered strategy.

    Args:
        name: Registered name, e.g. "hidden_single"
        **kwargs: Forwarded to the strategy's constructor

    Raises:
        ValueError: If nothing is registered under name
    """
    try:
        cls = _STRATEGIES[name]
    except KeyError:
        raise _unknown([name]) from None
    return cls(**kwargs)


def get_strategy_names() -> List[str]:
    """Registered names in roster order."""
    return list(_STRATEGIES)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name and description of every registered strategy, in roster order."""
    return [
        {"name": name, "description": cls.description}
        for name, cls in _STRATEGIES.items()
    ]


def create_roster(names: Optional[Sequence[str]] = None) -> List[Strategy]:
    """
    Build the ordered roster used for combinations.

    The roster always follows registration order, whatever order the
    names are given in, so that subsets stay canonical.

    Args:
        names: Strategy names to include, all registered if None

    Returns:
        List of strategy instances

    Raises:
        ValueError: If a name is unknown or listed twice
    """
    if names is None:
        return [cls() for cls in _STRATEGIES.values()]

    missing = [name for name in names if name not in _STRATEGIES]
    if missing:
        raise _unknown(missing)
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate strategy names in roster: {list(names)}")

    wanted = set(names)
    return [cls() for name, cls in _STRATEGIES.items() if name in wanted]
