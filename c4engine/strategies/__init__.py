"""
c4engine.strategies - Pluggable opponents for Connect Four

A Strategy looks at a read-only snapshot of the board and returns a column.
"""

from c4engine.strategies.base import Strategy
from c4engine.strategies.random_strategy import RandomStrategy
from c4engine.strategies.search import SearchStrategy

STRATEGY_TYPES = {
    'random': RandomStrategy,
    'search': SearchStrategy,
}


def make_strategy(kind: str, **kwargs) -> Strategy:
    """
    Create a strategy by name.

    Args:
        kind: 'random' or 'search'
        **kwargs: Passed to the strategy constructor

    Returns:
        The new strategy
    """
    try:
        strategy_type = STRATEGY_TYPES[kind]
    except KeyError:
        raise ValueError(f"Unknown strategy '{kind}' (choose from {', '.join(STRATEGY_TYPES)})") from None
    return strategy_type(**kwargs)


__all__ = ['Strategy', 'RandomStrategy', 'SearchStrategy', 'STRATEGY_TYPES', 'make_strategy']
