"""
Weighted random selection without replacement.

A biased shuffle: items with larger weights tend to be drawn earlier, but
placement is probabilistic rather than guaranteed.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

from flashy.domain.errors import InvalidArgumentError
from flashy.domain.scheduling.ports import RandomSource

T = TypeVar("T")


def weighted_random_select(
    items: Sequence[T],
    weights: Sequence[float],
    count: int,
    *,
    rng: RandomSource | None = None,
) -> list[T]:
    """
    Select up to `count` distinct items, each draw proportional to weight.

    Every draw normalizes the weights of the items not yet chosen into a
    cumulative distribution and picks the first remaining item whose
    cumulative probability reaches a uniform draw in [0, 1). When rounding
    leaves no such item, the first remaining item in original order is
    taken instead, so the loop always terminates.

    Args:
        items: Candidates, in their original order.
        weights: Non-negative weight per item.
        count: Number of items to return; capped at len(items).
        rng: Random source; defaults to the `random` module.

    Returns:
        Selected items in draw order.

    Raises:
        InvalidArgumentError: If lengths differ, a weight is negative, or
            count is negative or not an integer.
    """
    if len(items) != len(weights):
        raise InvalidArgumentError(
            f"Items and weights must have the same length ({len(items)} != {len(weights)})"
        )
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError(f"Count must be a whole number, got {count!r}")
    if count < 0:
        raise InvalidArgumentError(f"Count cannot be negative, got {count}")
    if any(w < 0 for w in weights):
        raise InvalidArgumentError("Weights cannot be negative")

    source = rng or random
    select_count = min(count, len(items))
    remaining = list(range(len(items)))
    selected: list[T] = []

    while len(selected) < select_count:
        draw = source.random()
        chosen = _find_in_cumulative(remaining, weights, draw)

        # Fallback: rounding left the draw above the last cumulative value
        if chosen is None:
            chosen = 0

        selected.append(items[remaining.pop(chosen)])

    return selected


def _find_in_cumulative(
    remaining: list[int], weights: Sequence[float], draw: float
) -> int | None:
    """
    Position in `remaining` of the first item whose cumulative probability
    is >= draw, or None.
    """
    total = sum(weights[i] for i in remaining)
    if total <= 0:
        return None

    cumulative = 0.0
    for position, index in enumerate(remaining):
        cumulative += weights[index] / total
        if draw <= cumulative:
            return position
    return None
