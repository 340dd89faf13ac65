"""
Round selector.

Picks the cards for one play session, biased by the chosen focus:
1. slow: the slowest cards by recorded time
2. weak / strong / medium: weighted sampling without replacement by level
Both paths shuffle the picked subset so selection order never leaks into
presentation order.
"""

import logging
import random
from collections.abc import Callable, Sequence
from typing import TypeVar

from flashdeck.domain.constants import MAX_LEVEL, MEDIUM_WEIGHTS, ROUND_SIZE
from flashdeck.domain.models import Card, Focus

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """
    Fisher-Yates shuffle on a copy; the input is left untouched.
    """
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def weighted_random_selection(
    weighted: Sequence[tuple[T, int]],
    count: int,
    rng: random.Random | None = None,
) -> list[T]:
    """
    Weighted sampling without replacement.

    Repeatedly draws a value in [0, total weight), subtracts weights in order
    until the remainder drops to zero or below, takes that item and removes it
    from the pool.

    Args:
        weighted: (item, weight) pairs.
        count: Number of items to pick; capped at the pool size.
        rng: Random source, for deterministic tests.

    Returns:
        Picked items in pick order.
    """
    rng = rng or random
    available = list(weighted)
    selected: list[T] = []

    for _ in range(min(count, len(available))):
        total_weight = sum(weight for _, weight in available)
        remaining = rng.random() * total_weight
        selected_index = 0
        for j, (_, weight) in enumerate(available):
            remaining -= weight
            if remaining <= 0:
                selected_index = j
                break
        item, _ = available.pop(selected_index)
        selected.append(item)

    return selected


def focus_weight(level: int, focus: Focus) -> int:
    """
    Selection weight of a card level under a focus.

    weak: 5 for level 1 down to 1 for level 5.
    strong: the level itself.
    medium: bell-shaped, peaking at level 3.
    """
    if focus is Focus.WEAK:
        return MAX_LEVEL + 1 - level
    if focus is Focus.STRONG:
        return level
    if focus is Focus.MEDIUM:
        return MEDIUM_WEIGHTS[level - 1]
    raise ValueError(f"Focus '{focus.value}' does not use level weights")


def select_round(
    all_cards: Sequence[Card],
    focus: Focus,
    round_size: int = ROUND_SIZE,
    time_of: Callable[[Card], float] | None = None,
    mode_filter: Callable[[Card], bool] | None = None,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Select and order the cards for one round.

    Args:
        all_cards: The full card pool (current deck).
        focus: Selection strategy.
        round_size: Maximum number of cards; capped at the pool size.
        time_of: Time extractor for slow focus; defaults to the fastest
            tracked time of each card.
        mode_filter: Optional predicate narrowing the eligible cards.
        rng: Random source, for deterministic tests.

    Returns:
        Shuffled list of at most ``round_size`` cards; empty for an empty pool.
    """
    focus = Focus(focus)
    eligible = [card for card in all_cards if mode_filter(card)] if mode_filter else list(all_cards)

    if not eligible:
        return []

    count = min(round_size, len(eligible))

    if focus is Focus.SLOW:
        time_of = time_of or Card.min_time
        slowest = sorted(eligible, key=time_of, reverse=True)[:count]
        logger.debug(f"[select] slow focus picked {len(slowest)}/{len(eligible)} cards")
        return shuffle(slowest, rng)

    weighted = [(card, focus_weight(card.level, focus)) for card in eligible]
    selected = weighted_random_selection(weighted, count, rng)
    logger.debug(f"[select] {focus.value} focus picked {len(selected)}/{len(eligible)} cards")
    return shuffle(selected, rng)
