"""
Game-mode controller.

Decides, after each answer, which card comes next and whether the session is
over. Behaviour differs by session mode:

- standard: fixed cards, sequential, over after the last card.
- endless-level1: level-1 cards only; promoted cards leave the pool, the rest
  cycle as a ring until the pool is empty.
- endless-level5: cards below MAX_LEVEL; a card leaves once it reaches
  MAX_LEVEL.
- 3-rounds: the round's cards repeated LOOP_COUNT times, sequential.

Endless modes and 3-rounds also avoid showing the same card twice in a row.
"""

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from flashdeck.domain.constants import LOOP_COUNT, MAX_LEVEL, MIN_LEVEL
from flashdeck.domain.exceptions import CardIndexError
from flashdeck.domain.models import Card, SessionMode

from .selection import shuffle

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SessionCursor:
    """
    The session's working card list and position.

    Owned exclusively by the game store for one session; the controller
    mutates it in place.
    """

    cards: list[Card] = field(default_factory=list)
    index: int = 0

    @property
    def current(self) -> Card | None:
        if 0 <= self.index < len(self.cards):
            return self.cards[self.index]
        return None

    def remove(self, index: int) -> Card:
        """Remove the card at ``index``; out-of-range indexes are a logic error."""
        if index < 0 or index >= len(self.cards):
            raise CardIndexError(index, len(self.cards))
        card = self.cards.pop(index)
        if self.index >= len(self.cards):
            self.index = 0
        return card


def is_endless_mode(mode: SessionMode) -> bool:
    return SessionMode(mode) in (SessionMode.ENDLESS_LEVEL1, SessionMode.ENDLESS_LEVEL5)


def filter_level1_cards(cards: Sequence[Card]) -> list[Card]:
    return [card for card in cards if card.level == MIN_LEVEL]


def filter_below_max_level(cards: Sequence[Card]) -> list[Card]:
    return [card for card in cards if card.level < MAX_LEVEL]


def repeat_cards(cards: Sequence[T], count: int, rng: random.Random | None = None) -> list[T]:
    """
    Each card ``count`` times, shuffled.

    Raises:
        ValueError: count is not a positive integer.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"Invalid repeat count: {count} (expected positive integer)")
    return shuffle(list(cards) * count, rng)


def avoid_consecutive_repeat(
    cards: list[T],
    next_index: int,
    previous_key: str,
    key_fn: Callable[[T], str],
) -> int:
    """
    Keep the same card from being shown twice in a row.

    If the card at ``next_index`` has ``previous_key``, the nearest card with a
    different key (searching forward, wrapping around) is swapped into
    ``next_index``. Only reorders; length and contents are unchanged. When
    every card shares the key nothing is swapped.

    Returns:
        ``next_index``, unchanged.
    """
    if len(cards) <= 1 or not 0 <= next_index < len(cards):
        return next_index

    if key_fn(cards[next_index]) != previous_key:
        return next_index

    for offset in range(1, len(cards)):
        swap_index = (next_index + offset) % len(cards)
        if key_fn(cards[swap_index]) != previous_key:
            cards[next_index], cards[swap_index] = cards[swap_index], cards[next_index]
            break

    return next_index


def _advance_ring(cursor: SessionCursor) -> None:
    cursor.index += 1
    if cursor.index >= len(cursor.cards):
        cursor.index = 0


def _endless_next(cursor: SessionCursor, is_done: Callable[[Card], bool]) -> bool:
    card = cursor.current
    if card is not None and is_done(card):
        cursor.remove(cursor.index)
    else:
        _advance_ring(cursor)
    return len(cursor.cards) == 0


def endless_level1_next(cursor: SessionCursor) -> bool:
    """Drop the current card once promoted past MIN_LEVEL. True when none remain."""
    return _endless_next(cursor, lambda card: card.level > MIN_LEVEL)


def endless_level5_next(cursor: SessionCursor) -> bool:
    """Drop the current card once it reached MAX_LEVEL. True when none remain."""
    return _endless_next(cursor, lambda card: card.level >= MAX_LEVEL)


def standard_next(cursor: SessionCursor) -> bool:
    cursor.index += 1
    return cursor.index >= len(cursor.cards)


def advance(
    cursor: SessionCursor,
    session_mode: SessionMode,
    key_fn: Callable[[Card], str],
) -> bool:
    """
    Move the session to its next card.

    Args:
        cursor: Session cards and position, mutated in place.
        session_mode: Active session mode.
        key_fn: Card identity, used to avoid consecutive repeats.

    Returns:
        True if the session is over.
    """
    session_mode = SessionMode(session_mode)
    previous = cursor.current
    previous_key = "" if previous is None else key_fn(previous)

    if session_mode is SessionMode.ENDLESS_LEVEL1:
        is_over = endless_level1_next(cursor)
    elif session_mode is SessionMode.ENDLESS_LEVEL5:
        is_over = endless_level5_next(cursor)
    else:
        is_over = standard_next(cursor)

    if not is_over and session_mode is not SessionMode.STANDARD:
        avoid_consecutive_repeat(cursor.cards, cursor.index, previous_key, key_fn)

    logger.debug(
        f"[modes] {session_mode.value}: index={cursor.index} "
        f"remaining={len(cursor.cards)} over={is_over}"
    )
    return is_over


def prepare_session_cards(
    selected: Sequence[Card],
    all_cards: Sequence[Card],
    session_mode: SessionMode,
    rng: random.Random | None = None,
) -> list[Card]:
    """
    Build the session's working card list.

    Args:
        selected: The round picked by the round selector.
        all_cards: The full deck; endless modes draw from it directly.
        session_mode: Active session mode.
        rng: Random source, for deterministic tests.
    """
    session_mode = SessionMode(session_mode)
    if session_mode is SessionMode.ENDLESS_LEVEL1:
        return shuffle(filter_level1_cards(all_cards), rng)
    if session_mode is SessionMode.ENDLESS_LEVEL5:
        return shuffle(filter_below_max_level(all_cards), rng)
    if session_mode is SessionMode.THREE_ROUNDS:
        return repeat_cards(selected, LOOP_COUNT, rng)
    return list(selected)
