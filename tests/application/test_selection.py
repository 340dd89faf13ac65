from collections import Counter

import pytest

from flashdeck.application.profiles import VOCABULARY
from flashdeck.application.selection import (
    focus_weight,
    select_round,
    shuffle,
    weighted_random_selection,
)
from flashdeck.domain.models import Card, Focus


class FixedRandom:
    """Returns queued values from random() and always 0 from randrange()."""

    def __init__(self, *values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)

    def randrange(self, stop):
        return 0


def test_shuffle_is_a_permutation_of_a_copy(rng):
    items = list(range(20))
    shuffled = shuffle(items, rng)
    assert sorted(shuffled) == items
    assert items == list(range(20))


def test_weighted_selection_walks_cumulative_weights():
    # 0.5 * 4 = 2: a (1) leaves 1, b (3) drops it to -2
    picked = weighted_random_selection([("a", 1), ("b", 3)], 2, FixedRandom(0.5, 0.0))
    assert picked == ["b", "a"]


def test_weighted_selection_caps_count(rng):
    picked = weighted_random_selection([("a", 1), ("b", 1), ("c", 1)], 10, rng)
    assert sorted(picked) == ["a", "b", "c"]


@pytest.mark.parametrize(
    "focus, expected",
    [
        (Focus.WEAK, [5, 4, 3, 2, 1]),
        (Focus.STRONG, [1, 2, 3, 4, 5]),
        (Focus.MEDIUM, [1, 3, 5, 3, 1]),
    ],
)
def test_focus_weights(focus, expected):
    assert [focus_weight(level, focus) for level in range(1, 6)] == expected


def test_focus_weight_rejects_slow():
    with pytest.raises(ValueError):
        focus_weight(1, Focus.SLOW)


def test_empty_pool():
    assert select_round([], Focus.WEAK) == []
    assert select_round([], Focus.SLOW) == []


def test_round_is_capped_and_unique(rng, make_cards):
    cards = make_cards(("a", 1), ("b", 2), ("c", 3))
    picked = select_round(cards, Focus.MEDIUM, round_size=10, rng=rng)
    assert sorted(card.key for card in picked) == ["a", "b", "c"]


def test_round_size_respected(rng, make_cards):
    cards = make_cards(*((f"k{i}", i % 5 + 1) for i in range(30)))
    picked = select_round(cards, Focus.WEAK, round_size=10, rng=rng)
    assert len(picked) == 10
    assert len({card.key for card in picked}) == 10


def test_weak_focus_prefers_low_levels(rng, make_cards):
    cards = make_cards(("low", 1), ("high", 5))
    counts = Counter(
        select_round(cards, Focus.WEAK, round_size=1, rng=rng)[0].key for _ in range(200)
    )
    assert counts["low"] > 130


def test_strong_focus_prefers_high_levels(rng, make_cards):
    cards = make_cards(("low", 1), ("high", 5))
    counts = Counter(
        select_round(cards, Focus.STRONG, round_size=1, rng=rng)[0].key for _ in range(200)
    )
    assert counts["high"] > 130


def test_medium_focus_peaks_at_level_three(rng, make_cards):
    cards = make_cards(*((f"L{level}", level) for level in range(1, 6)))
    counts = Counter(
        select_round(cards, Focus.MEDIUM, round_size=1, rng=rng)[0].key for _ in range(600)
    )
    assert counts["L3"] > counts["L2"]
    assert counts["L3"] > counts["L4"]
    assert counts["L3"] > counts["L1"] + counts["L5"]


def test_slow_focus_picks_slowest(rng):
    cards = [Card(key=f"t{t}", times={"blind": t}) for t in (5, 50, 30, 10, 40)]
    picked = select_round(
        cards, Focus.SLOW, round_size=3, time_of=VOCABULARY.time_of("blind"), rng=rng
    )
    assert {card.key for card in picked} == {"t50", "t40", "t30"}


def test_slow_focus_defaults_to_fastest_tracked_time(rng):
    cards = [
        Card(key="a", times={"blind": 50, "typing": 2}),
        Card(key="b", times={"blind": 20, "typing": 20}),
    ]
    picked = select_round(cards, Focus.SLOW, round_size=1, rng=rng)
    assert [card.key for card in picked] == ["b"]


def test_mode_filter(rng, make_cards):
    cards = make_cards(("a", 1), ("b", 1), ("c", 1))
    picked = select_round(
        cards, Focus.WEAK, mode_filter=lambda card: card.key != "b", rng=rng
    )
    assert sorted(card.key for card in picked) == ["a", "c"]


def test_default_random_source(make_cards):
    cards = make_cards(("a", 1), ("b", 2))
    assert len(select_round(cards, Focus.WEAK, round_size=1)) == 1
    assert isinstance(shuffle([1, 2, 3]), list)
