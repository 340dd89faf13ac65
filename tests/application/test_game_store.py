import pytest

from flashdeck.application.game_store import GameStore
from flashdeck.application.profiles import VOCABULARY
from flashdeck.domain.constants import MAX_TIME, MIN_LEVEL
from flashdeck.domain.exceptions import CardIndexError
from flashdeck.domain.models import (
    AnswerResult,
    Card,
    GameHistoryEntry,
    GameSettings,
    GameStats,
    SessionMode,
    SessionSnapshot,
)

TYPING = GameSettings(mode="typing", language="voc-de")
BLIND = GameSettings(mode="blind", language="voc-de")


def reload(storages, rng):
    storage, session_storage = storages
    store = GameStore(storage, session_storage, VOCABULARY, rng=rng)
    store.initialize_store()
    return store


def stored_level(store, key):
    return next(card.level for card in store.storage.load_cards() if card.key == key)


# ---------- Initialization ----------


def test_initialize_store_loads_default_deck(store):
    assert len(store.all_cards) == 10
    assert store.history == []
    assert store.game_stats == GameStats()
    assert not store.is_active


def test_initialize_store_is_idempotent(store):
    store.storage.save_cards([])
    store.initialize_store()
    assert len(store.all_cards) == 10


# ---------- Session lifecycle ----------


def test_start_game(store):
    assert store.start_game(TYPING) is True

    assert len(store.game_cards) == 10
    assert len({card.key for card in store.game_cards}) == 10
    assert store.current_card_index == 0
    assert store.points == 0
    assert store.correct_answers_count == 0
    assert store.storage.load_settings().deck == "en"
    assert store.session_storage.load_state() is not None


def test_start_game_resumes_running_session(store):
    store.start_game(TYPING)
    first = list(store.game_cards)

    assert store.start_game(BLIND) is False
    assert store.game_cards == first
    assert store.game_settings.mode == "typing"


def test_correct_answer_promotes_and_scores(store):
    store.start_game(TYPING)
    card = store.current_card

    breakdown = store.handle_answer(AnswerResult.CORRECT)

    assert store.correct_answers_count == 1
    assert store.points == breakdown.total_points > 0
    assert store.last_points_breakdown == breakdown
    assert store.current_card.level == min(card.level + 1, 5)
    assert stored_level(store, card.key) == min(card.level + 1, 5)


def test_incorrect_answer_demotes(store):
    store.start_game(TYPING)
    card = store.current_card

    breakdown = store.handle_answer(AnswerResult.INCORRECT)

    assert breakdown.total_points == 0
    assert store.correct_answers_count == 0
    assert stored_level(store, card.key) == max(card.level - 1, MIN_LEVEL)


def test_close_answer_keeps_level(store):
    store.start_game(TYPING)
    card = store.current_card

    breakdown = store.handle_answer(AnswerResult.CLOSE)

    assert store.correct_answers_count == 0
    assert store.points == breakdown.total_points
    assert breakdown.close_adjustment > 0
    assert stored_level(store, card.key) == card.level


def test_correct_answer_records_time(store):
    store.start_game(BLIND)
    key = store.current_card.key

    store.handle_answer(AnswerResult.CORRECT, answer_time=4.26)

    stored = next(card for card in store.all_cards if card.key == key)
    assert stored.times["blind"] == 4.3
    assert stored.times["typing"] == 60


def test_wrong_answer_keeps_time(store):
    store.start_game(BLIND)
    key = store.current_card.key

    store.handle_answer(AnswerResult.INCORRECT, answer_time=2.0)

    stored = next(card for card in store.all_cards if card.key == key)
    assert stored.times["blind"] == 60


def test_answer_without_session_is_zero(store):
    assert store.handle_answer(AnswerResult.CORRECT).total_points == 0
    assert store.correct_answers_count == 0


def test_standard_session_runs_to_the_end(store):
    store.start_game(TYPING)
    answered = 0
    is_over = False
    while not is_over:
        result = AnswerResult.CORRECT if answered % 2 else AnswerResult.INCORRECT
        store.handle_answer(result)
        answered += 1
        assert store.correct_answers_count <= answered
        is_over = store.next_card()

    assert answered == 10
    assert store.correct_answers_count == 5


def test_finish_game(store, now):
    store.start_game(TYPING)
    store.handle_answer(AnswerResult.CORRECT)
    points = store.points

    entry = store.finish_game()

    assert entry.date == now.isoformat()
    assert entry.points == points
    assert entry.correct_answers == 1
    assert entry.total_cards == 10
    assert entry.settings.mode == "typing"

    result = store.session_storage.load_result()
    assert (result.points, result.correct_answers, result.total_cards) == (points, 1, 10)
    assert store.session_storage.load_state() is None
    assert not store.is_active
    assert store.points == 0


def test_finish_game_without_settings(store):
    assert store.finish_game() is None


def test_save_game_results_is_additive(store):
    store.storage.save_stats(GameStats(games_played=2, points=30, correct_answers=7))
    store.game_stats = store.storage.load_stats()

    entry = GameHistoryEntry(date="2026-03-14", points=12, correct_answers=3, settings=TYPING)
    store.save_game_results(entry)

    assert store.storage.load_stats() == GameStats(games_played=3, points=42, correct_answers=10)
    assert store.storage.load_history() == [entry]


def test_discard_game(store):
    store.start_game(TYPING)
    store.handle_answer(AnswerResult.CORRECT)

    store.discard_game()

    assert not store.is_active
    assert store.session_storage.load_state() is None
    assert store.storage.load_history() == []
    assert store.game_stats == GameStats()


def test_session_survives_reload(store, storages, rng):
    store.start_game(TYPING)
    store.handle_answer(AnswerResult.CORRECT)
    store.next_card()

    restored = reload(storages, rng)

    assert restored.is_active
    assert restored.current_card_index == 1
    assert restored.points == store.points
    assert restored.correct_answers_count == 1
    assert restored.game_cards == store.game_cards
    assert restored.start_game(BLIND) is False


@pytest.mark.parametrize("index", [7, 1, -1])
def test_restored_index_out_of_range_is_reset(storages, rng, index):
    _, session_storage = storages
    session_storage.save_state(
        SessionSnapshot(
            game_cards=[Card(key="Where", answer="Wo")],
            current_card_index=index,
            points=3,
            correct_answers_count=1,
            settings=TYPING,
        )
    )

    restored = reload(storages, rng)

    assert restored.current_card_index == 0
    assert restored.current_card.key == "Where"


def test_remove_card_from_game(store):
    store.start_game(TYPING)
    last = store.game_cards[-1]

    assert store.remove_card_from_game(9) == last
    assert len(store.game_cards) == 9
    with pytest.raises(CardIndexError):
        store.remove_card_from_game(9)


# ---------- Session modes ----------


def test_endless_level1_session(store):
    store.start_game(GameSettings(mode="typing", session_mode=SessionMode.ENDLESS_LEVEL1))
    assert sorted(card.key for card in store.game_cards) == ["Where", "Who"]

    store.handle_answer(AnswerResult.CORRECT)
    assert store.next_card() is False
    store.handle_answer(AnswerResult.CORRECT)
    assert store.next_card() is True


def test_three_rounds_session(store):
    store.start_game(GameSettings(mode="typing", session_mode=SessionMode.THREE_ROUNDS))
    assert len(store.game_cards) == 30
    keys = [card.key for card in store.game_cards]
    assert all(keys.count(key) == 3 for key in set(keys))


# ---------- Card maintenance ----------


def test_move_all_cards(store):
    assert store.move_all_cards(3) is True
    assert {card.level for card in store.storage.load_cards()} == {3}

    assert store.move_all_cards(3) is True
    assert {card.level for card in store.storage.load_cards()} == {3}


@pytest.mark.parametrize("level", [0, 6, -1])
def test_move_all_cards_rejects_bad_levels(store, level):
    before = store.storage.load_cards()
    assert store.move_all_cards(level) is False
    assert store.storage.load_cards() == before


def test_reset_all_cards(store):
    store.move_all_cards(4)
    store.reset_all_cards()

    for card in store.storage.load_cards():
        assert card.level == MIN_LEVEL
        assert card.times == {"blind": MAX_TIME, "typing": MAX_TIME}


def test_reset_cards_to_default(store):
    store.move_all_cards(4)
    store.reset_cards_to_default()

    levels = {card.key: card.level for card in store.storage.load_cards()}
    assert levels["Where"] == 1
    assert levels["How much"] == 5


# ---------- Decks ----------


def test_switch_deck(store):
    assert store.add_deck("fr") is True
    assert store.switch_deck("fr") is True
    assert store.all_cards == []
    assert store.current_deck_name() == "fr"
    assert store.switch_deck("es") is False


def test_start_game_keeps_current_deck(store):
    store.add_deck("fr")
    store.switch_deck("fr")
    store.import_cards([Card(key="Where", answer="Où")])

    store.start_game(TYPING)

    assert store.current_deck_name() == "fr"
    assert [card.key for card in store.game_cards] == ["Where"]


def test_start_game_with_empty_deck(store):
    store.add_deck("fr")
    store.start_game(GameSettings(mode="typing", deck="fr"))
    assert not store.is_active


def test_remove_deck_reloads_cards(store):
    store.add_deck("fr")
    store.switch_deck("fr")

    assert store.remove_deck("fr") is True
    assert store.current_deck_name() == "en"
    assert len(store.all_cards) == 10


def test_start_game_with_unknown_deck_keeps_current_deck(store):
    store.add_deck("fr")
    store.switch_deck("fr")
    store.import_cards([Card(key="Bonjour", answer="Hello")])

    assert store.start_game(GameSettings(mode="typing", deck="typo")) is True
    store.handle_answer(AnswerResult.CORRECT)

    decks = {deck.name: [card.key for card in deck.cards] for deck in store.get_decks()}
    assert len(decks["en"]) == 10
    assert decks["en"][:2] == ["Where", "Who"]
    assert decks["fr"] == ["Bonjour"]
    assert store.storage.load_settings().deck == "fr"
    assert [card.key for card in store.game_cards] == ["Bonjour"]
