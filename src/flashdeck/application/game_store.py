"""
Game store — Application layer orchestrator.

Owns one player's cards, history and stats plus the state of the running
session, and coordinates the round selector, scoring engine and game-mode
controller around it.
"""

import logging
import random
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from flashdeck.domain.constants import MAX_LEVEL, MIN_LEVEL, ROUND_SIZE
from flashdeck.domain.models import (
    AnswerResult,
    Card,
    Deck,
    GameHistoryEntry,
    GameResult,
    GameSettings,
    GameStats,
    PointsBreakdown,
    SessionMode,
    SessionSnapshot,
    clamp_level,
    clamp_time,
)
from flashdeck.domain.ports import CardStorage, SessionStorage

from .decks import DeckManager
from .game_modes import SessionCursor, advance, prepare_session_cards
from .profiles import GameProfile
from .scoring import compute_points
from .selection import select_round

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GameStore:
    """
    Session lifecycle for one app.

    Constructed once by the host application and passed around explicitly.
    All persistence goes through the injected storage ports; every mutation
    is followed by an explicit save.
    """

    def __init__(
        self,
        storage: CardStorage,
        session_storage: SessionStorage,
        profile: GameProfile,
        round_size: int = ROUND_SIZE,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.storage = storage
        self.session_storage = session_storage
        self.profile = profile
        self.round_size = round_size
        self.rng = rng
        self.clock = clock
        self.decks = DeckManager(storage)

        self.all_cards: list[Card] = []
        self.cursor = SessionCursor()
        self.game_settings: GameSettings | None = None
        self.points = 0
        self.correct_answers_count = 0
        self.history: list[GameHistoryEntry] = []
        self.game_stats = GameStats()
        self.last_points_breakdown: PointsBreakdown | None = None

        self._initialized = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def game_cards(self) -> list[Card]:
        return self.cursor.cards

    @property
    def current_card_index(self) -> int:
        return self.cursor.index

    @property
    def current_card(self) -> Card | None:
        return self.cursor.current

    @property
    def is_active(self) -> bool:
        return bool(self.cursor.cards)

    @property
    def session_mode(self) -> SessionMode:
        if self.game_settings is None:
            return SessionMode.STANDARD
        return self.game_settings.session_mode

    def initialize_store(self) -> None:
        """
        Load cards, history and stats once; later calls are no-ops.

        Also restores an in-progress session left in session storage.
        """
        if self._initialized:
            return

        self.all_cards = self.storage.load_cards()
        self.history = self.storage.load_history()
        self.game_stats = self.storage.load_stats()
        self._initialized = True
        logger.debug(
            f"[store] Loaded {len(self.all_cards)} cards, {len(self.history)} history entries"
        )

        snapshot = self.session_storage.load_state()
        if snapshot is not None and snapshot.game_cards:
            self.game_settings = snapshot.settings
            self.cursor = SessionCursor(list(snapshot.game_cards), snapshot.current_card_index)
            if not 0 <= self.cursor.index < len(self.cursor.cards):
                self.cursor.index = 0
            self.points = snapshot.points
            self.correct_answers_count = snapshot.correct_answers_count
            logger.info(
                f"[store] Resumed session at card {self.cursor.index + 1}/{len(self.cursor.cards)}"
            )

    def reset_game_state(self) -> None:
        self.cursor.index = 0
        self.points = 0
        self.correct_answers_count = 0
        self.last_points_breakdown = None

    def _save_current_state(self) -> None:
        if self.game_settings is None:
            return
        self.session_storage.save_state(
            SessionSnapshot(
                game_cards=list(self.cursor.cards),
                current_card_index=self.cursor.index,
                points=self.points,
                correct_answers_count=self.correct_answers_count,
                settings=self.game_settings,
            )
        )

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def start_game(self, settings: GameSettings) -> bool:
        """
        Start a new session.

        A session that is already running (e.g. restored after a reload) is
        resumed instead and this returns False.

        Returns:
            True if a new session was started.
        """
        if self.is_active:
            logger.info("[store] Session already running; resuming it")
            return False

        if not settings.deck or not self.switch_deck(settings.deck):
            if settings.deck:
                logger.warning(f"[store] No deck named '{settings.deck}'; keeping the current deck")
            settings = replace(settings, deck=self.current_deck_name())

        self.storage.save_settings(settings)
        self.game_settings = settings

        selected = select_round(
            self.all_cards,
            settings.focus,
            round_size=self.round_size,
            time_of=self.profile.time_of(settings.mode),
            rng=self.rng,
        )
        cards = prepare_session_cards(selected, self.all_cards, settings.session_mode, self.rng)
        self.cursor = SessionCursor(cards)
        self.reset_game_state()
        self._save_current_state()

        logger.info(
            f"[store] Started {settings.session_mode.value} session: mode={settings.mode} "
            f"focus={settings.focus.value} cards={len(cards)}"
        )
        return True

    def handle_answer_base(self, result: AnswerResult, breakdown: PointsBreakdown) -> None:
        """Apply an already computed breakdown to the session counters."""
        if AnswerResult(result) is AnswerResult.CORRECT:
            self.correct_answers_count += 1
        self.points += breakdown.total_points
        self.last_points_breakdown = breakdown

    def handle_answer(
        self, result: AnswerResult, answer_time: float | None = None
    ) -> PointsBreakdown:
        """
        Score the current card and update its level and time.

        Correct answers promote the card, incorrect ones demote it, close
        answers leave the level alone. A correct answer in a timed mode
        records the answer time.

        Returns:
            The breakdown applied; all zero when there is no current card.
        """
        card = self.current_card
        settings = self.game_settings
        if card is None or settings is None:
            return PointsBreakdown.zero()

        result = AnswerResult(result)
        breakdown = compute_points(result, card, settings, answer_time, self.profile)
        self.handle_answer_base(result, breakdown)

        updated = self._updated_card(card, result, answer_time)
        key = self.profile.key_fn(card)
        self.all_cards = [
            updated if self.profile.key_fn(c) == key else c for c in self.all_cards
        ]
        self.cursor.cards[:] = [
            updated if self.profile.key_fn(c) == key else c for c in self.cursor.cards
        ]

        self.storage.save_cards(self.all_cards)
        self._save_current_state()

        logger.debug(
            f"[store] {result.value} on '{key}': +{breakdown.total_points} "
            f"level {card.level}->{updated.level}"
        )
        return breakdown

    def _updated_card(
        self, card: Card, result: AnswerResult, answer_time: float | None
    ) -> Card:
        updated = card
        if result is AnswerResult.CORRECT:
            updated = updated.with_level(clamp_level(card.level + 1))
        elif result is AnswerResult.INCORRECT:
            updated = updated.with_level(clamp_level(card.level - 1))

        time_field = self.profile.time_field(self.game_settings.mode)
        if result is AnswerResult.CORRECT and answer_time is not None and time_field:
            updated = updated.with_time(time_field, round(clamp_time(answer_time), 1))
        return updated

    def next_card(self) -> bool:
        """
        Advance to the next card according to the session mode.

        Returns:
            True if the session is over.
        """
        is_over = advance(self.cursor, self.session_mode, self.profile.key_fn)
        if not is_over:
            self._save_current_state()
        return is_over

    def remove_card_from_game(self, index: int) -> Card:
        """
        Drop a card from the running session.

        Raises:
            CardIndexError: index is outside the session's cards.
        """
        card = self.cursor.remove(index)
        self._save_current_state()
        return card

    def finish_game(self) -> GameHistoryEntry | None:
        """
        End the session and hand its result to the game-over step.

        The result goes to session storage; history and stats are written
        afterwards by ``save_game_results`` (see ``game_flow``).

        Returns:
            The history entry for the finished session, or None without one.
        """
        settings = self.game_settings or self.storage.load_settings()
        if settings is None:
            return None

        total_cards = len(self.cursor.cards)
        entry = GameHistoryEntry(
            date=self.clock().isoformat(),
            points=self.points,
            correct_answers=self.correct_answers_count,
            settings=settings,
            total_cards=total_cards,
        )
        self.session_storage.save_result(
            GameResult(
                points=self.points,
                correct_answers=self.correct_answers_count,
                total_cards=total_cards,
            )
        )
        self.session_storage.clear_state()

        logger.info(
            f"[store] Finished session: points={self.points} "
            f"correct={self.correct_answers_count}"
        )
        self.reset_game_state()
        self.cursor = SessionCursor()
        return entry

    def save_game_results(self, entry: GameHistoryEntry) -> None:
        """Append to history and add the session's totals to the stats."""
        self.history = [*self.history, entry]
        self.game_stats.record(entry.points, entry.correct_answers)
        self.storage.save_history(self.history)
        self.storage.save_stats(self.game_stats)

    def discard_game(self) -> None:
        """Abandon the running session; history and stats are untouched."""
        self.session_storage.clear_state()
        self.cursor = SessionCursor()
        self.reset_game_state()
        self.game_settings = None
        logger.info("[store] Session discarded")

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def move_all_cards(self, level: int) -> bool:
        """
        Set every card of the deck to ``level``.

        Returns:
            False without writing anything when level is out of range.
        """
        if level < MIN_LEVEL or level > MAX_LEVEL:
            return False
        self.all_cards = [card.with_level(level) for card in self.all_cards]
        self.storage.save_cards(self.all_cards)
        return True

    def reset_all_cards(self) -> None:
        """Wipe all progress: MIN_LEVEL and MAX_TIME for every card."""
        self.all_cards = [card.reset_progress() for card in self.all_cards]
        self.storage.save_cards(self.all_cards)

    def reset_cards_to_default(self) -> None:
        """Replace the current deck's cards with the app's default cards."""
        defaults = self.profile.default_decks()
        current = self.current_deck_name()
        deck = next((d for d in defaults if d.name == current), defaults[0])
        self.import_cards(deck.cards)

    def import_cards(self, cards: list[Card]) -> None:
        self.all_cards = list(cards)
        self.storage.save_cards(self.all_cards)

    # ------------------------------------------------------------------
    # Decks
    # ------------------------------------------------------------------

    def current_deck_name(self) -> str | None:
        settings = self.storage.load_settings()
        names = self.decks.deck_names()
        if settings is not None and settings.deck in names:
            return settings.deck
        return names[0] if names else None

    def get_decks(self) -> list[Deck]:
        return self.decks.get_decks()

    def add_deck(self, name: str) -> bool:
        return self.decks.add_deck(name)

    def rename_deck(self, old_name: str, new_name: str) -> bool:
        return self.decks.rename_deck(old_name, new_name)

    def remove_deck(self, name: str) -> bool:
        removed = self.decks.remove_deck(name)
        if removed:
            self.all_cards = self.storage.load_cards()
        return removed

    def switch_deck(self, name: str) -> bool:
        """Make ``name`` the current deck and load its cards."""
        deck = next((d for d in self.decks.get_decks() if d.name == name), None)
        if deck is None:
            return False

        settings = self.storage.load_settings()
        if settings is None:
            settings = GameSettings(mode=self.profile.default_mode, deck=name)
        self.storage.save_settings(replace(settings, deck=name))
        self.all_cards = deck.cards
        return True
