"""
JSON Storage — Infrastructure adapters for the storage ports.

Implements CardStorage and SessionStorage on top of a KeyValueStore, one
JSON document per key. Documents are (de)serialized with pydantic
TypeAdapters; anything missing or failing validation falls back to an empty
value or the app's default decks.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from flashdeck.domain.models import (
    Card,
    DailyStats,
    Deck,
    GameHistoryEntry,
    GameResult,
    GameSettings,
    GameStats,
    SessionSnapshot,
)
from flashdeck.domain.ports import CardStorage, SessionStorage

from .key_value import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DECKS = TypeAdapter(list[Deck])
HISTORY = TypeAdapter(list[GameHistoryEntry])
STATS = TypeAdapter(GameStats)
SETTINGS = TypeAdapter(GameSettings)
DAILY = TypeAdapter(DailyStats)
SNAPSHOT = TypeAdapter(SessionSnapshot)
RESULT = TypeAdapter(GameResult)


class _JsonDocuments:
    def __init__(self, store: KeyValueStore, prefix: str):
        self.store = store
        self.prefix = prefix

    def key(self, name: str) -> str:
        return f"{self.prefix}-{name}"

    def load(self, name: str, adapter: TypeAdapter[T], fallback: T) -> T:
        raw = self.store.get(self.key(name))
        if raw is None:
            return fallback
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"[storage] Malformed '{self.key(name)}' ({e.error_count()} errors); "
                "using defaults"
            )
            return fallback

    def save(self, name: str, adapter: TypeAdapter[Any], value: Any) -> None:
        self.store.set(self.key(name), adapter.dump_json(value, indent=2).decode("utf-8"))

    def delete(self, name: str) -> None:
        self.store.delete(self.key(name))


class JsonCardStorage(CardStorage):
    """
    Durable storage for one app.

    Keys (with ``prefix``): ``decks``, ``history``, ``stats``, ``settings``,
    ``daily-stats``. The current deck is the one named in the settings, or
    the first deck.
    """

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str,
        default_decks: Callable[[], list[Deck]] | None = None,
    ):
        """
        Args:
            store: Backend holding the JSON documents.
            prefix: Key prefix, usually the app profile name.
            default_decks: Seeds the decks when none are stored.
        """
        self._docs = _JsonDocuments(store, prefix)
        self._default_decks = default_decks

    # ---------- Decks ----------

    def load_decks(self) -> list[Deck]:
        decks = self._docs.load("decks", DECKS, [])
        if not decks and self._default_decks is not None:
            decks = self._default_decks()
            logger.info(f"[storage] Seeding {len(decks)} default deck(s)")
            self.save_decks(decks)
        return decks

    def save_decks(self, decks: list[Deck]) -> None:
        self._docs.save("decks", DECKS, decks)

    def _current_deck(self, decks: list[Deck]) -> Deck | None:
        settings = self.load_settings()
        if settings is not None and settings.deck:
            for deck in decks:
                if deck.name == settings.deck:
                    return deck
        return decks[0] if decks else None

    def load_cards(self) -> list[Card]:
        deck = self._current_deck(self.load_decks())
        return list(deck.cards) if deck else []

    def save_cards(self, cards: list[Card]) -> None:
        decks = self.load_decks()
        deck = self._current_deck(decks)
        if deck is None:
            decks = [Deck(name="default", cards=list(cards))]
        else:
            deck.cards = list(cards)
        self.save_decks(decks)

    # ---------- History & stats ----------

    def load_history(self) -> list[GameHistoryEntry]:
        return self._docs.load("history", HISTORY, [])

    def save_history(self, history: list[GameHistoryEntry]) -> None:
        self._docs.save("history", HISTORY, history)

    def load_stats(self) -> GameStats:
        return self._docs.load("stats", STATS, GameStats())

    def save_stats(self, stats: GameStats) -> None:
        self._docs.save("stats", STATS, stats)

    # ---------- Settings ----------

    def load_settings(self) -> GameSettings | None:
        return self._docs.load("settings", SETTINGS, None)

    def save_settings(self, settings: GameSettings) -> None:
        self._docs.save("settings", SETTINGS, settings)

    def load_daily_stats(self) -> DailyStats | None:
        return self._docs.load("daily-stats", DAILY, None)

    def save_daily_stats(self, daily: DailyStats) -> None:
        self._docs.save("daily-stats", DAILY, daily)


class JsonSessionStorage(SessionStorage):
    """Transient session state: ``game-state`` and ``game-result`` keys."""

    def __init__(self, store: KeyValueStore, prefix: str):
        self._docs = _JsonDocuments(store, prefix)

    def save_state(self, snapshot: SessionSnapshot) -> None:
        self._docs.save("game-state", SNAPSHOT, snapshot)

    def load_state(self) -> SessionSnapshot | None:
        return self._docs.load("game-state", SNAPSHOT, None)

    def clear_state(self) -> None:
        self._docs.delete("game-state")

    def save_result(self, result: GameResult) -> None:
        self._docs.save("game-result", RESULT, result)

    def load_result(self) -> GameResult | None:
        return self._docs.load("game-result", RESULT, None)

    def clear_result(self) -> None:
        self._docs.delete("game-result")
