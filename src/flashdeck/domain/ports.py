"""
Ports (interfaces) for persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import (
    Card,
    DailyStats,
    Deck,
    GameHistoryEntry,
    GameResult,
    GameSettings,
    GameStats,
    SessionSnapshot,
)


class CardStorage(ABC):
    """
    Port for durable storage of decks, history, stats and settings.

    All operations are synchronous. Loads never raise for missing or
    malformed data; they return an empty collection or a default instead.

    Implementations:
        - JsonCardStorage: One JSON document per key in a KeyValueStore.
        - JsonCardStorage over MemoryKeyValueStore: for tests and ephemeral play.
    """

    @abstractmethod
    def load_cards(self) -> list[Card]:
        """
        Cards of the current deck.

        The current deck is the one named in the saved settings, or the first
        deck when the settings name none (or an unknown one).
        """

    @abstractmethod
    def save_cards(self, cards: list[Card]) -> None:
        """Replace the cards of the current deck."""

    @abstractmethod
    def load_decks(self) -> list[Deck]:
        pass

    @abstractmethod
    def save_decks(self, decks: list[Deck]) -> None:
        pass

    @abstractmethod
    def load_history(self) -> list[GameHistoryEntry]:
        pass

    @abstractmethod
    def save_history(self, history: list[GameHistoryEntry]) -> None:
        pass

    @abstractmethod
    def load_stats(self) -> GameStats:
        pass

    @abstractmethod
    def save_stats(self, stats: GameStats) -> None:
        pass

    @abstractmethod
    def load_settings(self) -> GameSettings | None:
        """Settings of the last started game, or None."""

    @abstractmethod
    def save_settings(self, settings: GameSettings) -> None:
        pass

    @abstractmethod
    def load_daily_stats(self) -> DailyStats | None:
        pass

    @abstractmethod
    def save_daily_stats(self, daily: DailyStats) -> None:
        pass


class SessionStorage(ABC):
    """
    Port for transient, session-scoped state.

    Used only to recover an in-progress game after a reload and to hand the
    last game's result to the game-over step.
    """

    @abstractmethod
    def save_state(self, snapshot: SessionSnapshot) -> None:
        pass

    @abstractmethod
    def load_state(self) -> SessionSnapshot | None:
        pass

    @abstractmethod
    def clear_state(self) -> None:
        pass

    @abstractmethod
    def save_result(self, result: GameResult) -> None:
        pass

    @abstractmethod
    def load_result(self) -> GameResult | None:
        pass

    @abstractmethod
    def clear_result(self) -> None:
        pass

    def clear_all(self) -> None:
        self.clear_state()
        self.clear_result()
