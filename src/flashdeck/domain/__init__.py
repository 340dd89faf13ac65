# Domain Package
from .exceptions import CardIndexError, FlashdeckError, GameStateError
from .models import (
    AnswerResult,
    Card,
    DailyStats,
    Deck,
    Focus,
    GameHistoryEntry,
    GameResult,
    GameSettings,
    GameStats,
    PointsBreakdown,
    SessionMode,
    SessionSnapshot,
)
from .ports import CardStorage, SessionStorage

__all__ = [
    "AnswerResult",
    "Card",
    "CardIndexError",
    "CardStorage",
    "DailyStats",
    "Deck",
    "FlashdeckError",
    "Focus",
    "GameHistoryEntry",
    "GameResult",
    "GameSettings",
    "GameStateError",
    "GameStats",
    "PointsBreakdown",
    "SessionMode",
    "SessionSnapshot",
    "SessionStorage",
]
