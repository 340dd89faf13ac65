"""
Game-over flow: daily bonuses and the transfer of a finished session's result
into durable history and stats.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date

from flashdeck.domain.constants import FIRST_GAME_BONUS, STREAK_GAME_BONUS, STREAK_GAME_INTERVAL
from flashdeck.domain.exceptions import GameStateError
from flashdeck.domain.models import DailyStats, GameHistoryEntry
from flashdeck.domain.ports import CardStorage

from .game_store import GameStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyBonusConfig:
    first_game_bonus: int = FIRST_GAME_BONUS
    streak_game_bonus: int = STREAK_GAME_BONUS
    streak_game_interval: int = STREAK_GAME_INTERVAL


@dataclass(frozen=True)
class DailyGames:
    is_first_game: bool
    games_played_today: int


@dataclass(frozen=True)
class TransferResult:
    """Outcome of the game-over step."""

    entry: GameHistoryEntry
    bonus_points: int
    total_points: int
    daily: DailyGames


def increment_daily_games(storage: CardStorage, today: date) -> DailyGames:
    """
    Count one more game for today, starting over on a new day.
    """
    today_iso = today.isoformat()
    daily = storage.load_daily_stats() or DailyStats(date=today_iso)

    if daily.date != today_iso:
        daily = DailyStats(date=today_iso)

    is_first_game = daily.games_played == 0
    daily = DailyStats(date=today_iso, games_played=daily.games_played + 1)
    storage.save_daily_stats(daily)

    return DailyGames(is_first_game=is_first_game, games_played_today=daily.games_played)


def daily_bonus(daily: DailyGames, config: DailyBonusConfig = DailyBonusConfig()) -> int:
    """
    Bonus for the first game of the day and for every Nth game of the day.
    """
    bonus = 0
    if daily.is_first_game:
        bonus += config.first_game_bonus
    if daily.games_played_today > 0 and daily.games_played_today % config.streak_game_interval == 0:
        bonus += config.streak_game_bonus
    return bonus


def transfer_game_results_with_bonuses(
    store: GameStore,
    entry: GameHistoryEntry,
    config: DailyBonusConfig = DailyBonusConfig(),
) -> TransferResult:
    """
    Persist a finished session with its daily bonuses.

    The waiting result is consumed, so each finished game is counted once.

    Args:
        store: The game store whose session was just finished.
        entry: The entry returned by ``GameStore.finish_game``.
        config: Bonus amounts.

    Raises:
        GameStateError: No finished game result is waiting in session storage.
    """
    result = store.session_storage.load_result()
    if result is None:
        raise GameStateError("No game result found in session storage")

    daily = increment_daily_games(store.storage, store.clock().date())
    bonus_points = daily_bonus(daily, config)
    final_points = result.points + bonus_points

    final_entry = replace(entry, points=final_points, correct_answers=result.correct_answers)
    store.save_game_results(final_entry)
    store.session_storage.clear_result()

    if bonus_points:
        logger.info(
            f"[flow] Daily bonus +{bonus_points} (game {daily.games_played_today} today)"
        )
    return TransferResult(
        entry=final_entry,
        bonus_points=bonus_points,
        total_points=final_points,
        daily=daily,
    )
