"""
Scoring engine.

This is a pure computation module with no I/O. It turns one answered card
into an itemized PointsBreakdown.
"""

import math

from flashdeck.domain.constants import (
    CLOSE_MATCH_SCORE_PERCENTAGE,
    LEVEL_BONUS_NUMERATOR,
    MAX_TIME,
    SPEED_BONUS_POINTS,
)
from flashdeck.domain.models import AnswerResult, Card, GameSettings, PointsBreakdown

from .profiles import GameProfile


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return math.floor(value + 0.5)


def calculate_level_points(level: int) -> int:
    """
    Base points from card level. Weaker cards are worth more.

    Level 1 -> 5, level 5 -> 1.
    """
    return LEVEL_BONUS_NUMERATOR - level


def close_adjusted(points: int) -> tuple[int, int]:
    """
    Apply the close-answer penalty.

    Returns:
        (adjusted points, points deducted)
    """
    adjusted = round_half_up(points * CLOSE_MATCH_SCORE_PERCENTAGE)
    return adjusted, points - adjusted


def beats_recorded_time(
    card: Card, time_field: str | None, answer_time: float | None
) -> bool:
    if time_field is None or answer_time is None:
        return False
    if answer_time >= MAX_TIME:
        return False
    return answer_time < card.time_for(time_field)


def compute_points(
    result: AnswerResult,
    card: Card | None,
    settings: GameSettings | None,
    answer_time: float | None = None,
    profile: GameProfile | None = None,
) -> PointsBreakdown:
    """
    Compute the points breakdown for one answered card.

    Args:
        result: Outcome of the answer.
        card: The answered card, as it was before its level changes.
        settings: Settings of the running session.
        answer_time: Seconds taken; only meaningful for timed modes.
        profile: App tables (multipliers, bonuses, time fields). Without a
            profile every mode has multiplier 1 and no bonuses apply.

    Returns:
        PointsBreakdown with every intermediate value. All zero when card or
        settings are missing.
    """
    if card is None or settings is None:
        return PointsBreakdown.zero()

    result = AnswerResult(result)
    level_points = calculate_level_points(card.level)
    difficulty_points = profile.difficulty_points(card, result) if profile else 0
    mode_multiplier = profile.multiplier(settings.mode) if profile else 1

    points_before_bonus = (level_points + difficulty_points) * mode_multiplier

    earned = points_before_bonus
    close_adjustment = 0
    if result is AnswerResult.CLOSE:
        earned, close_adjustment = close_adjusted(points_before_bonus)

    language_bonus = 0
    time_bonus = 0
    if result is AnswerResult.CORRECT and profile is not None:
        language_bonus = profile.language_bonus(settings.language)
        if beats_recorded_time(card, profile.time_field(settings.mode), answer_time):
            time_bonus = SPEED_BONUS_POINTS

    # A close answer never earns the speed bonus
    if result is AnswerResult.CLOSE:
        time_bonus = 0

    if result is AnswerResult.INCORRECT:
        total_points = 0
    else:
        total_points = earned + language_bonus + time_bonus

    return PointsBreakdown(
        level_points=level_points,
        difficulty_points=difficulty_points,
        mode_multiplier=mode_multiplier,
        points_before_bonus=points_before_bonus,
        close_adjustment=close_adjustment,
        language_bonus=language_bonus,
        time_bonus=time_bonus,
        total_points=total_points,
    )


def calculate_points(
    result: AnswerResult,
    card: Card | None,
    settings: GameSettings | None,
    answer_time: float | None = None,
    profile: GameProfile | None = None,
) -> int:
    return compute_points(result, card, settings, answer_time, profile).total_points
