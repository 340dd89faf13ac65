"""
Domain models for the flashcard engine.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from .constants import DEFAULT_TIME, MAX_LEVEL, MAX_TIME, MIN_LEVEL, MIN_TIME


class AnswerResult(str, Enum):
    """Result of evaluating a user's answer."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    CLOSE = "close"


class Focus(str, Enum):
    """Round-selection strategy."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    SLOW = "slow"


class SessionMode(str, Enum):
    """Controls end-of-session semantics."""

    STANDARD = "standard"
    ENDLESS_LEVEL1 = "endless-level1"
    ENDLESS_LEVEL5 = "endless-level5"
    THREE_ROUNDS = "3-rounds"


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def clamp_time(seconds: float) -> float:
    return max(MIN_TIME, min(MAX_TIME, float(seconds)))


@dataclass
class Card:
    """
    A unit of learning content.

    Attributes:
        key: Identity of the card (question, word or vocabulary item).
        answer: Expected answer; opaque to the engine.
        level: Mastery tier, always within [MIN_LEVEL, MAX_LEVEL].
        time: Best answer latency in seconds for apps with a single timed mode.
        times: Best answer latency per mode for apps that track several.
    """

    key: str
    answer: str = ""
    level: int = MIN_LEVEL
    time: float = DEFAULT_TIME
    times: dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        self.level = clamp_level(self.level)
        self.time = clamp_time(self.time)
        self.times = {mode: clamp_time(t) for mode, t in self.times.items()}

    def time_for(self, time_field: str | None) -> float:
        """
        Recorded time for a time field.

        ``None`` means the mode has no time of its own; the fastest tracked
        time is used instead.
        """
        if time_field is None:
            return self.min_time()
        if time_field == "time":
            return self.time
        return self.times.get(time_field, DEFAULT_TIME)

    def min_time(self) -> float:
        if self.times:
            return min(self.times.values())
        return self.time

    def with_level(self, level: int) -> "Card":
        return replace(self, level=level, times=dict(self.times))

    def with_time(self, time_field: str, seconds: float) -> "Card":
        if time_field == "time":
            return replace(self, time=seconds, times=dict(self.times))
        times = dict(self.times)
        times[time_field] = seconds
        return replace(self, times=times)

    def reset_progress(self) -> "Card":
        """Level back to MIN_LEVEL and every time back to MAX_TIME."""
        return replace(
            self,
            level=MIN_LEVEL,
            time=MAX_TIME,
            times={mode: MAX_TIME for mode in self.times},
        )


@dataclass
class Deck:
    """Named ordered collection of cards. Names are unique per collection."""

    name: str
    cards: list[Card] = field(default_factory=list)


@dataclass(frozen=True)
class GameSettings:
    """Per-session configuration; immutable for the duration of a session."""

    mode: str
    focus: Focus = Focus.WEAK
    language: str | None = None
    deck: str | None = None
    session_mode: SessionMode = SessionMode.STANDARD


@dataclass(frozen=True)
class PointsBreakdown:
    """Itemized components summing to the points for one answer."""

    level_points: int = 0
    difficulty_points: int = 0
    mode_multiplier: int = 1
    points_before_bonus: int = 0
    close_adjustment: int = 0
    language_bonus: int = 0
    time_bonus: int = 0
    total_points: int = 0

    @classmethod
    def zero(cls) -> "PointsBreakdown":
        return cls()


@dataclass(frozen=True)
class GameHistoryEntry:
    """Written once per completed session. History is append-only."""

    date: str
    points: int
    correct_answers: int
    settings: GameSettings
    total_cards: int = 0


@dataclass
class GameStats:
    """Cumulative aggregate, updated additively and never recomputed from history."""

    games_played: int = 0
    points: int = 0
    correct_answers: int = 0

    def record(self, points: int, correct_answers: int) -> None:
        self.games_played += 1
        self.points += points
        self.correct_answers += correct_answers


@dataclass(frozen=True)
class GameResult:
    """Result of the last game, handed from the game to the game-over step."""

    points: int
    correct_answers: int
    total_cards: int


@dataclass
class SessionSnapshot:
    """In-progress session kept for reload recovery."""

    game_cards: list[Card]
    current_card_index: int
    points: int
    correct_answers_count: int
    settings: GameSettings


@dataclass
class DailyStats:
    date: str
    games_played: int = 0
