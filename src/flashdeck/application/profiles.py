"""
App profiles.

Each flashcard game (vocabulary, spelling, multiplication) shares the same
engine and differs only in the tables and hooks described by a GameProfile.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from flashdeck.domain.models import AnswerResult, Card, Deck, GameSettings

from .answers import validate_typing_answer


def card_key(card: Card) -> str:
    return card.key


@dataclass(frozen=True)
class GameProfile:
    """
    Tables and hooks specializing the engine for one app.

    Attributes:
        name: Profile identifier, also used as storage prefix.
        modes: Game modes offered by the app; the first is the default.
        mode_multipliers: Points multiplier per mode (missing modes use 1).
        time_fields: Card time field tracked per timed mode.
        language_bonuses: Bonus per language direction for correct answers.
        difficulty_points: Extra base points for an answer (0 if unused).
        question_for: Text shown to the player for a card.
        answer_for: Expected answer for a card.
        check_answer: Turns a raw user answer into an AnswerResult.
        default_decks: Factory for the decks seeded on first use.
        key_fn: Stable identity of a card.
    """

    name: str
    modes: tuple[str, ...]
    default_decks: Callable[[], list[Deck]]
    mode_multipliers: dict[str, int] = field(default_factory=dict)
    time_fields: dict[str, str] = field(default_factory=dict)
    languages: tuple[str, ...] = ()
    language_bonuses: dict[str, int] = field(default_factory=dict)
    difficulty_points: Callable[[Card, AnswerResult], int] = lambda card, result: 0
    question_for: Callable[[Card, GameSettings], str] = lambda card, settings: card.key
    answer_for: Callable[[Card, GameSettings], str] = lambda card, settings: card.answer
    check_answer: Callable[[str, Card, GameSettings], AnswerResult] = (
        lambda given, card, settings: validate_typing_answer(given, card.answer, allow_close=False)
    )
    key_fn: Callable[[Card], str] = card_key

    @property
    def default_mode(self) -> str:
        return self.modes[0]

    def multiplier(self, mode: str) -> int:
        return self.mode_multipliers.get(mode, 1)

    def time_field(self, mode: str) -> str | None:
        """Time field the mode records, or None for untimed modes."""
        return self.time_fields.get(mode)

    def language_bonus(self, language: str | None) -> int:
        if language is None:
            return 0
        return self.language_bonuses.get(language, 0)

    def time_of(self, mode: str | None) -> Callable[[Card], float]:
        """Time extractor used for slow-focus sorting."""
        time_field = self.time_field(mode) if mode else None
        return lambda card: card.time_for(time_field)


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

VOCABULARY_INITIAL_CARDS = [
    ("Where", "Wo", 1),
    ("Who", "Wer", 1),
    ("What", "Was", 2),
    ("Why", "Warum", 2),
    ("When", "Wann", 3),
    ("How", "Wie", 3),
    ("Which", "Welche/Welcher/Welches", 4),
    ("From where", "Woher", 4),
    ("Where to", "Wohin", 5),
    ("How much", "Wie viel", 5),
]


def _vocabulary_decks() -> list[Deck]:
    cards = [
        Card(key=voc, answer=de, level=level, times={"blind": 60, "typing": 60})
        for voc, de, level in VOCABULARY_INITIAL_CARDS
    ]
    return [Deck(name="en", cards=cards)]


def _vocabulary_question(card: Card, settings: GameSettings) -> str:
    return card.answer if settings.language == "de-voc" else card.key


def _vocabulary_answer(card: Card, settings: GameSettings) -> str:
    return card.key if settings.language == "de-voc" else card.answer


def _vocabulary_check(given: str, card: Card, settings: GameSettings) -> AnswerResult:
    return validate_typing_answer(
        given,
        _vocabulary_answer(card, settings),
        case_sensitive=False,
        allow_close=settings.mode == "typing",
    )


VOCABULARY = GameProfile(
    name="vocabulary",
    modes=("multiple-choice", "blind", "typing"),
    default_decks=_vocabulary_decks,
    mode_multipliers={"multiple-choice": 1, "blind": 2, "typing": 4},
    time_fields={"blind": "blind", "typing": "typing"},
    languages=("voc-de", "de-voc"),
    language_bonuses={"de-voc": 1},
    question_for=_vocabulary_question,
    answer_for=_vocabulary_answer,
    check_answer=_vocabulary_check,
)


# ---------------------------------------------------------------------------
# Spelling
# ---------------------------------------------------------------------------

SPELLING_INITIAL_WORDS = ["Haus", "Schule", "Wald", "Mathe", "Deutsch", "Sport", "Musik"]


def _spelling_decks() -> list[Deck]:
    return [
        Deck(
            name="Lernwörter_1",
            cards=[Card(key=word, answer=word) for word in SPELLING_INITIAL_WORDS],
        )
    ]


SPELLING = GameProfile(
    name="spelling",
    modes=("copy", "hidden"),
    default_decks=_spelling_decks,
    mode_multipliers={"copy": 1, "hidden": 2},
    time_fields={"hidden": "time"},
    answer_for=lambda card, settings: card.key,
    check_answer=lambda given, card, settings: validate_typing_answer(given, card.key),
)


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------


def _factors(card: Card) -> tuple[int, int]:
    x, _, y = card.key.partition("x")
    return int(x), int(y)


def _multiplication_difficulty(card: Card, result: AnswerResult) -> int:
    # The smaller factor, e.g. 3 for 7x3
    if result is not AnswerResult.CORRECT:
        return 0
    return min(_factors(card))


def _multiplication_decks() -> list[Deck]:
    cards = [
        Card(key=f"{x}x{y}", answer=str(x * y))
        for y in range(3, 10)
        for x in range(y, 10)
    ]
    return [Deck(name="1x1", cards=cards)]


def _multiplication_check(given: str, card: Card, settings: GameSettings) -> AnswerResult:
    try:
        value = int(given.strip())
    except ValueError:
        return AnswerResult.INCORRECT
    return AnswerResult.CORRECT if str(value) == card.answer else AnswerResult.INCORRECT


MULTIPLICATION = GameProfile(
    name="multiplication",
    modes=("default",),
    default_decks=_multiplication_decks,
    time_fields={"default": "time"},
    difficulty_points=_multiplication_difficulty,
    question_for=lambda card, settings: card.key.replace("x", " × "),
    check_answer=_multiplication_check,
)


PROFILES: dict[str, GameProfile] = {
    profile.name: profile for profile in (VOCABULARY, SPELLING, MULTIPLICATION)
}


def get_profile(name: str) -> GameProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown app profile '{name}'. Choose from: {', '.join(PROFILES)}") from None
