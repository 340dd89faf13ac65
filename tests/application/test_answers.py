import pytest

from flashdeck.application.answers import levenshtein_distance, validate_typing_answer
from flashdeck.domain.models import AnswerResult


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("Haus", "Haus", 0),
        ("Haus", "Hause", 1),
        ("kitten", "sitting", 3),
    ],
)
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


def test_exact_answer_ignores_surrounding_whitespace():
    assert validate_typing_answer("  Schule ", "Schule") is AnswerResult.CORRECT


def test_case_sensitivity():
    assert validate_typing_answer("schule", "Schule") is AnswerResult.CLOSE
    assert (
        validate_typing_answer("schule", "Schule", case_sensitive=False) is AnswerResult.CORRECT
    )


def test_close_within_threshold():
    assert validate_typing_answer("Shule", "Schule") is AnswerResult.CLOSE
    assert validate_typing_answer("Shle", "Schule") is AnswerResult.CLOSE
    assert validate_typing_answer("Sle", "Schule") is AnswerResult.INCORRECT


def test_close_disabled():
    assert validate_typing_answer("Shule", "Schule", allow_close=False) is AnswerResult.INCORRECT


def test_empty_answer_is_never_close():
    assert validate_typing_answer("", "Wo") is AnswerResult.INCORRECT
