"""Answer checking: exact, close (small edit distance) or wrong."""

from flashdeck.domain.constants import LEVENSHTEIN_THRESHOLD
from flashdeck.domain.models import AnswerResult


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions or substitutions
    turning ``a`` into ``b``.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def validate_typing_answer(
    user_input: str,
    expected: str,
    case_sensitive: bool = True,
    allow_close: bool = True,
    threshold: int = LEVENSHTEIN_THRESHOLD,
) -> AnswerResult:
    """
    Compare a typed answer against the expected one.

    Surrounding whitespace is ignored. A non-exact answer within
    ``threshold`` edits counts as close when ``allow_close`` is set.
    """
    given = user_input.strip()
    target = expected.strip()
    if not case_sensitive:
        given = given.lower()
        target = target.lower()

    if given == target:
        return AnswerResult.CORRECT

    if allow_close and given and levenshtein_distance(given, target) <= threshold:
        return AnswerResult.CLOSE

    return AnswerResult.INCORRECT
