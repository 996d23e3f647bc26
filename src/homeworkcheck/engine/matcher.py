"""Typo-tolerant answer matching based on Levenshtein distance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from homeworkcheck.config.settings import DEFAULT_SETTINGS, Settings
from homeworkcheck.engine.normalizer import normalize_answer
from homeworkcheck.engine.results import ValidationResult


@dataclass(frozen=True)
class FuzzyMatch:
    match: bool
    distance: int
    feedback: Optional[str] = None


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit-cost insertion, deletion and substitution."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def allowed_distance(normalized_correct: str, max_distance: int, settings: Settings) -> int:
    """Short answers only tolerate a single typo; one letter can make a different word."""
    tolerance = settings.tolerance
    if len(normalized_correct) <= tolerance.short_answer_length:
        return min(max_distance, tolerance.short_answer_max_distance)
    return max_distance


def fuzzy_match(
    user_answer: str,
    correct_answer: str,
    max_distance: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> FuzzyMatch:
    """Compare two answers allowing small spelling mistakes.

    A non-exact match carries feedback showing the proper spelling of
    ``correct_answer`` as written (not normalized).
    """
    settings = settings or DEFAULT_SETTINGS
    if max_distance is None:
        max_distance = settings.tolerance.default_max_distance

    normalized_user = normalize_answer(user_answer)
    normalized_correct = normalize_answer(correct_answer)
    if normalized_user == normalized_correct:
        return FuzzyMatch(match=True, distance=0)

    distance = levenshtein_distance(normalized_user, normalized_correct)
    if distance <= allowed_distance(normalized_correct, max_distance, settings):
        return FuzzyMatch(
            match=True,
            distance=distance,
            feedback=f'Correct! (Spelling: "{correct_answer}")',
        )
    return FuzzyMatch(match=False, distance=distance)


def matches_any_acceptable(
    user_answer: str,
    acceptable_answers: Sequence[str],
    max_distance: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> ValidationResult:
    """Check a user answer against each acceptable answer in order.

    The first match wins. With no match, the first acceptable answer is
    reported as the reference.
    """
    normalized_user = normalize_answer(user_answer)
    for acceptable in acceptable_answers:
        result = fuzzy_match(user_answer, acceptable, max_distance, settings)
        if result.match:
            return ValidationResult(
                is_correct=True,
                feedback=result.feedback,
                normalized_user_answer=normalized_user,
                normalized_correct_answer=normalize_answer(acceptable),
            )

    reference = acceptable_answers[0] if acceptable_answers else ""
    return ValidationResult(
        is_correct=False,
        normalized_user_answer=normalized_user,
        normalized_correct_answer=normalize_answer(reference),
    )
