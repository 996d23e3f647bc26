"""Per-question-type answer validators.

Every validator takes an already shape-checked answer (see
``homeworkcheck.engine.dispatcher``) and returns a ``ValidationResult``.
Matching, ordering and categorization compare normalized text exactly; only
free-text answers get typo tolerance.
"""

from __future__ import annotations

import json
import logging
from typing import Mapping, Optional, Sequence, Union

from homeworkcheck.config.settings import Settings
from homeworkcheck.engine.matcher import fuzzy_match, matches_any_acceptable
from homeworkcheck.engine.normalizer import normalize_answer, word_count
from homeworkcheck.engine.questions import (
    CategorizationQuestion,
    CorrectionQuestion,
    FillBlankQuestion,
    FillBlanksMultiQuestion,
    MatchingQuestion,
    MultipleChoiceQuestion,
    OrderingQuestion,
    TrueFalseQuestion,
    UnknownQuestion,
    WritingSentenceQuestion,
    WritingShortQuestion,
)
from homeworkcheck.engine.results import ValidationResult

logger = logging.getLogger(__name__)


def _normalized_map(answer: Mapping[str, Union[str, Sequence[str]]]) -> str:
    normalized = {
        key: normalize_answer(value) if isinstance(value, str) else [normalize_answer(v) for v in value]
        for key, value in answer.items()
    }
    return json.dumps(normalized, ensure_ascii=False)


def _nothing_to_grade(question_type: str, what: str, normalized_user: str, correct: str) -> ValidationResult:
    """Questions with an empty answer key are never correct."""
    logger.warning("%s question has no %s to grade against", question_type, what)
    return ValidationResult(
        is_correct=False,
        partial_score=0.0,
        feedback=f"This question has no {what} to check against.",
        normalized_user_answer=normalized_user,
        normalized_correct_answer=correct,
    )


def validate_multiple_choice(
    question: MultipleChoiceQuestion, answer: str, settings: Settings
) -> ValidationResult:
    normalized_user = normalize_answer(answer)
    normalized_correct = normalize_answer(question.correct)
    return ValidationResult(
        is_correct=normalized_user == normalized_correct,
        normalized_user_answer=normalized_user,
        normalized_correct_answer=normalized_correct,
    )


def validate_fill_blank(
    question: FillBlankQuestion, answer: str, settings: Settings
) -> ValidationResult:
    acceptable = [question.correct, *question.acceptable_answers]
    return matches_any_acceptable(answer, acceptable, settings=settings)


def validate_writing_short(
    question: WritingShortQuestion, answer: str, settings: Settings
) -> ValidationResult:
    if question.max_words and word_count(answer) > question.max_words:
        return ValidationResult(
            is_correct=False,
            feedback=f"Too long! Maximum {question.max_words} words.",
            normalized_user_answer=normalize_answer(answer),
            normalized_correct_answer=normalize_answer(question.correct),
        )

    acceptable = [question.correct, *question.acceptable_answers]
    return matches_any_acceptable(answer, acceptable, settings=settings)


def validate_true_false(
    question: TrueFalseQuestion, answer: Union[str, bool], settings: Settings
) -> ValidationResult:
    if isinstance(answer, bool):
        user_value = answer
    else:
        user_value = answer.strip().lower() == "true"
    return ValidationResult(
        is_correct=user_value == question.correct_value,
        normalized_user_answer=str(user_value).lower(),
        normalized_correct_answer=str(question.correct_value).lower(),
    )


def validate_matching(
    question: MatchingQuestion, answer: Mapping[str, str], settings: Settings
) -> ValidationResult:
    """Partial credit per correctly connected pair."""
    normalized_user = _normalized_map(answer)
    total = len(question.correct_pairs)
    if total == 0:
        return _nothing_to_grade(question.type, "pairs", normalized_user, question.correct)

    matched = 0
    for pair in question.correct_pairs:
        user_right = answer.get(pair.left)
        if user_right and normalize_answer(user_right) == normalize_answer(pair.right):
            matched += 1

    is_correct = matched == total
    return ValidationResult(
        is_correct=is_correct,
        partial_score=matched / total,
        feedback=None if is_correct else f"{matched}/{total} pairs correct",
        normalized_user_answer=normalized_user,
        normalized_correct_answer=question.correct,
    )


def validate_ordering(
    question: OrderingQuestion, answer: Sequence[str], settings: Settings
) -> ValidationResult:
    """Partial credit per item in the right position.

    Comparison is strictly positional: [A, C, B, D] against [A, B, C, D]
    scores 2 of 4.
    """
    normalized_user = ", ".join(normalize_answer(item) for item in answer)
    total = len(question.correct_order)
    if total == 0:
        return _nothing_to_grade(question.type, "correct order", normalized_user, question.correct)

    in_place = sum(
        1
        for i, expected in enumerate(question.correct_order)
        if i < len(answer) and normalize_answer(answer[i]) == normalize_answer(expected)
    )

    is_correct = in_place == total
    return ValidationResult(
        is_correct=is_correct,
        partial_score=in_place / total,
        feedback=None if is_correct else f"{in_place}/{total} items in correct position",
        normalized_user_answer=normalized_user,
        normalized_correct_answer=question.correct,
    )


def validate_fill_blanks_multi(
    question: FillBlanksMultiQuestion, answer: Mapping[str, str], settings: Settings
) -> ValidationResult:
    normalized_user = _normalized_map(answer)
    total = len(question.blanks)
    if total == 0:
        return _nothing_to_grade(question.type, "blanks", normalized_user, question.correct)

    filled = 0
    notes: list[str] = []
    for blank in question.blanks:
        user_answer = answer.get(blank.id)
        if not user_answer:
            continue
        result = matches_any_acceptable(
            user_answer,
            blank.acceptable_answers,
            max_distance=settings.tolerance.blank_max_distance,
            settings=settings,
        )
        if result.is_correct:
            filled += 1
            if result.feedback:
                notes.append(f"{blank.id}: {result.feedback}")

    is_correct = filled == total
    if not is_correct:
        notes.append(f"{filled}/{total} blanks correct")
    return ValidationResult(
        is_correct=is_correct,
        partial_score=filled / total,
        feedback="; ".join(notes) or None,
        normalized_user_answer=normalized_user,
        normalized_correct_answer=question.correct,
    )


def validate_writing_sentence(
    question: WritingSentenceQuestion, answer: str, settings: Settings
) -> ValidationResult:
    """Lenient check of a free sentence: length gates, then key words."""
    writing = settings.writing
    normalized_user = normalize_answer(answer)
    words = word_count(answer)

    def result(is_correct: bool, feedback: Optional[str], partial_score: Optional[float] = None) -> ValidationResult:
        return ValidationResult(
            is_correct=is_correct,
            partial_score=partial_score,
            feedback=feedback,
            normalized_user_answer=normalized_user,
            normalized_correct_answer=question.model_answer,
        )

    if question.min_words and words < question.min_words:
        return result(False, f"Too short! Write at least {question.min_words} words.")
    if question.max_words and words > question.max_words:
        return result(False, f"Too long! Maximum {question.max_words} words.")

    key_elements = [normalize_answer(e) for e in question.key_elements]
    key_elements = [e for e in key_elements if e]
    if not key_elements:
        return result(
            words >= writing.min_sentence_words,
            f'Model answer: "{question.model_answer}"',
        )

    found = sum(1 for element in key_elements if element in normalized_user)
    score = found / len(key_elements)

    if score < writing.key_element_fail_ratio:
        return result(
            False,
            f'Missing key words. Check the model answer: "{question.model_answer}"',
            score,
        )
    if score >= writing.key_element_pass_ratio:
        return result(True, None, score)
    return result(
        False,
        f'Good, but missing some elements. Model: "{question.model_answer}"',
        score,
    )


def validate_correction(
    question: CorrectionQuestion, answer: str, settings: Settings
) -> ValidationResult:
    normalized_user = normalize_answer(answer)
    normalized_correct = normalize_answer(question.corrected_text)

    whole = fuzzy_match(
        answer,
        question.corrected_text,
        max_distance=settings.tolerance.correction_max_distance,
        settings=settings,
    )
    if whole.match:
        return ValidationResult(
            is_correct=True,
            feedback=whole.feedback,
            normalized_user_answer=normalized_user,
            normalized_correct_answer=normalized_correct,
        )

    total = len(question.errors)
    found = sum(
        1 for error in question.errors
        if normalize_answer(error.correction) in normalized_user
    )
    if found:
        feedback = f"Found {found}/{total} corrections"
    else:
        feedback = f'Correct answer: "{question.corrected_text}"'
    return ValidationResult(
        is_correct=False,
        partial_score=found / total if total else 0.0,
        feedback=feedback,
        normalized_user_answer=normalized_user,
        normalized_correct_answer=normalized_correct,
    )


def validate_categorization(
    question: CategorizationQuestion, answer: Mapping[str, Sequence[str]], settings: Settings
) -> ValidationResult:
    """Partial credit per item placed in its category."""
    normalized_user = _normalized_map(answer)
    by_name = {normalize_answer(name): items for name, items in answer.items()}

    placed = 0
    total = 0
    for category in question.categories:
        user_items = answer.get(category.name)
        if user_items is None:
            user_items = by_name.get(normalize_answer(category.name), [])
        user_normalized = {normalize_answer(item) for item in user_items}

        total += len(category.correct_items)
        placed += sum(1 for item in category.correct_items if normalize_answer(item) in user_normalized)

    if total == 0:
        return _nothing_to_grade(question.type, "categorized items", normalized_user, question.correct)

    is_correct = placed == total
    return ValidationResult(
        is_correct=is_correct,
        partial_score=placed / total,
        feedback=None if is_correct else f"{placed}/{total} items in correct category",
        normalized_user_answer=normalized_user,
        normalized_correct_answer=question.correct,
    )


def validate_unknown(question: UnknownQuestion, answer: object, settings: Settings) -> ValidationResult:
    """Plain text comparison for question types the engine does not know."""
    normalized_user = normalize_answer(str(answer))
    normalized_correct = normalize_answer(question.correct)
    return ValidationResult(
        is_correct=normalized_user == normalized_correct,
        feedback=f"Checked as plain text (unrecognized question type '{question.type}').",
        normalized_user_answer=normalized_user,
        normalized_correct_answer=normalized_correct,
    )
