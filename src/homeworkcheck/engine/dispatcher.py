"""Single entry point for checking a learner's answer to a worksheet question.

``validate_answer`` is all the scoring and UI layers need; ``normalize_answer``
and ``fuzzy_match`` are re-exported for ad hoc comparisons (error tracking,
practice mode).

Reading comprehension questions have no answer of their own: callers
validate each sub-question, either by iterating ``question.sub_questions``
themselves or through ``validate_sub_questions``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from homeworkcheck.config.settings import DEFAULT_SETTINGS, Settings
from homeworkcheck.engine import validators
from homeworkcheck.engine.errors import AnswerShapeError, CompositeQuestionError, HomeworkCheckError
from homeworkcheck.engine.matcher import fuzzy_match
from homeworkcheck.engine.normalizer import normalize_answer
from homeworkcheck.engine.questions import (
    AnyQuestion,
    ReadingComprehensionQuestion,
    UnknownQuestion,
    parse_question,
)
from homeworkcheck.engine.results import ValidationResult

__all__ = [
    "Answer",
    "fuzzy_match",
    "normalize_answer",
    "validate_answer",
    "validate_sub_questions",
]

logger = logging.getLogger(__name__)

Answer = Union[str, bool, list[str], dict[str, str], dict[str, list[str]]]


# --- Answer shape checks ---

def _is_text_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def _expect_text(question_type: str, answer: Any) -> str:
    if not isinstance(answer, str):
        raise AnswerShapeError(question_type, "a string", answer)
    return answer


def _expect_text_or_bool(question_type: str, answer: Any) -> Union[str, bool]:
    if not isinstance(answer, (str, bool)):
        raise AnswerShapeError(question_type, "a string or boolean", answer)
    return answer


def _expect_text_list(question_type: str, answer: Any) -> list[str]:
    if not _is_text_list(answer):
        raise AnswerShapeError(question_type, "a list of strings", answer)
    return list(answer)


def _expect_text_map(question_type: str, answer: Any) -> dict[str, str]:
    if not isinstance(answer, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in answer.items()
    ):
        raise AnswerShapeError(question_type, "a mapping of strings to strings", answer)
    return dict(answer)


def _expect_list_map(question_type: str, answer: Any) -> dict[str, list[str]]:
    if not isinstance(answer, Mapping) or not all(
        isinstance(k, str) and _is_text_list(v) for k, v in answer.items()
    ):
        raise AnswerShapeError(question_type, "a mapping of strings to lists of strings", answer)
    return {k: list(v) for k, v in answer.items()}


_ROUTES: dict[str, tuple[Callable[[str, Any], Any], Callable[..., ValidationResult]]] = {
    "multiple_choice": (_expect_text, validators.validate_multiple_choice),
    "fill_blank": (_expect_text, validators.validate_fill_blank),
    "writing_short": (_expect_text, validators.validate_writing_short),
    "true_false": (_expect_text_or_bool, validators.validate_true_false),
    "matching": (_expect_text_map, validators.validate_matching),
    "ordering": (_expect_text_list, validators.validate_ordering),
    "fill_blanks_multi": (_expect_text_map, validators.validate_fill_blanks_multi),
    "writing_sentence": (_expect_text, validators.validate_writing_sentence),
    "correction": (_expect_text, validators.validate_correction),
    "categorization": (_expect_list_map, validators.validate_categorization),
}


def validate_answer(
    question: Union[AnyQuestion, Mapping[str, Any]],
    answer: Answer,
    settings: Optional[Settings] = None,
) -> ValidationResult:
    """Check an answer against a question.

    Raises:
        AnswerShapeError: the answer's shape does not fit the question type.
        MalformedQuestionError: a raw question record could not be parsed.
        CompositeQuestionError: the question is a reading comprehension
            question; validate its sub-questions instead.
    """
    settings = settings or DEFAULT_SETTINGS
    if isinstance(question, Mapping):
        question = parse_question(question)

    if isinstance(question, ReadingComprehensionQuestion):
        raise CompositeQuestionError()

    route = None if isinstance(question, UnknownQuestion) else _ROUTES.get(question.type)
    if route is None:
        logger.warning("No validator for question type %r, using plain comparison", question.type)
        return validators.validate_unknown(question, answer, settings)

    expect, validate = route
    checked = expect(question.type, answer)
    result = validate(question, checked, settings)
    logger.debug(
        "Validated %s answer: correct=%s partial=%s",
        question.type, result.is_correct, result.partial_score,
    )
    return result


def validate_sub_questions(
    question: Union[ReadingComprehensionQuestion, Mapping[str, Any]],
    answers: Sequence[Answer],
    settings: Optional[Settings] = None,
) -> list[ValidationResult]:
    """Validate each sub-question of a reading comprehension question.

    ``answers[i]`` answers ``question.sub_questions[i]``.
    """
    if isinstance(question, Mapping):
        question = parse_question(question)
    if not isinstance(question, ReadingComprehensionQuestion):
        raise HomeworkCheckError(
            f"validate_sub_questions expects a reading_comprehension question, got {question.type}"
        )

    expected = len(question.sub_questions)
    if not isinstance(answers, (list, tuple)) or len(answers) != expected:
        raise AnswerShapeError(question.type, f"a list of {expected} answers", answers)

    return [
        validate_answer(sub_question, answer, settings)
        for sub_question, answer in zip(question.sub_questions, answers)
    ]
