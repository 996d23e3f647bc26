"""Exceptions raised for caller mistakes (never for wrong learner answers)."""

from __future__ import annotations


class HomeworkCheckError(Exception):
    """Base class for all engine errors."""


class AnswerShapeError(HomeworkCheckError, TypeError):
    """The answer value does not have the shape the question type expects."""

    def __init__(self, question_type: str, expected: str, answer: object):
        self.question_type = question_type
        self.expected = expected
        self.answer = answer
        super().__init__(
            f"{question_type} question expects {expected}, "
            f"got {type(answer).__name__}: {answer!r}"
        )


class MalformedQuestionError(HomeworkCheckError, ValueError):
    """Question data could not be parsed into its declared type."""


class CompositeQuestionError(HomeworkCheckError):
    """A reading comprehension question was validated as a single answer."""

    def __init__(self) -> None:
        super().__init__(
            "reading_comprehension questions have no single answer; "
            "validate each sub-question with validate_sub_questions()"
        )
