"""Question records extracted from a photographed worksheet.

Each question shape is a frozen pydantic model tagged by its ``type`` field.
Records arrive from the extraction pipeline with camelCase keys
(``acceptableAnswers``, ``correctValue``, ``pageRef``); the models accept
those as well as the snake_case field names.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from homeworkcheck.engine.errors import MalformedQuestionError

logger = logging.getLogger(__name__)


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
        protected_namespaces=(),
    )


class _QuestionBase(_Record):
    text: str
    correct: str  # paper-ready answer, e.g. "1-B, 2-A" or "C, A, D, B"
    original_number: Optional[str] = None  # "1", "a)", "Q1"
    explanation: Optional[str] = None
    hint: Optional[str] = None
    page_ref: Optional[int] = None


class ColumnItem(_Record):
    id: str
    text: str


class MatchPair(_Record):
    left: str
    right: str


class Blank(_Record):
    id: str
    acceptable_answers: tuple[str, ...] = ()


class TextError(_Record):
    original: str
    correction: str
    position: Optional[int] = None


class Category(_Record):
    name: str
    correct_items: tuple[str, ...] = ()


class MultipleChoiceQuestion(_QuestionBase):
    type: Literal["multiple_choice"] = "multiple_choice"
    options: tuple[str, ...] = ()


class FillBlankQuestion(_QuestionBase):
    type: Literal["fill_blank"] = "fill_blank"
    sentence: str = ""  # "___" marks the blank
    options: tuple[str, ...] = ()  # word bank, only when printed on the page
    acceptable_answers: tuple[str, ...] = ()


class WritingShortQuestion(_QuestionBase):
    type: Literal["writing_short"] = "writing_short"
    acceptable_answers: tuple[str, ...] = ()
    max_words: Optional[int] = None


class TrueFalseQuestion(_QuestionBase):
    type: Literal["true_false"] = "true_false"
    correct_value: bool


class MatchingQuestion(_QuestionBase):
    type: Literal["matching"] = "matching"
    left_column: tuple[ColumnItem, ...] = ()
    right_column: tuple[ColumnItem, ...] = ()
    correct_pairs: tuple[MatchPair, ...] = ()


class OrderingQuestion(_QuestionBase):
    type: Literal["ordering"] = "ordering"
    items: tuple[str, ...] = ()
    correct_order: tuple[str, ...] = ()


class FillBlanksMultiQuestion(_QuestionBase):
    type: Literal["fill_blanks_multi"] = "fill_blanks_multi"
    sentence: str = ""  # "___1___", "___2___" mark the blanks
    blanks: tuple[Blank, ...] = ()
    options: tuple[str, ...] = ()


class WritingSentenceQuestion(_QuestionBase):
    type: Literal["writing_sentence"] = "writing_sentence"
    model_answer: str
    key_elements: tuple[str, ...] = ()
    min_words: Optional[int] = None
    max_words: Optional[int] = None


class CorrectionQuestion(_QuestionBase):
    type: Literal["correction"] = "correction"
    error_text: str
    corrected_text: str
    errors: tuple[TextError, ...] = ()


class CategorizationQuestion(_QuestionBase):
    type: Literal["categorization"] = "categorization"
    items: tuple[str, ...] = ()
    categories: tuple[Category, ...] = ()


SubQuestion = Annotated[
    Union[
        MultipleChoiceQuestion,
        FillBlankQuestion,
        WritingShortQuestion,
        TrueFalseQuestion,
        MatchingQuestion,
        OrderingQuestion,
        FillBlanksMultiQuestion,
        WritingSentenceQuestion,
        CorrectionQuestion,
        CategorizationQuestion,
    ],
    Field(discriminator="type"),
]


class ReadingComprehensionQuestion(_QuestionBase):
    type: Literal["reading_comprehension"] = "reading_comprehension"
    passage: str
    passage_title: Optional[str] = None
    sub_questions: tuple[SubQuestion, ...] = ()


Question = Annotated[
    Union[
        MultipleChoiceQuestion,
        FillBlankQuestion,
        WritingShortQuestion,
        TrueFalseQuestion,
        MatchingQuestion,
        OrderingQuestion,
        ReadingComprehensionQuestion,
        FillBlanksMultiQuestion,
        WritingSentenceQuestion,
        CorrectionQuestion,
        CategorizationQuestion,
    ],
    Field(discriminator="type"),
]


class UnknownQuestion(_QuestionBase):
    """A record whose type tag is not one the engine knows."""

    model_config = ConfigDict(extra="allow")

    type: str
    text: str = ""
    correct: str = ""


QUESTION_TYPES: frozenset[str] = frozenset({
    "multiple_choice",
    "fill_blank",
    "writing_short",
    "true_false",
    "matching",
    "ordering",
    "reading_comprehension",
    "fill_blanks_multi",
    "writing_sentence",
    "correction",
    "categorization",
})

AnyQuestion = Union[Question, UnknownQuestion]

_QUESTION_ADAPTER: TypeAdapter = TypeAdapter(Question)


def parse_question(data: Mapping[str, Any]) -> AnyQuestion:
    """Build a question model from an extracted record."""
    if isinstance(data, _QuestionBase):
        return data
    if not isinstance(data, Mapping):
        logger.warning("Question record is a %s, not a mapping", type(data).__name__)
        raise MalformedQuestionError(
            f"Question record must be a mapping, got {type(data).__name__}"
        )

    tag = data.get("type")
    if not isinstance(tag, str) or tag not in QUESTION_TYPES:
        try:
            return UnknownQuestion.model_validate({**data, "type": str(tag)})
        except ValidationError as e:
            logger.warning("Unparseable question record with type %r", tag)
            raise MalformedQuestionError(f"Invalid question record: {e}") from e

    try:
        return _QUESTION_ADAPTER.validate_python(dict(data))
    except ValidationError as e:
        logger.warning("Unparseable %s question record: %d errors", tag, e.error_count())
        raise MalformedQuestionError(f"Invalid {tag} question: {e}") from e


def parse_questions(records: Sequence[Mapping[str, Any]]) -> list[AnyQuestion]:
    return [parse_question(r) for r in records]


def requires_text_input(question: AnyQuestion) -> bool:
    """Whether the learner types the answer rather than picking a printed option."""
    if question.type in ("fill_blank", "fill_blanks_multi"):
        return not question.options
    return question.type in ("writing_short", "writing_sentence", "correction")


def has_options(question: AnyQuestion) -> bool:
    """Whether the question offers choices (options, true/false or a word bank)."""
    if question.type in ("multiple_choice", "true_false"):
        return True
    if question.type in ("fill_blank", "fill_blanks_multi"):
        return bool(question.options)
    return False
