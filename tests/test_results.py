"""Tests for ValidationResult and answer formatting."""

import dataclasses

import pytest

from homeworkcheck.engine.formatting import format_user_answer
from homeworkcheck.engine.questions import parse_question
from homeworkcheck.engine.results import ValidationResult


class TestValidationResult:
    def test_to_dict_minimal(self):
        result = ValidationResult(is_correct=True, normalized_user_answer="cat", normalized_correct_answer="cat")
        assert result.to_dict() == {
            "isCorrect": True,
            "normalizedUserAnswer": "cat",
            "normalizedCorrectAnswer": "cat",
        }

    def test_to_dict_full(self):
        result = ValidationResult(
            is_correct=False,
            normalized_user_answer="a, c, b",
            normalized_correct_answer="A, B, C",
            partial_score=0.0,
            feedback="1/3 items in correct position",
        )
        d = result.to_dict()
        assert d["partialScore"] == 0.0
        assert d["feedback"] == "1/3 items in correct position"

    def test_immutable(self):
        result = ValidationResult(is_correct=True, normalized_user_answer="", normalized_correct_answer="")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.is_correct = False


class TestFormatUserAnswer:
    def test_matching(self, matching_record):
        question = parse_question(matching_record)
        assert format_user_answer(question, {"1": "B", "2": "A"}) == "1-B, 2-A"

    def test_ordering(self):
        question = parse_question({"type": "ordering", "text": "Order.", "correct": "A, B"})
        assert format_user_answer(question, ["B", "A"]) == "B, A"

    def test_categorization(self, categorization_record):
        question = parse_question(categorization_record)
        answer = {"Nouns": ["cat", "dog"], "Verbs": ["run"]}
        assert format_user_answer(question, answer) == "Nouns: cat, dog | Verbs: run"

    def test_fill_blanks_multi(self):
        question = parse_question({"type": "fill_blanks_multi", "text": "Fill.", "correct": "x"})
        assert format_user_answer(question, {"1": "cat", "2": "sat"}) == "(1) cat (2) sat"

    def test_plain(self, fill_blank_record):
        question = parse_question(fill_blank_record)
        assert format_user_answer(question, "jumped") == "jumped"
        assert format_user_answer(question, True) == "True"
