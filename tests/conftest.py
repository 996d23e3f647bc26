"""Shared fixtures for HomeworkCheck tests."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("HOMEWORKCHECK_MAX_DISTANCE", raising=False)


@pytest.fixture
def fill_blank_record():
    """A fill-blank record as the extraction pipeline emits it."""
    return {
        "type": "fill_blank",
        "text": "Fill in the missing word.",
        "originalNumber": "3",
        "correct": "jumped",
        "sentence": "The cow ___ over the moon.",
        "acceptableAnswers": ["leaped"],
        "pageRef": 1,
    }


@pytest.fixture
def matching_record():
    return {
        "type": "matching",
        "text": "Match each animal to its home.",
        "correct": "1-B, 2-A, 3-E, 4-C, 5-D",
        "leftColumn": [
            {"id": "1", "text": "bird"},
            {"id": "2", "text": "bee"},
            {"id": "3", "text": "fox"},
            {"id": "4", "text": "fish"},
            {"id": "5", "text": "horse"},
        ],
        "rightColumn": [
            {"id": "A", "text": "hive"},
            {"id": "B", "text": "nest"},
            {"id": "C", "text": "pond"},
            {"id": "D", "text": "stable"},
            {"id": "E", "text": "den"},
        ],
        "correctPairs": [
            {"left": "1", "right": "B"},
            {"left": "2", "right": "A"},
            {"left": "3", "right": "E"},
            {"left": "4", "right": "C"},
            {"left": "5", "right": "D"},
        ],
        "pageRef": 2,
    }


@pytest.fixture
def categorization_record():
    return {
        "type": "categorization",
        "text": "Sort the words into nouns and verbs.",
        "correct": "Nouns: cat, dog, tree | Verbs: run, jump, swim",
        "items": ["run", "cat", "swim", "tree", "jump", "dog"],
        "categories": [
            {"name": "Nouns", "correctItems": ["cat", "dog", "tree"]},
            {"name": "Verbs", "correctItems": ["run", "jump", "swim"]},
        ],
        "pageRef": 2,
    }


@pytest.fixture
def reading_record():
    return {
        "type": "reading_comprehension",
        "text": "Read the story and answer the questions.",
        "correct": "a) B\nb) True",
        "passage": "Sam has a red ball. He plays with it in the park.",
        "passageTitle": "Sam's Ball",
        "subQuestions": [
            {
                "type": "multiple_choice",
                "text": "What colour is the ball?",
                "correct": "red",
                "options": ["blue", "red", "green"],
            },
            {
                "type": "true_false",
                "text": "Sam plays in the park.",
                "correct": "True",
                "correctValue": True,
            },
        ],
        "pageRef": 3,
    }
