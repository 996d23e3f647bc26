"""Readable rendering of learner answers for review screens."""

from __future__ import annotations

from typing import Any

from homeworkcheck.engine.questions import AnyQuestion


def format_user_answer(question: AnyQuestion, answer: Any) -> str:
    if question.type == "matching":
        return ", ".join(f"{left}-{right}" for left, right in answer.items())
    if question.type == "ordering":
        return ", ".join(answer)
    if question.type == "categorization":
        return " | ".join(f"{name}: {', '.join(items)}" for name, items in answer.items())
    if question.type == "fill_blanks_multi":
        return " ".join(f"({blank_id}) {value}" for blank_id, value in answer.items())
    return str(answer)
