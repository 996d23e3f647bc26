"""Validation result returned by every validator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationResult:
    is_correct: bool
    normalized_user_answer: str
    normalized_correct_answer: str
    partial_score: Optional[float] = None  # 0.0-1.0, partial-credit types only
    feedback: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys the scoring and UI layers expect."""
        d = {
            "isCorrect": self.is_correct,
            "normalizedUserAnswer": self.normalized_user_answer,
            "normalizedCorrectAnswer": self.normalized_correct_answer,
        }
        if self.partial_score is not None:
            d["partialScore"] = self.partial_score
        if self.feedback is not None:
            d["feedback"] = self.feedback
        return d
