"""
Answer validation and quiz scoring.

Both are pure and fail closed: malformed input yields ``False`` / 0, never an
exception. A question is either fully right or fully wrong; there is no
partial credit.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from learning.percent import percentage
from learning.types import QuestionType, Quiz, QuizQuestion


def _as_id_set(answer: Any) -> set[str] | None:
    # Only plain collections; a dict would otherwise be read as its keys.
    if not isinstance(answer, (list, tuple, set, frozenset)):
        return None
    ids = set()
    for item in answer:
        if not isinstance(item, str):
            return None
        ids.add(item)
    return ids


def validate_answer(question: QuizQuestion, answer: Any) -> bool:
    """
    single_choice: the option with the submitted id must be marked correct.
    multiple_choice: the submitted ids must equal the set of correct ids exactly.
    """
    if question is None or not question.options:
        return False

    if question.type == QuestionType.SINGLE_CHOICE.value:
        if not isinstance(answer, str):
            return False
        for option in question.options:
            if option.id == answer:
                return option.is_correct
        return False

    if question.type == QuestionType.MULTIPLE_CHOICE.value:
        selected = _as_id_set(answer)
        if selected is None:
            return False
        return selected == question.correct_option_ids()

    return False


@dataclass
class QuizGrade:
    score: int
    passed: bool
    correct_count: int
    total_questions: int
    results: dict[str, bool] = field(default_factory=dict)


def grade_quiz(quiz: Quiz, answers: Mapping[str, Any] | None) -> QuizGrade:
    """Score every question of the quiz; unanswered questions count as wrong."""
    answers = answers or {}
    results: dict[str, bool] = {}
    for question in quiz.questions:
        answer = answers.get(question.id)
        results[question.id] = answer is not None and validate_answer(question, answer)
    correct = sum(1 for ok in results.values() if ok)
    total = len(quiz.questions)
    score = percentage(correct, total)
    return QuizGrade(
        score=score,
        passed=is_passed(score, quiz.passing_score),
        correct_count=correct,
        total_questions=total,
        results=results,
    )


def calculate_score(quiz: Quiz, answers: Mapping[str, Any] | None) -> int:
    return grade_quiz(quiz, answers).score


def is_passed(score: int, passing_score: int) -> bool:
    # Equality passes.
    return score >= passing_score


def quiz_navigation_progress(current_index: int, total_questions: int) -> int:
    """
    Progress bar while moving through a quiz: 0 on the first question, 100 on
    the last one.
    """
    if total_questions <= 1:
        return 0
    index = min(max(current_index, 0), total_questions - 1)
    return percentage(index, total_questions - 1)
