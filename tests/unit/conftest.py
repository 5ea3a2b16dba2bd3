"""
Unit test fixtures. Pure functions and in-memory helpers; no DB.
"""
import pytest

from learning.samples import PYTHON_VARIABLES_ANSWER_KEY, PYTHON_VARIABLES_QUIZ
from learning.types import Quiz


@pytest.fixture
def variables_quiz() -> Quiz:
    return Quiz.model_validate(PYTHON_VARIABLES_QUIZ)


@pytest.fixture
def perfect_answers() -> dict:
    return dict(PYTHON_VARIABLES_ANSWER_KEY)


@pytest.fixture
def wrong_answers() -> dict:
    """One wrong answer for each question of the Python Variables quiz."""
    return {
        "q1": "q1_b",
        "q2": ["q2_e"],
        "q3": "q3_a",
        "q4": "q4_a",
        "q5": ["q5_a", "q5_c"],
        "q6": "q6_b",
        "q7": ["q7_b", "q7_d"],
        "q8": "q8_a",
    }
