"""
Quiz content types.

Questions are stored as a JSON list on the quiz row, written by the content
editor in camelCase (``isCorrect``, ``passingScore``). Both spellings are
accepted on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class QuestionType(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"


class QuizOption(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    text: str = ""
    is_correct: bool = Field(default=False, alias="isCorrect")


class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    # Kept as a plain string so an unknown type still loads and is scored as wrong.
    type: str
    prompt: str = Field(default="", alias="question")
    options: list[QuizOption] = Field(default_factory=list)

    def correct_option_ids(self) -> set[str]:
        return {o.id for o in self.options if o.is_correct}


class Quiz(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = ""
    questions: list[QuizQuestion] = Field(default_factory=list)
    time_limit: Optional[int] = Field(default=None, alias="timeLimit")  # minutes
    passing_score: int = Field(default=70, alias="passingScore")  # percent


# question id -> option id (single choice) or option ids (multiple choice)
Answer = Union[str, list[str], set[str], tuple[str, ...]]
Answers = dict[str, Answer]
