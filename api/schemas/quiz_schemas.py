"""
Quiz delivery and submission schemas. Correctness flags never leave the server
through these models.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class PublicOption(BaseModel):
    id: str
    text: str


class PublicQuestion(BaseModel):
    id: str
    type: str
    question: str
    options: list[PublicOption]


class QuizResponse(BaseModel):
    id: str
    course_id: str
    order_index: int
    title: str
    description: str
    time_limit: Optional[int] = None  # minutes
    passing_score: int
    questions: list[PublicQuestion]


class CheckAnswerRequest(BaseModel):
    question_id: str
    answer: Union[str, list[str]]


class CheckAnswerResponse(BaseModel):
    question_id: str
    correct: bool


class SubmitQuizRequest(BaseModel):
    # question id -> option id, or list of option ids for multiple choice
    answers: dict[str, Union[str, list[str]]] = Field(default_factory=dict)
    time_taken: int = Field(default=0, ge=0)  # minutes
    timed_out: bool = False


class SubmitQuizResponse(BaseModel):
    quiz_id: str
    score: int
    is_passed: bool
    passing_score: int
    correct_count: int
    total_questions: int
    results: dict[str, bool]
    attempts_count: int
    best_score: int
