"""Unit tests for answer validation and quiz scoring."""
import pytest

from learning.quiz import (
    calculate_score,
    grade_quiz,
    is_passed,
    quiz_navigation_progress,
    validate_answer,
)
from learning.types import Quiz, QuizOption, QuizQuestion


def _question(qid, qtype, correct, wrong=("x",)):
    options = [QuizOption(id=o, text=o, is_correct=True) for o in correct]
    options += [QuizOption(id=o, text=o) for o in wrong]
    return QuizQuestion(id=qid, type=qtype, options=options)


@pytest.mark.unit
class TestValidateSingleChoice:
    def test_correct_option(self, variables_quiz):
        q1 = variables_quiz.questions[0]
        assert validate_answer(q1, "q1_a") is True

    def test_wrong_option(self, variables_quiz):
        q1 = variables_quiz.questions[0]
        assert validate_answer(q1, "q1_b") is False

    def test_unknown_option_id(self, variables_quiz):
        assert validate_answer(variables_quiz.questions[0], "nope") is False

    def test_list_answer_rejected(self, variables_quiz):
        assert validate_answer(variables_quiz.questions[0], ["q1_a"]) is False

    def test_none_answer(self, variables_quiz):
        assert validate_answer(variables_quiz.questions[0], None) is False


@pytest.mark.unit
class TestValidateMultipleChoice:
    def test_exact_set_any_order(self, variables_quiz):
        q2 = variables_quiz.questions[1]
        assert validate_answer(q2, ["q2_d", "q2_c", "q2_b", "q2_a"]) is True

    def test_tuple_and_set_accepted(self, variables_quiz):
        q5 = variables_quiz.questions[4]
        assert validate_answer(q5, ("q5_a", "q5_b", "q5_d")) is True
        assert validate_answer(q5, {"q5_a", "q5_b", "q5_d"}) is True

    def test_subset_is_wrong(self, variables_quiz):
        q2 = variables_quiz.questions[1]
        assert validate_answer(q2, ["q2_a", "q2_b", "q2_c"]) is False

    def test_superset_is_wrong(self, variables_quiz):
        q2 = variables_quiz.questions[1]
        assert validate_answer(q2, ["q2_a", "q2_b", "q2_c", "q2_d", "q2_e"]) is False

    def test_duplicates_collapse(self, variables_quiz):
        q7 = variables_quiz.questions[6]
        assert validate_answer(q7, ["q7_a", "q7_a", "q7_c", "q7_e"]) is True

    def test_string_answer_rejected(self, variables_quiz):
        q2 = variables_quiz.questions[1]
        assert validate_answer(q2, "q2_a") is False

    def test_empty_selection_is_wrong(self, variables_quiz):
        assert validate_answer(variables_quiz.questions[1], []) is False

    def test_dict_answer_rejected(self, variables_quiz):
        q5 = variables_quiz.questions[4]
        assert validate_answer(q5, {"q5_a": True, "q5_b": True, "q5_d": True}) is False

    def test_generator_answer_rejected(self, variables_quiz):
        q5 = variables_quiz.questions[4]
        assert validate_answer(q5, (o for o in ("q5_a", "q5_b", "q5_d"))) is False

    def test_frozenset_accepted(self, variables_quiz):
        q5 = variables_quiz.questions[4]
        assert validate_answer(q5, frozenset({"q5_a", "q5_b", "q5_d"})) is True

    def test_non_string_ids_rejected(self):
        q = _question("m", "multiple_choice", ["1", "2"])
        assert validate_answer(q, [1, 2]) is False


@pytest.mark.unit
class TestValidateMalformed:
    def test_unknown_type(self):
        q = _question("u", "true_false", ["t"])
        assert validate_answer(q, "t") is False

    def test_no_options(self):
        q = QuizQuestion(id="e", type="single_choice", options=[])
        assert validate_answer(q, "a") is False

    def test_none_question(self):
        assert validate_answer(None, "a") is False

    def test_multiple_choice_without_correct_options_accepts_empty_selection(self):
        q = _question("n", "multiple_choice", [], wrong=("a", "b"))
        assert validate_answer(q, []) is True
        assert validate_answer(q, ["a"]) is False


@pytest.mark.unit
class TestGradeQuiz:
    def test_perfect_score(self, variables_quiz, perfect_answers):
        grade = grade_quiz(variables_quiz, perfect_answers)
        assert grade.score == 100
        assert grade.passed is True
        assert grade.correct_count == 8
        assert grade.total_questions == 8
        assert all(grade.results.values())

    def test_five_of_eight_rounds_half_up_and_fails(self, variables_quiz, perfect_answers):
        answers = dict(perfect_answers)
        answers["q1"] = "q1_b"
        answers["q2"] = ["q2_a"]
        answers["q3"] = "q3_a"
        grade = grade_quiz(variables_quiz, answers)
        assert grade.correct_count == 5
        assert grade.score == 63
        assert grade.passed is False
        assert grade.results["q1"] is False and grade.results["q4"] is True

    def test_six_of_eight_passes(self, variables_quiz, perfect_answers):
        answers = dict(perfect_answers)
        del answers["q7"]
        answers["q8"] = "q8_a"
        grade = grade_quiz(variables_quiz, answers)
        assert grade.score == 75
        assert grade.passed is True

    def test_unanswered_questions_count_as_wrong(self, variables_quiz):
        grade = grade_quiz(variables_quiz, {"q1": "q1_a"})
        assert grade.correct_count == 1
        assert grade.score == 13
        assert grade.results["q8"] is False

    def test_no_answers(self, variables_quiz):
        assert calculate_score(variables_quiz, {}) == 0
        assert calculate_score(variables_quiz, None) == 0

    def test_all_wrong_scores_zero_and_fails(self, variables_quiz, wrong_answers):
        grade = grade_quiz(variables_quiz, wrong_answers)
        assert grade.correct_count == 0
        assert grade.score == 0
        assert grade.passed is False
        assert not any(grade.results.values())

    @pytest.mark.parametrize("already_correct", range(8))
    def test_one_more_correct_answer_never_lowers_score(
        self, variables_quiz, perfect_answers, wrong_answers, already_correct
    ):
        order = [q.id for q in variables_quiz.questions]

        def answers_with(n):
            return {qid: (perfect_answers if i < n else wrong_answers)[qid] for i, qid in enumerate(order)}

        before = calculate_score(variables_quiz, answers_with(already_correct))
        after = calculate_score(variables_quiz, answers_with(already_correct + 1))
        assert after > before

    def test_answers_for_unknown_questions_ignored(self, variables_quiz, perfect_answers):
        answers = dict(perfect_answers, q99="whatever")
        assert calculate_score(variables_quiz, answers) == 100

    def test_empty_quiz_scores_zero(self):
        quiz = Quiz(id="empty", title="Empty", questions=[])
        grade = grade_quiz(quiz, {"q1": "a"})
        assert grade.score == 0
        assert grade.total_questions == 0
        assert grade.passed is False

    def test_custom_passing_score(self, variables_quiz, perfect_answers):
        quiz = variables_quiz.model_copy(update={"passing_score": 50})
        answers = {k: perfect_answers[k] for k in ("q1", "q2", "q3", "q4")}
        grade = grade_quiz(quiz, answers)
        assert grade.score == 50
        assert grade.passed is True


@pytest.mark.unit
class TestIsPassed:
    def test_equal_passes(self):
        assert is_passed(70, 70) is True

    def test_below_fails(self):
        assert is_passed(69, 70) is False

    def test_zero_threshold(self):
        assert is_passed(0, 0) is True


@pytest.mark.unit
class TestQuizNavigationProgress:
    def test_first_question(self):
        assert quiz_navigation_progress(0, 8) == 0

    def test_last_question(self):
        assert quiz_navigation_progress(7, 8) == 100

    def test_middle_rounds_half_up(self):
        # 3/7 = 42.86
        assert quiz_navigation_progress(3, 8) == 43

    def test_single_or_empty_quiz(self):
        assert quiz_navigation_progress(0, 1) == 0
        assert quiz_navigation_progress(0, 0) == 0

    def test_out_of_range_index_is_clamped(self):
        assert quiz_navigation_progress(20, 8) == 100
        assert quiz_navigation_progress(-3, 8) == 0
