from exam_results.schemas import BackendQuestion
from exam_results.services.answer_normalizer import (
    normalize_question,
    normalize_questions,
    resolve_correct_index,
)


def test_string_answer_matches_case_insensitive_and_trimmed():
    assert resolve_correct_index("Paris", ["London", "Berlin", "PARIS ", "Madrid"]) == 2


def test_string_answer_with_padding_matches():
    assert resolve_correct_index("  madrid ", ["London", "Madrid"]) == 1


def test_first_match_wins():
    assert resolve_correct_index("yes", ["no", "Yes", "YES"]) == 1


def test_unmatched_string_defaults_to_zero():
    assert resolve_correct_index("NotInOptions", ["a", "b", "c"]) == 0


def test_absent_and_empty_answers_default_to_zero():
    assert resolve_correct_index(None, ["a", "b"]) == 0
    assert resolve_correct_index("", ["a", "b"]) == 0


def test_numeric_answer_used_as_index():
    assert resolve_correct_index(3, ["a", "b", "c", "d"]) == 3


def test_numeric_answer_is_not_bounds_checked():
    assert resolve_correct_index(9, ["a", "b"]) == 9


def test_numeric_string_is_matched_as_text():
    assert resolve_correct_index("206", ["208", "206"]) == 1


def test_normalize_question_builds_canonical_form():
    question = BackendQuestion.model_validate({
        "id": 5,
        "questionText": "Capital of France?",
        "options": ["London", "Berlin", "PARIS ", "Madrid"],
        "correctAnswer": "Paris",
    })

    canonical = normalize_question(question)

    assert canonical.id == 5
    assert canonical.text == "Capital of France?"
    assert canonical.options == ["London", "Berlin", "PARIS ", "Madrid"]
    assert canonical.correct_option_index == 2
    assert canonical.difficulty == "medium"


def test_normalize_questions_keeps_order():
    questions = [
        BackendQuestion(id=1, question_text="a", options=["x", "y"], correct_answer="y"),
        BackendQuestion(id=2, question_text="b", options=["x", "y"]),
    ]

    assert [q.correct_option_index for q in normalize_questions(questions)] == [1, 0]
