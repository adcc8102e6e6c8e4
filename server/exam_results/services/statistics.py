"""
Statistics Calculator.

Pure functions from a result basis to what the page displays. Nothing here
knows which source produced the result.
"""
import math
from typing import List, Optional

from exam_results.schemas import (
    CanonicalQuestion,
    ChartBucket,
    DisplayStatistics,
    QuestionReviewItem,
    ResultStatus,
    ResultSummary,
)


CHART_COLORS = {
    "Correct": "#10B981",
    "Incorrect": "#EF4444",
    "Not Answered": "#6B7280",
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole > 0 else 0


def _answer_at(answers: List[Optional[int]], index: int) -> Optional[int]:
    return answers[index] if index < len(answers) else None


def statistics_from_summary(summary: ResultSummary) -> DisplayStatistics:
    """Backend counts are used verbatim; only the derived fields are computed."""
    answered = summary.correct_answers + summary.incorrect_answers
    percent = round_half_up(summary.percentage)
    return DisplayStatistics(
        total_questions=summary.total_questions,
        answered_questions=answered,
        correct_answers=summary.correct_answers,
        incorrect_answers=summary.incorrect_answers,
        not_answered=summary.total_questions - answered,
        accuracy_percent=percent,
        score_percent=percent,
    )


def statistics_from_answers(answers: List[Optional[int]], questions: List[CanonicalQuestion]) -> DisplayStatistics:
    """Recount from raw answers. A missing answer is not answered, never incorrect."""
    correct = 0
    incorrect = 0
    for i, question in enumerate(questions):
        answer = _answer_at(answers, i)
        if answer is None:
            continue
        if answer == question.correct_option_index:
            correct += 1
        else:
            incorrect += 1

    total = len(questions)
    answered = correct + incorrect
    return DisplayStatistics(
        total_questions=total,
        answered_questions=answered,
        correct_answers=correct,
        incorrect_answers=incorrect,
        not_answered=total - answered,
        accuracy_percent=_percent(correct, answered),
        score_percent=_percent(correct, total),
    )


def calculate_statistics(
    summary: Optional[ResultSummary],
    answers: List[Optional[int]],
    questions: List[CanonicalQuestion]
) -> DisplayStatistics:
    """
    Compute display statistics.

    Uses the backend summary when there is one, otherwise recomputes from the
    answers against the canonical questions.
    """
    if summary is not None:
        return statistics_from_summary(summary)
    return statistics_from_answers(answers, questions)


def derive_result_status(summary: Optional[ResultSummary], stats: DisplayStatistics, pass_threshold: float) -> ResultStatus:
    if summary is not None:
        return summary.result_status
    return "Pass" if stats.score_percent >= pass_threshold else "Fail"


def chart_buckets(stats: DisplayStatistics) -> List[ChartBucket]:
    """Correct / Incorrect / Not Answered buckets for the summary chart."""
    values = {
        "Correct": stats.correct_answers,
        "Incorrect": stats.incorrect_answers,
        "Not Answered": stats.not_answered,
    }
    return [ChartBucket(name=name, value=value, color=CHART_COLORS[name]) for name, value in values.items()]


def build_question_review(questions: List[CanonicalQuestion], answers: List[Optional[int]]) -> List[QuestionReviewItem]:
    review = []
    for i, question in enumerate(questions):
        selected = _answer_at(answers, i)
        if selected is None:
            status = "not_answered"
        elif selected == question.correct_option_index:
            status = "correct"
        else:
            status = "incorrect"
        review.append(QuestionReviewItem(
            question_id=question.id,
            text=question.text,
            options=question.options,
            selected_index=selected,
            correct_index=question.correct_option_index,
            status=status,
        ))
    return review
