"""
Result Source Resolver.

Picks the one authoritative result for a page view, in order:
fresh submission, stored record, synthetic sample.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from exam_results.schemas import (
    BackendQuestion,
    FromCache,
    FromFallback,
    FromSubmission,
    PersistedResultRecord,
    RawSubmissionResult,
    ResolvedResult,
    ResultSummary,
    SampleResult,
)
from exam_results.config import settings
from exam_results.services.answer_normalizer import normalize_questions
from exam_results.services.result_store import ResultStore, ResultStoreError
from exam_results.services.statistics import derive_result_status, statistics_from_answers

logger = logging.getLogger(__name__)


SAMPLE_TITLE = "Sample Test (not a real attempt)"


def sample_result(exam_id: str) -> SampleResult:
    """Placeholder attempt so the page always has something to show."""
    questions = [
        BackendQuestion(id=1, question_text="What is the chemical formula for water?",
                        options=["CO2", "H2O", "O2", "NaCl"], correct_answer="H2O"),
        BackendQuestion(id=2, question_text="Which planet is known as the Red Planet?",
                        options=["Earth", "Mars", "Venus", "Jupiter"], correct_answer="Mars"),
        BackendQuestion(id=3, question_text="How many bones are there in the adult human body?",
                        options=["206", "208", "210", "212"], correct_answer="206"),
        BackendQuestion(id=4, question_text="What gas do plants absorb from the atmosphere?",
                        options=["Oxygen", "Nitrogen", "Carbon Dioxide", "Hydrogen"], correct_answer="Carbon Dioxide"),
        BackendQuestion(id=5, question_text="Which vitamin is produced when a person is exposed to sunlight?",
                        options=["Vitamin A", "Vitamin B", "Vitamin C", "Vitamin D"], correct_answer="Vitamin D"),
    ]
    return SampleResult(
        exam_id=exam_id,
        exam_title=SAMPLE_TITLE,
        answers=[1, 1, None, 0, 3],
        questions=questions,
        time_spent=600,
    )


def summarize_submission(submission: RawSubmissionResult, pass_threshold: float) -> Optional[ResultSummary]:
    """
    Aggregate counts for a submission the backend did not score, computed
    from the questions it carries. None when it carries no questions.
    """
    if not submission.questions:
        return None
    questions = normalize_questions(submission.questions)
    stats = statistics_from_answers(submission.answers, questions)
    total = stats.total_questions
    return ResultSummary(
        total_questions=total,
        correct_answers=stats.correct_answers,
        incorrect_answers=stats.incorrect_answers,
        percentage=stats.correct_answers / total * 100 if total else 0.0,
        result_status=derive_result_status(None, stats, pass_threshold),
    )


class ResultResolver:
    """Chooses the result source and writes fresh submissions through to the store."""

    def __init__(self, store: ResultStore, pass_threshold: Optional[float] = None):
        self.store = store
        self.pass_threshold = settings.pass_threshold if pass_threshold is None else pass_threshold

    def resolve(self, exam_id: str, submission: Optional[RawSubmissionResult] = None) -> ResolvedResult:
        if submission is not None:
            # The requested exam id is authoritative over whatever the client sent
            update = {"exam_id": exam_id}
            if submission.result is None:
                update["result"] = summarize_submission(submission, self.pass_threshold)
            submission = submission.model_copy(update=update)

            # Only scored attempts are saved; a revisit must reproduce the same numbers
            if submission.result is not None:
                record = PersistedResultRecord.from_submission(exam_id, submission, datetime.now(timezone.utc))
                try:
                    self.store.put(exam_id, record)
                except ResultStoreError as e:
                    logger.error("❌ Could not persist result for exam %s: %s", exam_id, e)
            else:
                logger.warning("⚠️ Submission for exam %s has no result or questions, not saved", exam_id)
            return FromSubmission(submission=submission)

        record = self.store.get(exam_id)
        if record is not None:
            logger.info("✅ Using saved result for exam %s (%s)", exam_id, record.timestamp.isoformat())
            return FromCache(record=record)

        logger.info("🧪 No result for exam %s, showing sample data", exam_id)
        return FromFallback(sample=sample_result(exam_id))
