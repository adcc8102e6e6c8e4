"""
Result Page Service.

One page view: resolve the source, enrich questions if needed, then derive
statistics, chart, feedback, review and ranking.
"""
import logging
from typing import Optional

from exam_results.config import settings
from exam_results.schemas import ExamQuestionSet, RawSubmissionResult, ResultPage
from exam_results.services.feedback import derive_feedback
from exam_results.services.leaderboard import LeaderboardService
from exam_results.services.question_enricher import QuestionEnricher
from exam_results.services.result_resolver import ResultResolver
from exam_results.services.result_store import ResultStore
from exam_results.services.statistics import (
    build_question_review,
    calculate_statistics,
    chart_buckets,
    derive_result_status,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Test Completed"


class ResultPageService:
    """Builds the result page model for an exam attempt."""

    def __init__(
        self,
        store: ResultStore,
        enricher: QuestionEnricher,
        leaderboard: LeaderboardService,
        pass_threshold: Optional[float] = None
    ):
        self.resolver = ResultResolver(store, pass_threshold)
        self.enricher = enricher
        self.leaderboard = leaderboard
        self.pass_threshold = settings.pass_threshold if pass_threshold is None else pass_threshold

    async def build(
        self,
        exam_id: str,
        submission: Optional[RawSubmissionResult] = None,
        include_review: bool = True
    ) -> ResultPage:
        """
        Build the page for an exam.

        Args:
            exam_id: Exam being viewed
            submission: Fresh result from the exam-taking flow, if any
            include_review: Load per-question review. Aggregates never wait
                on it unless there is no backend summary to read them from.
        """
        resolved = self.resolver.resolve(exam_id, submission)
        basis = resolved.basis()

        question_set = ExamQuestionSet()
        if include_review or basis.summary is None:
            question_set = await self.enricher.enrich(exam_id, basis.questions)

        stats = calculate_statistics(basis.summary, basis.answers, question_set.questions)
        review = []
        if include_review and question_set.questions and basis.answers:
            review = build_question_review(question_set.questions, basis.answers)

        ranking = await self.leaderboard.ranking(exam_id, stats.score_percent)

        logger.info(
            "📊 Exam %s (%s): %d/%d correct, score %d%%",
            exam_id, resolved.source, stats.correct_answers, stats.total_questions, stats.score_percent
        )

        return ResultPage(
            exam_id=exam_id,
            source=resolved.source,
            title=question_set.title or basis.exam_title or DEFAULT_TITLE,
            subject=question_set.subject,
            result_status=derive_result_status(basis.summary, stats, self.pass_threshold),
            completed_at=basis.completed_at,
            time_spent=basis.time_spent,
            statistics=stats,
            chart=chart_buckets(stats),
            feedback=derive_feedback(stats.score_percent),
            review=review,
            review_available=bool(review),
            ranking=ranking,
            is_sample=basis.is_sample,
        )
