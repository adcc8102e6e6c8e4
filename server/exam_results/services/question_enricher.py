"""
Question Enricher.

Supplies canonical questions for the review section when the caller only has
a bare result. The exam detail fetch is the only I/O in the result pipeline;
it runs at most once per page view and every failure degrades to "no review".
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from exam_results.config import settings
from exam_results.schemas import BackendQuestion, ExamDetails, ExamQuestionSet
from exam_results.services.answer_normalizer import normalize_questions

logger = logging.getLogger(__name__)


class QuestionEnricher:
    """Loads exam questions by id when none were supplied."""

    def __init__(self, details_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.details_url = details_url or settings.exam_details_url
        # Custom transport lets tests answer requests without a network
        self.transport = transport

    def url_for(self, exam_id: str) -> str:
        return self.details_url.format(exam_id=exam_id)

    async def fetch_exam_details(self, exam_id: str) -> Optional[ExamDetails]:
        """
        GET the exam details once.

        Returns:
            Parsed details, or None on non-2xx, transport error or bad payload
        """
        url = self.url_for(exam_id)
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("⚠️ Error fetching exam details for %s: %s", exam_id, e)
            return None

        if not response.is_success:
            logger.warning("⚠️ Failed to fetch exam details for %s: %s", exam_id, response.status_code)
            return None

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("⚠️ Exam details for %s are not JSON: %s", exam_id, e)
            return None

        if not isinstance(payload, dict):
            logger.warning("⚠️ Unexpected exam details payload for %s", exam_id)
            return None

        try:
            return ExamDetails.model_validate(payload)
        except ValidationError as e:
            logger.warning("⚠️ Exam details for %s did not match schema: %s", exam_id, e.error_count())
            return None

    async def enrich(self, exam_id: str, questions: Optional[List[BackendQuestion]] = None) -> ExamQuestionSet:
        """
        Return canonical questions for an exam.

        Questions the caller already has are used without a request; otherwise
        the exam details are fetched and normalized. Failure yields an empty set.
        """
        if questions:
            return ExamQuestionSet(questions=normalize_questions(questions))

        details = await self.fetch_exam_details(exam_id)
        if details is None:
            return ExamQuestionSet()

        logger.info("✅ Loaded %d questions for exam %s", len(details.questions), exam_id)
        return ExamQuestionSet(
            questions=normalize_questions(details.questions),
            title=details.title,
            subject=details.subject,
            fetched=True,
        )
