from fastapi import APIRouter, Depends
from typing import List

from exam_results.schemas import PersistedResultRecord, RawSubmissionResult, ResultPage
from exam_results.services.leaderboard import LeaderboardService, leaderboard_service
from exam_results.services.question_enricher import QuestionEnricher
from exam_results.services.result_page import ResultPageService
from exam_results.services.result_store import ResultStore, get_result_store

router = APIRouter(tags=["Results"])


def get_question_enricher() -> QuestionEnricher:
    return QuestionEnricher()


def get_leaderboard() -> LeaderboardService:
    return leaderboard_service


def get_result_page_service(
    store: ResultStore = Depends(get_result_store),
    enricher: QuestionEnricher = Depends(get_question_enricher),
    leaderboard: LeaderboardService = Depends(get_leaderboard),
) -> ResultPageService:
    return ResultPageService(store, enricher, leaderboard)


@router.post("/{exam_id}", response_model=ResultPage)
async def submit_result(
    exam_id: str,
    submission: RawSubmissionResult,
    service: ResultPageService = Depends(get_result_page_service),
):
    """
    Show the result of a just-finished exam.
    The submission is saved so the page can be revisited later.
    """
    return await service.build(exam_id, submission=submission)


@router.get("/{exam_id}", response_model=ResultPage)
async def get_result(
    exam_id: str,
    include_review: bool = True,
    service: ResultPageService = Depends(get_result_page_service),
):
    """
    Revisit a result (reload or deep link).
    Falls back to clearly marked sample data when nothing was saved.
    """
    return await service.build(exam_id, include_review=include_review)


@router.get("", response_model=List[PersistedResultRecord], response_model_by_alias=True)
async def list_results(store: ResultStore = Depends(get_result_store)):
    """All saved results, newest first"""
    return store.list_all()
