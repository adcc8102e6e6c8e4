import os

# Keep the test run off the on-disk database
os.environ.setdefault("RESULT_STORE_BACKEND", "memory")

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from exam_results.database import Base
from exam_results.schemas import BackendQuestion, RawSubmissionResult, ResultSummary
from exam_results.services.question_enricher import QuestionEnricher
from exam_results.services.result_store import DatabaseResultStore, InMemoryResultStore


DETAILS_URL = "https://exams.test/api/matchsets/{exam_id}/details"


@pytest.fixture
def memory_store():
    return InMemoryResultStore()


@pytest.fixture
def session_factory():
    import exam_results.models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def database_store(session_factory):
    return DatabaseResultStore(session_factory)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it answered."""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def exam_details_payload():
    return {
        "id": 42,
        "title": "Science Olympiad - Set 1",
        "subject": "Science",
        "date": "2025-06-15",
        "durationMinutes": 60,
        "questions": [
            {"id": 1, "questionText": "Capital of France?", "options": ["London", "Berlin", "PARIS ", "Madrid"], "correctAnswer": "Paris"},
            {"id": 2, "questionText": "2 + 2?", "options": ["3", "4", "5"], "correctAnswer": 1},
            {"id": 3, "questionText": "Largest planet?", "options": ["Mars", "Jupiter"]},
        ],
    }


@pytest.fixture
def make_enricher():
    def factory(handler):
        transport = RecordingTransport(handler)
        return QuestionEnricher(details_url=DETAILS_URL, transport=transport), transport
    return factory


@pytest.fixture
def submission():
    return RawSubmissionResult(
        exam_id="42",
        result=ResultSummary(
            total_questions=10,
            correct_answers=7,
            incorrect_answers=2,
            percentage=70,
            result_status="Pass",
        ),
        answers=[0, 1, None, 2, 1, 0, 3, 1, 2, 0],
        exam_title="Science Olympiad - Set 1",
        time_spent=1234,
    )


@pytest.fixture
def submission_with_questions():
    return RawSubmissionResult(
        exam_id="7",
        answers=[0, None, 1],
        questions=[
            BackendQuestion(id=1, question_text="Q1", options=["a", "b"], correct_answer=0),
            BackendQuestion(id=2, question_text="Q2", options=["a", "b"], correct_answer="b"),
            BackendQuestion(id=3, question_text="Q3", options=["a", "b"], correct_answer=1),
        ],
        exam_title="Quick Quiz",
        time_spent=90,
    )
