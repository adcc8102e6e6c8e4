"""
Result Schemas.

Wire and storage names are camelCase (the exam-taking client and the stored
records use them); Python attributes are snake_case. Every model accepts both.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Union, Literal, Annotated
from datetime import datetime


ResultStatus = Literal["Pass", "Fail"]
ResultSource = Literal["submission", "cache", "fallback"]


# =============================================================================
# Inbound shapes (backend / exam-taking flow)
# =============================================================================

class BackendQuestion(BaseModel):
    """Question as returned by the exam backend."""
    id: int
    question_text: str = Field("", alias="questionText")
    options: List[str] = []
    correct_answer: Optional[Union[int, str]] = Field(None, alias="correctAnswer")  # index or option text

    class Config:
        populate_by_name = True


class ExamDetails(BaseModel):
    """Exam detail payload; only `questions` is required for enrichment."""
    id: Optional[int] = None
    title: Optional[str] = None
    subject: Optional[str] = None
    date: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, alias="durationMinutes")
    questions: List[BackendQuestion] = []

    class Config:
        populate_by_name = True


class ResultSummary(BaseModel):
    """Aggregate counts computed by the backend on submission."""
    total_questions: int = Field(alias="totalQuestions")
    correct_answers: int = Field(alias="correctAnswers")
    incorrect_answers: int = Field(alias="incorrectAnswers")
    percentage: float = Field(allow_inf_nan=False)
    result_status: ResultStatus = Field(alias="resultStatus")

    class Config:
        populate_by_name = True


class RawSubmissionResult(BaseModel):
    """What a just-finished exam hands to the result page. Immutable."""
    exam_id: Optional[str] = Field(None, alias="examId")
    result: Optional[ResultSummary] = None
    answers: List[Optional[int]] = []  # option index or None per question
    questions: List[BackendQuestion] = []
    exam_title: str = Field("", alias="examTitle")
    time_spent: float = Field(0, alias="timeSpent")  # seconds

    class Config:
        populate_by_name = True
        frozen = True


# =============================================================================
# Canonical / persisted shapes
# =============================================================================

class CanonicalQuestion(BaseModel):
    """Question with the correct answer resolved to a zero-based option index."""
    id: int
    text: str
    options: List[str]
    correct_option_index: int
    difficulty: str = "medium"


class PersistedResultRecord(BaseModel):
    """The unit kept by the result store, one per exam id."""
    exam_id: str = Field(alias="examId")
    result: Optional[ResultSummary] = None
    answers: List[Optional[int]] = []
    exam_title: str = Field("", alias="examTitle")
    time_spent: float = Field(0, alias="timeSpent")
    timestamp: datetime

    class Config:
        populate_by_name = True

    @classmethod
    def from_submission(cls, exam_id: str, submission: RawSubmissionResult, timestamp: datetime) -> "PersistedResultRecord":
        return cls(
            exam_id=exam_id,
            result=submission.result,
            answers=list(submission.answers),
            exam_title=submission.exam_title,
            time_spent=submission.time_spent,
            timestamp=timestamp,
        )


class SampleResult(BaseModel):
    """Synthetic placeholder used when no real attempt is available."""
    exam_id: str
    exam_title: str
    answers: List[Optional[int]]
    questions: List[BackendQuestion]
    time_spent: float = 0


# =============================================================================
# Resolved result (tagged union)
# =============================================================================

class ResultBasis(BaseModel):
    """The shape common to every result source; all statistics derive from this."""
    exam_id: str
    summary: Optional[ResultSummary] = None
    answers: List[Optional[int]] = []
    questions: List[BackendQuestion] = []
    exam_title: str = ""
    time_spent: float = 0
    completed_at: Optional[datetime] = None
    is_sample: bool = False


class FromSubmission(BaseModel):
    source: Literal["submission"] = "submission"
    submission: RawSubmissionResult

    def basis(self) -> ResultBasis:
        s = self.submission
        return ResultBasis(
            exam_id=s.exam_id or "",
            summary=s.result,
            answers=list(s.answers),
            questions=list(s.questions),
            exam_title=s.exam_title,
            time_spent=s.time_spent,
        )


class FromCache(BaseModel):
    source: Literal["cache"] = "cache"
    record: PersistedResultRecord

    def basis(self) -> ResultBasis:
        r = self.record
        return ResultBasis(
            exam_id=r.exam_id,
            summary=r.result,
            answers=list(r.answers),
            exam_title=r.exam_title,
            time_spent=r.time_spent,
            completed_at=r.timestamp,
        )


class FromFallback(BaseModel):
    source: Literal["fallback"] = "fallback"
    sample: SampleResult

    def basis(self) -> ResultBasis:
        s = self.sample
        return ResultBasis(
            exam_id=s.exam_id,
            answers=list(s.answers),
            questions=list(s.questions),
            exam_title=s.exam_title,
            time_spent=s.time_spent,
            is_sample=True,
        )


ResolvedResult = Annotated[
    Union[FromSubmission, FromCache, FromFallback],
    Field(discriminator="source")
]


# =============================================================================
# Derived / page shapes
# =============================================================================

class ExamQuestionSet(BaseModel):
    """Questions available for review, plus header info when fetched."""
    questions: List[CanonicalQuestion] = []
    title: Optional[str] = None
    subject: Optional[str] = None
    fetched: bool = False


class DisplayStatistics(BaseModel):
    total_questions: int
    answered_questions: int
    correct_answers: int
    incorrect_answers: int
    not_answered: int
    accuracy_percent: int
    score_percent: int


class ChartBucket(BaseModel):
    name: Literal["Correct", "Incorrect", "Not Answered"]
    value: int
    color: str


class QuestionReviewItem(BaseModel):
    question_id: int
    text: str
    options: List[str]
    selected_index: Optional[int] = None
    correct_index: int
    status: Literal["correct", "incorrect", "not_answered"]


class Feedback(BaseModel):
    tier: str
    message: str
    next_steps: List[str]


class RankInfo(BaseModel):
    rank: int
    total_participants: int
    percentile: int
    is_placeholder: bool = False


class ResultPage(BaseModel):
    """Everything the result page displays for one exam attempt."""
    exam_id: str
    source: ResultSource
    title: str
    subject: Optional[str] = None
    result_status: ResultStatus
    completed_at: Optional[datetime] = None
    time_spent: float = 0
    statistics: DisplayStatistics
    chart: List[ChartBucket]
    feedback: Feedback
    review: List[QuestionReviewItem] = []
    review_available: bool = False
    ranking: RankInfo
    is_sample: bool = False
