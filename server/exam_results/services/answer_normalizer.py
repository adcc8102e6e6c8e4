"""
Answer Normalizer.

Turns the backend's "correct answer" (option text or index) into a zero-based
option index.
"""
import logging
from typing import List, Optional, Union

from exam_results.schemas import BackendQuestion, CanonicalQuestion

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = "medium"  # backend does not provide difficulty


def _matches(option: str, answer: str) -> bool:
    return option.strip().casefold() == answer.strip().casefold()


def resolve_correct_index(correct_answer: Optional[Union[int, str]], options: List[str]) -> int:
    """
    Resolve a correct answer to an option index.

    Numbers are taken as the index as-is (no bounds check). Strings match the
    first option equal after trimming and case-folding. Anything unmatched
    falls back to 0 so one malformed question never blocks the whole page.
    """
    if isinstance(correct_answer, bool):
        correct_answer = None
    if isinstance(correct_answer, int):
        return correct_answer
    if isinstance(correct_answer, str) and correct_answer:
        for index, option in enumerate(options):
            if _matches(option, correct_answer):
                return index
    return 0


def normalize_question(question: BackendQuestion) -> CanonicalQuestion:
    """Convert a backend question into its canonical form."""
    index = resolve_correct_index(question.correct_answer, question.options)
    logger.debug(
        "🔎 Question %s: %r -> index %d (options: %s)",
        question.id, question.correct_answer, index, question.options
    )
    return CanonicalQuestion(
        id=question.id,
        text=question.question_text,
        options=list(question.options),
        correct_option_index=index,
        difficulty=DEFAULT_DIFFICULTY,
    )


def normalize_questions(questions: List[BackendQuestion]) -> List[CanonicalQuestion]:
    return [normalize_question(q) for q in questions]
