"""
Feedback Deriver.

Maps a score to a feedback tier and ordered next steps. Tiers live in a YAML
file next to the package so wording and thresholds can change without code.
"""
import os
import yaml
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, ValidationError

from exam_results.schemas import Feedback

# Path to bundled data directory
DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")
TIERS_FILE = os.path.join(DATA_DIR, "feedback_tiers.yaml")


class FeedbackConfigError(Exception):
    """Raised when the tier file is missing, malformed or not exhaustive."""


class FeedbackTier(BaseModel):
    label: str
    min_score: float = Field(ge=0, le=100)
    message: str
    next_steps: List[str]


def validate_tiers(tiers: List[FeedbackTier]) -> List[FeedbackTier]:
    """
    Check tiers are strictly descending and end at 0, so every score in
    [0, 100] falls into exactly one tier.
    """
    if not tiers:
        raise FeedbackConfigError("No feedback tiers defined")
    for higher, lower in zip(tiers, tiers[1:]):
        if lower.min_score >= higher.min_score:
            raise FeedbackConfigError(
                f"Tier '{lower.label}' must start below '{higher.label}' ({lower.min_score} >= {higher.min_score})"
            )
    if tiers[-1].min_score != 0:
        raise FeedbackConfigError(f"Lowest tier '{tiers[-1].label}' must start at 0")
    return tiers


def load_tiers(path: str) -> List[FeedbackTier]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise FeedbackConfigError(f"Cannot load feedback tiers from {path}: {e}") from e

    try:
        tiers = [FeedbackTier.model_validate(t) for t in data.get("tiers", [])]
    except (ValidationError, AttributeError) as e:
        raise FeedbackConfigError(f"Invalid feedback tiers in {path}: {e}") from e
    return validate_tiers(tiers)


@lru_cache(maxsize=1)
def get_tiers() -> List[FeedbackTier]:
    return load_tiers(TIERS_FILE)


def derive_feedback(score_percent: float) -> Feedback:
    """Feedback for a score; out-of-range scores are clamped to [0, 100]."""
    score = min(max(score_percent, 0), 100)
    tiers = get_tiers()
    tier = next(t for t in tiers if score >= t.min_score)
    return Feedback(tier=tier.label, message=tier.message, next_steps=list(tier.next_steps))
