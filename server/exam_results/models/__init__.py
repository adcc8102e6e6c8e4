"""
Models package initialization
Import all models here to ensure they are registered with SQLAlchemy
"""

from exam_results.models.stored_result import StoredResult

__all__ = [
    "StoredResult",
]
