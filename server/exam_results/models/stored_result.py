from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from exam_results.database import Base


class StoredResult(Base):
    """One persisted exam result per storage key (exam_result_<exam_id>)"""
    __tablename__ = "stored_results"
    
    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)  # JSON-serialized PersistedResultRecord
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    def __repr__(self):
        return f"<StoredResult {self.key}>"
