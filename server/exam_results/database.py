from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from exam_results.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are shared with the threadpool FastAPI runs sync code in
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(settings.database_url, connect_args=_connect_args(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db():
    """Create tables for every registered model"""
    import exam_results.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
