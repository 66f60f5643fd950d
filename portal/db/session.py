# portal/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from portal.core.config import settings


def _connect_args(url: str) -> dict:
    # sqlite connections are handed between FastAPI's worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)