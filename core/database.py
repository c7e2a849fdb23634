# ABOUTME: SQLModel RoadmapRecord table and session factory for ROADMAPS_DB_URL.
# ABOUTME: save_roadmap inserts one record; the app never reads roadmaps back.

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel, create_engine

from core.config import ROADMAPS_DB_URL
from core.errors import StorageConfigurationError
from core.schemas import RoadmapSuggestion


class RoadmapRecord(SQLModel, table=True):
    """Persisted roadmap (prompt + generated content) keyed loosely by user."""

    __tablename__ = "roadmaps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: str = Field(index=True)
    prompt: str
    content: str  # RoadmapSuggestion JSON
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


_engine: Engine | None = None


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        if not ROADMAPS_DB_URL:
            raise StorageConfigurationError("Storage configuration is missing")
        connect_args = (
            {"check_same_thread": False} if ROADMAPS_DB_URL.startswith("sqlite") else {}
        )
        _engine = create_engine(ROADMAPS_DB_URL, connect_args=connect_args)
    return _engine


def init_db() -> None:
    """Create all tables if they do not exist."""
    SQLModel.metadata.create_all(_get_engine())


@contextmanager
def get_session():
    """Yield a session for the configured engine."""
    init_db()
    with Session(_get_engine()) as session:
        yield session


def save_roadmap(user_id: str, prompt: str, roadmap: RoadmapSuggestion) -> RoadmapRecord:
    """Insert one roadmap record and return it."""
    with get_session() as session:
        record = RoadmapRecord(
            user_id=user_id,
            prompt=prompt,
            content=json.dumps(roadmap.to_payload()),
        )
        session.add(record)
        session.commit()
        session.refresh(record)
        return record
