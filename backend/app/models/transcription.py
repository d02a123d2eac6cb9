"""SQLAlchemy model for stored transcription sessions.

Rows are written by the transcription service; this gateway only reads
them, so the model mirrors the existing ``transcriptions`` table rather
than owning it.  Only the key, owner, creation time and status are
guaranteed to be filled in by the writer.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.dialects import sqlite

from app.db.base import Base

# SQLite keeps timestamps as text; store them in ISO-8601 ``T`` form so that
# client-supplied ISO bounds compare the same way they do on PostgreSQL.
Timestamp = DateTime(timezone=True).with_variant(
    sqlite.DATETIME(
        storage_format=(
            "%(year)04d-%(month)02d-%(day)02dT"
            "%(hour)02d:%(minute)02d:%(second)02d.%(microsecond)06d"
        ),
        regexp=r"(\d+)-(\d+)-(\d+)[T ](\d+):(\d+):(\d+)(?:\.(\d+))?",
    ),
    "sqlite",
)


class TranscriptionStatus(str, Enum):
    """Known values of the ``status`` column."""

    LIVE = "live"
    DONE = "done"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Transcription(Base):
    """One speech-to-text session with its timing, language and text."""

    __tablename__ = "transcriptions"

    id: int = Column(Integer, primary_key=True, autoincrement=True, index=True)
    user_id: str = Column(String(64), nullable=False, index=True)
    start_date: Optional[datetime] = Column(Timestamp, nullable=True)
    end_date: Optional[datetime] = Column(Timestamp, nullable=True)
    language: Optional[str] = Column(String(16), nullable=True)
    transcription_text: Optional[str] = Column(Text, nullable=True)
    created_at: datetime = Column(Timestamp, nullable=False, default=_utcnow, index=True)
    # Plain string rather than a database enum: the writer owns the set of states.
    status: str = Column(String(32), nullable=False, default=TranscriptionStatus.LIVE.value)
