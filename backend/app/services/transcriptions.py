"""Query builders for the transcription listing endpoints.

Every builder returns a SQLAlchemy ``Select``; request values only ever
reach the database as bound parameters.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel
from sqlalchemy import Select, String, bindparam, select

from app.models.transcription import Transcription, TranscriptionStatus

RECORD_COLUMNS = (
    Transcription.id,
    Transcription.user_id,
    Transcription.start_date,
    Transcription.end_date,
    Transcription.language,
    Transcription.transcription_text,
    Transcription.created_at,
    Transcription.status,
)


class LiveWindow(BaseModel):
    """Optional ``created_at`` bounds accepted by the live endpoint.

    The values are kept as the raw strings sent by the client; parsing them
    is left to the database.
    """

    date_from: Optional[str] = None
    date_to: Optional[str] = None


def all_transcriptions_query() -> Select:
    return select(*RECORD_COLUMNS).order_by(Transcription.created_at.desc())


def live_transcriptions_query(window: LiveWindow) -> Select:
    """Live records, newest first, restricted to ``window`` when given."""
    stmt = select(*RECORD_COLUMNS).where(Transcription.status == TranscriptionStatus.LIVE.value)

    # Empty strings count as "not supplied".
    if window.date_from:
        stmt = stmt.where(Transcription.created_at >= bindparam("date_from", window.date_from, type_=String))
    if window.date_to:
        stmt = stmt.where(Transcription.created_at <= bindparam("date_to", window.date_to, type_=String))

    return stmt.order_by(Transcription.created_at.desc())
