from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..db.database import fetch_rows, get_engine
from ..exceptions import DatabaseUnavailableError
from ..services.transcriptions import (
    LiveWindow,
    all_transcriptions_query,
    live_transcriptions_query,
)

router = APIRouter()
logger = logging.getLogger(__name__)


class TranscriptionRecord(BaseModel):
    id: Union[int, str]
    user_id: Optional[Union[int, str]] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    language: Optional[str] = None
    transcription_text: Optional[str] = None
    created_at: Optional[datetime] = None
    status: Optional[str] = None


def live_window(
    date_from: Optional[str] = Query(None, alias="from", description="Lower created_at bound (ISO-8601)"),
    date_to: Optional[str] = Query(None, alias="to", description="Upper created_at bound (ISO-8601)"),
) -> LiveWindow:
    return LiveWindow(date_from=date_from, date_to=date_to)


@router.get("/all", response_model=List[TranscriptionRecord])
def list_all_transcriptions(engine: Engine = Depends(get_engine)):
    """Return every transcription, newest first."""
    try:
        return fetch_rows(engine, all_transcriptions_query())
    except SQLAlchemyError as exc:
        logger.error("GET /api/transcriptions/all failed: %s", exc, exc_info=True)
        raise DatabaseUnavailableError()


@router.get("/live", response_model=List[TranscriptionRecord])
def list_live_transcriptions(
    window: LiveWindow = Depends(live_window),
    engine: Engine = Depends(get_engine),
):
    """Return live transcriptions, optionally bounded by ``from``/``to``."""
    try:
        return fetch_rows(engine, live_transcriptions_query(window))
    except SQLAlchemyError as exc:
        logger.error(
            "GET /api/transcriptions/live (from=%r, to=%r) failed: %s",
            window.date_from,
            window.date_to,
            exc,
            exc_info=True,
        )
        raise DatabaseUnavailableError()
