from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..db.database import fetch_rows, get_engine
from ..exceptions import DatabaseUnavailableError
from ..services.billing import billing_summary_query

router = APIRouter()
logger = logging.getLogger(__name__)


class BillingSummary(BaseModel):
    user_id: Optional[Union[int, str]] = None
    total_transcriptions: int
    total_duration_seconds: Optional[float] = None


@router.get("", response_model=List[BillingSummary])
def billing_summary(engine: Engine = Depends(get_engine)):
    """Per-user transcription count and total duration, longest first."""
    try:
        return fetch_rows(engine, billing_summary_query())
    except SQLAlchemyError as exc:
        logger.error("GET /api/billing failed: %s", exc, exc_info=True)
        raise DatabaseUnavailableError()
