"""Per-user usage aggregation."""

from sqlalchemy import Select, func, select

from app.db.functions import duration_seconds
from app.models.transcription import Transcription


def billing_summary_query() -> Select:
    """One row per ``user_id`` with its record count and summed duration."""
    total_duration = func.sum(duration_seconds(Transcription.start_date, Transcription.end_date))
    return (
        select(
            Transcription.user_id,
            func.count(Transcription.id).label("total_transcriptions"),
            total_duration.label("total_duration_seconds"),
        )
        .group_by(Transcription.user_id)
        .order_by(total_duration.desc())
    )
