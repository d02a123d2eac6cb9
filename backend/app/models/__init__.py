# Namespace for ORM models.
from .transcription import Transcription, TranscriptionStatus

__all__ = ["Transcription", "TranscriptionStatus"]
