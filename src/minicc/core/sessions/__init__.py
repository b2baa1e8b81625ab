"""Session models and their file-backed store."""

from .models import Session, SessionSummary
from .store import SessionStore

__all__ = ["Session", "SessionSummary", "SessionStore"]
