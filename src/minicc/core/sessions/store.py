"""File-backed session persistence: one JSON document per session."""

import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from ..exceptions import StorageError
from ..logger import get_logger
from ..messages import UserMessage, utcnow
from .models import Session, SessionSummary

logger = get_logger(__name__)


class SessionStore:
    """
    Persists sessions under ``history_dir`` as ``<id>.json``.

    Loaded sessions are cached in memory, so repeated ``get`` calls hand out the
    same object. Every ``save`` rewrites the whole file; there is no locking
    between processes.
    """

    FILE_SUFFIX = ".json"
    EXCERPT_LENGTH = 50

    def __init__(self, history_dir: str | Path = ".history") -> None:
        """Initialize the store and create the history directory if possible.

        Args:
            history_dir: Directory holding the session files.
        """
        self.history_dir = Path(history_dir)
        self._sessions: Dict[str, Session] = {}

        try:
            self.history_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # create()/save() will surface this as a StorageError.
            logger.error("Could not create history directory '%s': %s", self.history_dir, e)

    def create(self, session_id: str, name: Optional[str] = None) -> Session:
        """Create an empty session and persist it immediately.

        Args:
            session_id: Identifier of the new session.
            name: Optional display name.

        Returns:
            The new session.

        Raises:
            StorageError: If the session cannot be written.
        """
        session = Session(id=session_id, name=name or f"Session_{session_id}")
        self.save(session)
        logger.info("Created session '%s'.", session_id)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Return a session from the cache or from disk.

        Unreadable or corrupt files are logged and reported as missing.

        Args:
            session_id: Identifier of the session.

        Returns:
            The session, or None if no readable record exists.
        """
        cached = self._sessions.get(session_id)
        if cached is not None:
            return cached

        try:
            path = self._session_path(session_id)
        except StorageError as e:
            logger.warning(str(e))
            return None

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Failed to read session '%s': %s", session_id, e)
            return None

        try:
            session = Session.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Session file '%s' is corrupt: %s", path, e)
            return None

        self._sessions[session_id] = session
        logger.debug("Loaded session '%s' with %d message(s).", session_id, len(session.messages))
        return session

    def save(self, session: Session) -> None:
        """Stamp ``last_update_time`` and overwrite the session's file.

        Args:
            session: The session to persist.

        Raises:
            StorageError: If the file cannot be written.
        """
        path = self._session_path(session.id)
        session.last_update_time = utcnow()
        data = session.model_dump_json(by_alias=True, exclude_none=True, indent=2)

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.history_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(data, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            msg = f"Failed to save session '{session.id}': {e}"
            logger.error(msg)
            raise StorageError(msg) from e

        self._sessions[session.id] = session
        logger.debug("Saved session '%s' (%d message(s)).", session.id, len(session.messages))

    def list(self) -> List[str]:
        """List the ids of all persisted sessions, sorted by id."""
        if not self.history_dir.is_dir():
            return []
        try:
            return sorted(p.stem for p in self.history_dir.glob(f"*{self.FILE_SUFFIX}") if p.is_file())
        except OSError as e:
            logger.error("Failed to list sessions in '%s': %s", self.history_dir, e)
            return []

    def summarize(self, session_id: str) -> Optional[SessionSummary]:
        """Build a short summary of a session.

        Args:
            session_id: Identifier of the session.

        Returns:
            The summary, or None if the session does not exist.
        """
        session = self.get(session_id)
        if session is None:
            return None

        last_message = None
        for message in reversed(session.messages):
            if isinstance(message, UserMessage):
                last_message = message.content[: self.EXCERPT_LENGTH]
                break

        return SessionSummary(
            id=session.id,
            name=session.name,
            start_time=session.start_time,
            last_update_time=session.last_update_time,
            message_count=len(session.messages),
            last_message=last_message,
        )

    def list_details(self) -> List[SessionSummary]:
        """Summaries of every readable persisted session."""
        summaries = []
        for session_id in self.list():
            summary = self.summarize(session_id)
            if summary is not None:
                summaries.append(summary)
        return summaries

    def most_recent(self) -> Optional[str]:
        """Id of the most recently updated session, or None if there are none."""
        summaries = self.list_details()
        if not summaries:
            return None
        return max(summaries, key=lambda s: s.last_update_time).id

    def delete(self, session_id: str) -> None:
        """Remove a session from the cache and from disk. Missing ids are ignored.

        Raises:
            StorageError: If the id is invalid or the file cannot be removed.
        """
        self._sessions.pop(session_id, None)
        path = self._session_path(session_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            msg = f"Failed to delete session '{session_id}': {e}"
            logger.error(msg)
            raise StorageError(msg) from e
        logger.info("Deleted session '%s'.", session_id)

    def clear_all(self) -> None:
        """Remove every persisted session.

        Raises:
            StorageError: If a session file cannot be removed.
        """
        self._sessions.clear()
        if not self.history_dir.is_dir():
            return

        for path in self.history_dir.glob(f"*{self.FILE_SUFFIX}"):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                msg = f"Failed to delete session file '{path}': {e}"
                logger.error(msg)
                raise StorageError(msg) from e
        logger.info("Cleared all sessions in '%s'.", self.history_dir)

    def _session_path(self, session_id: str) -> Path:
        """Map a session id to its file, refusing ids that would leave the history directory."""
        if (
            not session_id
            or session_id in (".", "..")
            or "/" in session_id
            or "\\" in session_id
            or "\x00" in session_id
        ):
            raise StorageError(f"Invalid session id: {session_id!r}")
        return self.history_dir / f"{session_id}{self.FILE_SUFFIX}"
