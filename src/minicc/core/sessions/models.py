"""Session models persisted by the session store."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..messages import Message, utcnow


class Session(BaseModel):
    """An ordered, append-only conversation thread.

    Attributes:
        id: Opaque session identifier, also the file name on disk.
        name: Display name.
        start_time: When the session was created.
        last_update_time: When the session was last saved.
        messages: Conversation log in insertion order.
        context: Free-form data reserved for callers; never touched by the orchestrator.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: Optional[str] = None
    start_time: datetime = Field(default_factory=utcnow, alias="startTime")
    last_update_time: datetime = Field(default_factory=utcnow, alias="lastUpdateTime")
    messages: List[Message] = Field(default_factory=list)
    context: Dict[str, Any] = Field(default_factory=dict)


class SessionSummary(BaseModel):
    """Short view of a session used for listings."""

    id: str
    name: Optional[str] = None
    start_time: datetime
    last_update_time: datetime
    message_count: int
    last_message: Optional[str] = None
