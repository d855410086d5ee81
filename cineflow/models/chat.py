"""
Chat Transcript Models
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One transcript entry. Transcripts live for a session only."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: ChatRole
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    
    model_config = ConfigDict(frozen=True)
