from datetime import datetime
from typing import List, Optional

from carnival.schema.base import CamelModel


class SessionCreate(CamelModel):
    title: Optional[str] = None


class SessionUpdate(CamelModel):
    title: Optional[str] = None
    is_active: Optional[bool] = None


class MessageCreate(CamelModel):
    role: str
    content: str


class ChatMessageOut(CamelModel):
    id: str
    session_id: str
    role: str
    content: str
    created_at: Optional[datetime] = None


class ChatSessionOut(CamelModel):
    id: str
    user_id: str
    title: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    message_count: Optional[int] = None


class ChatTurn(CamelModel):
    role: str
    content: str


class ChatRequest(CamelModel):
    messages: List[ChatTurn]
