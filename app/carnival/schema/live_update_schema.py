from datetime import datetime
from typing import Optional

from carnival.schema.base import CamelModel


class LiveUpdateCreate(CamelModel):
    content: str
    event_id: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    is_pinned: bool = False


class LiveUpdateOut(CamelModel):
    id: str
    content: str
    event_id: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    is_pinned: bool = False
    created_at: Optional[datetime] = None
