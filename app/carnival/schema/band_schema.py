from datetime import datetime
from typing import Optional

from carnival.schema.base import CamelModel


class BandOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    theme: Optional[str] = None
    image_url: Optional[str] = None
    vote_count: int = 0
    year: int
    created_at: Optional[datetime] = None


class VoteResult(CamelModel):
    id: str
    name: str
    vote_count: int
