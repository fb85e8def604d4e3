from sqlalchemy import Column, String, Text, Boolean, DateTime
from carnival.database import Base, generate_uuid, utcnow


class LiveUpdate(Base):
    __tablename__ = "live_updates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    content = Column(Text, nullable=False)
    event_id = Column(String(36), nullable=True)
    location = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    is_pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, index=True)
