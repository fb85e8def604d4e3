from sqlalchemy import (
    Column, Integer, String, Float, Text, Boolean, DateTime, Enum, ForeignKey, JSON, UniqueConstraint
)
from sqlalchemy.orm import relationship
from carnival.database import Base, generate_uuid, utcnow

EVENT_CATEGORIES = (
    "parade", "music", "culture", "kids", "exhibition",
    "sports", "nightlife", "workshop", "competition",
)
EVENT_STATUSES = ("draft", "upcoming", "live", "completed", "cancelled")


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    slug = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    tagline = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    long_description = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)
    subcategory = Column(String, nullable=True)
    tags = Column(JSON, default=list)

    venue_name = Column(String, nullable=False)
    venue_description = Column(Text, nullable=True)
    location_lat = Column(Float, nullable=False)
    location_lng = Column(Float, nullable=False)
    address = Column(String, nullable=True)
    capacity = Column(Integer, nullable=True)
    attendance_count = Column(Integer, default=0)

    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    timezone = Column(String, default="Africa/Lagos")

    featured_image = Column(String, nullable=True)
    images = Column(JSON, default=list)
    video_url = Column(String, nullable=True)
    live_stream_url = Column(String, nullable=True)
    organizer_id = Column(String(36), nullable=True)
    organizer_name = Column(String, nullable=True)

    is_free = Column(Boolean, default=False)
    ticket_required = Column(Boolean, default=False)
    ticket_price = Column(Float, nullable=True)
    tickets_available = Column(Integer, nullable=True)

    is_featured = Column(Boolean, default=False)
    is_trending = Column(Boolean, default=False)
    is_live = Column(Boolean, default=False)
    accessibility_features = Column(JSON, default=list)
    amenities = Column(JSON, default=list)

    view_count = Column(Integer, default=0)
    save_count = Column(Integer, default=0)
    share_count = Column(Integer, default=0)
    rating = Column(Float, nullable=True)
    review_count = Column(Integer, default=0)
    status = Column(Enum(*EVENT_STATUSES, name="event_status", native_enum=False, create_constraint=True),
                    default="upcoming", nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    saves = relationship("SavedEvent", back_populates="event", cascade="all, delete-orphan")


class SavedEvent(Base):
    __tablename__ = "saved_events"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_saved_events_user_event"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    event = relationship("Event", back_populates="saves")
