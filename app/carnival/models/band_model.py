from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from carnival.database import Base, generate_uuid, utcnow


class Band(Base):
    __tablename__ = "bands"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    theme = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    vote_count = Column(Integer, nullable=False, default=0)
    year = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    votes = relationship("BandVote", back_populates="band", cascade="all, delete-orphan")


class BandVote(Base):
    __tablename__ = "band_votes"
    # one vote per user per carnival year
    __table_args__ = (UniqueConstraint("user_id", "year", name="uq_band_votes_user_year"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    band_id = Column(String(36), ForeignKey("bands.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    year = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    band = relationship("Band", back_populates="votes")
