from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from carnival.database import Base, generate_uuid, utcnow


def default_notification_preferences():
    return {"push": True, "email": True, "sms": False}


def default_preferences():
    return {"favoriteCategories": [], "accessibilityNeeds": []}


def default_gamification_stats():
    return {"badges": [], "points": 0, "level": 1}


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String, nullable=False, unique=True, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="sessions")


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    username = Column(String, nullable=True)
    full_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    role = Column(String, nullable=False, default="user")  # user, admin
    language_preference = Column(String(8), nullable=False, default="en")
    notification_preferences = Column(JSON, default=default_notification_preferences)
    location_sharing_enabled = Column(Boolean, default=False)
    emergency_contacts = Column(JSON, default=list)
    preferences = Column(JSON, default=default_preferences)
    gamification_stats = Column(JSON, default=default_gamification_stats)
    is_verified = Column(Boolean, default=False)
    is_vendor = Column(Boolean, default=False)
    is_organizer = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="profile")
