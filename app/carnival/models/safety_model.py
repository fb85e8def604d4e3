from sqlalchemy import Column, Integer, String, Float, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from carnival.database import Base, generate_uuid, utcnow

INCIDENT_SEVERITIES = ("low", "medium", "high", "critical")
INCIDENT_STATUSES = ("reported", "acknowledged", "in-progress", "resolved", "closed")
FAMILY_MEMBER_ROLES = ("parent", "child", "guardian", "member")
LOST_FOUND_TYPES = ("lost", "found")
LOST_FOUND_STATUSES = ("open", "matched", "resolved", "claimed", "expired")


class IncidentReport(Base):
    __tablename__ = "incident_reports"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False)
    severity = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location_lat = Column(Float, nullable=False, default=0.0)
    location_lng = Column(Float, nullable=False, default=0.0)
    location_name = Column(String, nullable=True)
    images = Column(JSON, default=list)
    status = Column(String, nullable=False, default="reported")
    resolution_notes = Column(Text, nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    resolved_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class FamilyGroup(Base):
    __tablename__ = "family_groups"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    meeting_point_lat = Column(Float, nullable=True)
    meeting_point_lng = Column(Float, nullable=True)
    meeting_point_name = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)

    members = relationship(
        "FamilyMember",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="FamilyMember.created_at",
    )


class FamilyMember(Base):
    __tablename__ = "family_members"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    group_id = Column(String(36), ForeignKey("family_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=True)
    role = Column(String, nullable=False, default="member")
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    age = Column(Integer, nullable=True)
    photo_url = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    is_missing = Column(Boolean, nullable=False, default=False)
    last_seen_lat = Column(Float, nullable=True)
    last_seen_lng = Column(Float, nullable=True)
    last_seen_at = Column(DateTime, nullable=True)
    found_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    group = relationship("FamilyGroup", back_populates="members")


class LocationShare(Base):
    __tablename__ = "location_shares"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    share_code = Column(String(8), nullable=False, unique=True, index=True)
    current_lat = Column(Float, nullable=False)
    current_lng = Column(Float, nullable=False)
    # [{"lat", "lng", "timestamp"}]
    location_history = Column(JSON, default=list)
    name = Column(String, nullable=True)
    expires_at = Column(DateTime, nullable=False, index=True)
    update_interval = Column(Integer, nullable=False, default=30)
    shared_with_emails = Column(JSON, default=list)
    is_public = Column(Boolean, nullable=False, default=False)
    sos_enabled = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime, default=utcnow)
    created_at = Column(DateTime, default=utcnow)


class LostFoundItem(Base):
    __tablename__ = "lost_found"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False)  # lost, found
    item_name = Column(String, nullable=False)
    item_description = Column(Text, nullable=False)
    category = Column(String, nullable=False)
    color = Column(String, nullable=True)
    brand = Column(String, nullable=True)
    distinctive_features = Column(Text, nullable=True)
    location_name = Column(String, nullable=False)
    location_lat = Column(Float, nullable=True)
    location_lng = Column(Float, nullable=True)
    lost_found_at = Column(DateTime, nullable=True)
    images = Column(JSON, default=list)
    contact_phone = Column(String, nullable=False)
    contact_email = Column(String, nullable=True)
    contact_method_preference = Column(String, nullable=False, default="phone")
    status = Column(String, nullable=False, default="open")
    matched_with_id = Column(String(36), nullable=True)
    resolved_at = Column(DateTime, nullable=True)
    reward_offered = Column(Boolean, nullable=False, default=False)
    reward_amount = Column(Float, nullable=True)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
