from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from carnival.schema.base import CamelModel, as_naive_utc


# ------- Emergency & incidents -------

class EmergencyRequest(CamelModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timestamp: Optional[str] = None


class IncidentCreate(CamelModel):
    type: str
    severity: str
    description: str
    location_lat: float
    location_lng: float
    location_name: Optional[str] = None
    images: Optional[List[str]] = None


class IncidentUpdate(CamelModel):
    status: Optional[str] = None
    resolution_notes: Optional[str] = None


class IncidentOut(CamelModel):
    id: str
    user_id: str
    type: str
    severity: str
    description: str
    location_lat: float
    location_lng: float
    location_name: Optional[str] = None
    images: List[str] = []
    status: str
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ------- Family groups -------

class FamilyGroupCreate(CamelModel):
    name: str
    meeting_point_lat: Optional[float] = None
    meeting_point_lng: Optional[float] = None
    meeting_point_name: Optional[str] = None
    emergency_contact: Optional[str] = None


class FamilyGroupUpdate(CamelModel):
    name: Optional[str] = None
    meeting_point_lat: Optional[float] = None
    meeting_point_lng: Optional[float] = None
    meeting_point_name: Optional[str] = None
    emergency_contact: Optional[str] = None


class FamilyMemberCreate(CamelModel):
    full_name: str
    role: str = "member"
    phone: Optional[str] = None
    age: Optional[int] = None
    photo_url: Optional[str] = None
    description: Optional[str] = None


class FamilyMemberUpdate(CamelModel):
    full_name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    photo_url: Optional[str] = None
    description: Optional[str] = None
    is_missing: Optional[bool] = None
    last_seen_lat: Optional[float] = None
    last_seen_lng: Optional[float] = None


class FamilyMemberOut(CamelModel):
    id: str
    group_id: str
    user_id: Optional[str] = None
    role: str
    full_name: str
    phone: Optional[str] = None
    age: Optional[int] = None
    photo_url: Optional[str] = None
    description: Optional[str] = None
    is_missing: bool = False
    last_seen_lat: Optional[float] = None
    last_seen_lng: Optional[float] = None
    last_seen_at: Optional[datetime] = None
    found_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class FamilyGroupOut(CamelModel):
    id: str
    created_by: str
    name: str
    meeting_point_lat: Optional[float] = None
    meeting_point_lng: Optional[float] = None
    meeting_point_name: Optional[str] = None
    emergency_contact: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    members: List[FamilyMemberOut] = []


# ------- Location shares -------

MAX_SHARE_MINUTES = 24 * 60


class LocationShareCreate(CamelModel):
    latitude: float
    longitude: float
    name: Optional[str] = None
    expires_in_minutes: int = Field(60, ge=1, le=MAX_SHARE_MINUTES)
    is_public: bool = False


class LocationUpdate(CamelModel):
    latitude: float
    longitude: float


class LocationShareOut(CamelModel):
    id: str
    user_id: str
    share_code: str
    current_lat: float
    current_lng: float
    location_history: List[Dict[str, Any]] = []
    name: Optional[str] = None
    expires_at: datetime
    update_interval: int = 30
    is_public: bool = False
    view_count: int = 0
    last_updated: Optional[datetime] = None
    created_at: Optional[datetime] = None


# ------- Lost & found -------

class LostFoundCreate(CamelModel):
    type: str
    item_name: str
    item_description: str
    category: str
    color: Optional[str] = None
    brand: Optional[str] = None
    distinctive_features: Optional[str] = None
    location_name: str
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    lost_found_at: Optional[datetime] = None
    images: Optional[List[str]] = None
    contact_phone: str
    contact_email: Optional[str] = None
    contact_method_preference: str = "phone"
    reward_offered: bool = False
    reward_amount: Optional[float] = None

    @field_validator("lost_found_at")
    @classmethod
    def normalize_timestamp(cls, value):
        return as_naive_utc(value)


class LostFoundOut(CamelModel):
    id: str
    user_id: str
    type: str
    item_name: str
    item_description: str
    category: str
    color: Optional[str] = None
    brand: Optional[str] = None
    distinctive_features: Optional[str] = None
    location_name: str
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    lost_found_at: Optional[datetime] = None
    images: List[str] = []
    contact_phone: str
    contact_email: Optional[str] = None
    contact_method_preference: str = "phone"
    status: str
    matched_with_id: Optional[str] = None
    resolved_at: Optional[datetime] = None
    reward_offered: bool = False
    reward_amount: Optional[float] = None
    view_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
