from datetime import datetime
from typing import Any, Dict, List, Optional

from carnival.schema.base import CamelModel


class ProfileOut(CamelModel):
    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    role: str = "user"
    language_preference: str = "en"
    notification_preferences: Dict[str, bool] = {}
    location_sharing_enabled: bool = False
    emergency_contacts: List[Dict[str, Any]] = []
    preferences: Dict[str, Any] = {}
    gamification_stats: Dict[str, Any] = {}
    is_verified: bool = False
    is_vendor: bool = False
    is_organizer: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    emergency_contacts: Optional[List[Dict[str, Any]]] = None
    language_preference: Optional[str] = None
    notification_preferences: Optional[Dict[str, bool]] = None
    location_sharing_enabled: Optional[bool] = None
    preferences: Optional[Dict[str, Any]] = None


class LanguageUpdate(CamelModel):
    language: str
