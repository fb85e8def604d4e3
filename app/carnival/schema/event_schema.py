from datetime import datetime
from typing import List, Optional

from carnival.schema.base import CamelModel


class EventOut(CamelModel):
    id: str
    slug: str
    name: str
    tagline: Optional[str] = None
    description: str
    long_description: Optional[str] = None
    category: str
    subcategory: Optional[str] = None
    tags: List[str] = []
    venue_name: str
    venue_description: Optional[str] = None
    location_lat: float
    location_lng: float
    address: Optional[str] = None
    capacity: Optional[int] = None
    attendance_count: int = 0
    start_time: datetime
    end_time: datetime
    timezone: str = "Africa/Lagos"
    featured_image: Optional[str] = None
    images: List[str] = []
    video_url: Optional[str] = None
    live_stream_url: Optional[str] = None
    organizer_id: Optional[str] = None
    organizer_name: Optional[str] = None
    is_free: bool = False
    ticket_required: bool = False
    ticket_price: Optional[float] = None
    tickets_available: Optional[int] = None
    is_featured: bool = False
    is_trending: bool = False
    is_live: bool = False
    accessibility_features: List[str] = []
    amenities: List[str] = []
    view_count: int = 0
    save_count: int = 0
    share_count: int = 0
    rating: Optional[float] = None
    review_count: int = 0
    status: str = "upcoming"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
