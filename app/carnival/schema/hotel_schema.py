from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, field_validator

from carnival.schema.base import CamelModel, as_naive_utc


class HotelOut(CamelModel):
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    address: str
    location_lat: float
    location_lng: float
    phone: str
    email: Optional[str] = None
    website: Optional[str] = None
    whatsapp: Optional[str] = None
    star_rating: int
    price_range: str
    price_per_night_min: float
    price_per_night_max: float
    total_rooms: int
    available_rooms: int
    amenities: List[str] = []
    room_types: List[Dict[str, Any]] = []
    policies: Optional[Dict[str, Any]] = None
    images: List[str] = []
    virtual_tour_url: Optional[str] = None
    distance_from_center: float
    verified: bool = False
    paystack_subaccount_code: Optional[str] = None
    commission_rate: float = 0.1
    rating: Optional[float] = None
    review_count: int = 0
    carnival_special_rate: Optional[float] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingCreate(CamelModel):
    hotel_id: str
    check_in_date: datetime
    check_out_date: datetime
    room_type: str
    room_count: int = Field(..., ge=1)
    guest_count: int = Field(..., ge=1)
    guest_name: str
    guest_email: EmailStr
    guest_phone: str
    special_requests: Optional[str] = None

    @field_validator("check_in_date", "check_out_date")
    @classmethod
    def normalize_dates(cls, value):
        return as_naive_utc(value)


class BookingOut(CamelModel):
    id: str
    booking_reference: str
    hotel_id: str
    user_id: str
    check_in_date: datetime
    check_out_date: datetime
    nights: int
    room_type: str
    room_count: int
    guest_count: int
    price_per_night: float
    total_amount: float
    platform_fee: float
    guest_name: str
    guest_email: str
    guest_phone: str
    special_requests: Optional[str] = None
    payment_status: str
    payment_reference: Optional[str] = None
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    status: str
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaymentInitialize(CamelModel):
    booking_reference: str
