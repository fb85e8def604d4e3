from sqlalchemy import Column, Integer, String, Float, Text, Boolean, DateTime, Enum, ForeignKey, JSON
from sqlalchemy.orm import relationship
from carnival.database import Base, generate_uuid, utcnow

PRICE_RANGES = ("budget", "mid-range", "luxury")
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")
BOOKING_STATUSES = ("pending", "confirmed", "checked-in", "checked-out", "cancelled", "no-show")

# bookings in these states hold rooms
ACTIVE_BOOKING_STATUSES = ("pending", "confirmed", "checked-in")


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    slug = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String, nullable=False)
    location_lat = Column(Float, nullable=False)
    location_lng = Column(Float, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=True)
    website = Column(String, nullable=True)
    whatsapp = Column(String, nullable=True)

    star_rating = Column(Integer, nullable=False, default=3)
    price_range = Column(String, nullable=False)  # budget, mid-range, luxury
    price_per_night_min = Column(Float, nullable=False)
    price_per_night_max = Column(Float, nullable=False)
    total_rooms = Column(Integer, nullable=False, default=0)
    available_rooms = Column(Integer, nullable=False, default=0)

    amenities = Column(JSON, default=list)
    # [{"type", "description", "price", "available", "maxOccupancy", "amenities", "images"}]
    room_types = Column(JSON, default=list)
    policies = Column(JSON, default=dict)
    images = Column(JSON, default=list)
    virtual_tour_url = Column(String, nullable=True)
    distance_from_center = Column(Float, nullable=False, default=0.0)

    verified = Column(Boolean, default=False)
    paystack_subaccount_code = Column(String, nullable=True)
    commission_rate = Column(Float, nullable=False, default=0.1)
    rating = Column(Float, nullable=True)
    review_count = Column(Integer, default=0)
    carnival_special_rate = Column(Float, nullable=True)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    bookings = relationship("HotelBooking", back_populates="hotel", cascade="all, delete-orphan")

    def find_room_type(self, room_type: str):
        for room in self.room_types or []:
            if room.get("type") == room_type:
                return room
        return None


class HotelBooking(Base):
    __tablename__ = "hotel_bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booking_reference = Column(String, nullable=False, unique=True, index=True)
    hotel_id = Column(String(36), ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    check_in_date = Column(DateTime, nullable=False)
    check_out_date = Column(DateTime, nullable=False)
    nights = Column(Integer, nullable=False)
    room_type = Column(String, nullable=False)
    room_count = Column(Integer, nullable=False, default=1)
    guest_count = Column(Integer, nullable=False, default=1)
    price_per_night = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)
    platform_fee = Column(Float, nullable=False, default=0.0)

    guest_name = Column(String, nullable=False)
    guest_email = Column(String, nullable=False)
    guest_phone = Column(String, nullable=False)
    special_requests = Column(Text, nullable=True)

    payment_status = Column(Enum(*PAYMENT_STATUSES, name="payment_status", native_enum=False, create_constraint=True),
                            nullable=False, default="pending")
    payment_reference = Column(String, nullable=True, unique=True, index=True)
    payment_method = Column(String, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    status = Column(Enum(*BOOKING_STATUSES, name="booking_status", native_enum=False, create_constraint=True),
                    nullable=False, default="pending")
    cancellation_reason = Column(Text, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    hotel = relationship("Hotel", back_populates="bookings")
