"""
Script to load sample carnival data
Run once on an empty database to get events, hotels, bands and live updates to browse
"""
import logging
import sys
import os
from datetime import datetime

# Add the app directory to the path
app_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'app')
sys.path.insert(0, app_dir)

from carnival.controller.band_controller import current_year
from carnival.database import Base, SessionLocal, engine
from carnival.models.user_model import User, AuthSession, UserProfile
from carnival.models.event_model import Event, SavedEvent
from carnival.models.hotel_model import Hotel, HotelBooking
from carnival.models.band_model import Band, BandVote
from carnival.models.live_update_model import LiveUpdate
from carnival.models.safety_model import IncidentReport, FamilyGroup, FamilyMember, LocationShare, LostFoundItem
from carnival.models.chat_model import ChatSession, ChatMessage

logger = logging.getLogger("seed_data")

CARNIVAL_YEAR = current_year()

EVENTS = [
    {
        "slug": "grand-carnival-parade",
        "name": "Grand Carnival Parade",
        "tagline": "Africa's biggest street party",
        "description": "Bands in full costume take over the 12km route through Calabar.",
        "category": "parade",
        "venue_name": "U.J. Esuene Stadium",
        "location_lat": 4.9517,
        "location_lng": 8.322,
        "start_time": datetime(CARNIVAL_YEAR, 12, 27, 9, 0),
        "end_time": datetime(CARNIVAL_YEAR, 12, 27, 20, 0),
        "is_free": True,
        "is_featured": True,
        "is_trending": True,
        "tags": ["parade", "costume", "bands"],
    },
    {
        "slug": "calabar-festival-concert",
        "name": "Calabar Festival Concert",
        "description": "Headline Afrobeats and highlife acts on the main stage.",
        "category": "music",
        "venue_name": "Cultural Centre",
        "location_lat": 4.9589,
        "location_lng": 8.3269,
        "start_time": datetime(CARNIVAL_YEAR, 12, 26, 19, 0),
        "end_time": datetime(CARNIVAL_YEAR, 12, 27, 2, 0),
        "ticket_required": True,
        "ticket_price": 15000,
        "is_featured": True,
        "tags": ["concert", "afrobeats"],
    },
    {
        "slug": "childrens-carnival",
        "name": "Children's Carnival",
        "description": "Costumed school bands, face painting and games for kids.",
        "category": "kids",
        "venue_name": "Millennium Park",
        "location_lat": 4.9721,
        "location_lng": 8.3398,
        "start_time": datetime(CARNIVAL_YEAR, 12, 22, 10, 0),
        "end_time": datetime(CARNIVAL_YEAR, 12, 22, 16, 0),
        "is_free": True,
        "tags": ["family", "kids"],
    },
    {
        "slug": "efik-heritage-exhibition",
        "name": "Efik Heritage Exhibition",
        "description": "Crafts, attire and history of the Efik people.",
        "category": "culture",
        "venue_name": "National Museum, Old Residency",
        "location_lat": 4.9456,
        "location_lng": 8.3187,
        "start_time": datetime(CARNIVAL_YEAR, 12, 20, 9, 0),
        "end_time": datetime(CARNIVAL_YEAR, 12, 30, 17, 0),
        "is_free": True,
        "tags": ["heritage", "museum"],
    },
]

HOTELS = [
    {
        "slug": "transcorp-hotels-calabar",
        "name": "Transcorp Hotels Calabar",
        "address": "Murtala Mohammed Highway, Calabar",
        "location_lat": 4.9643,
        "location_lng": 8.3351,
        "phone": "+234 87 239 400",
        "star_rating": 5,
        "price_range": "luxury",
        "price_per_night_min": 85000,
        "price_per_night_max": 250000,
        "total_rooms": 120,
        "available_rooms": 40,
        "distance_from_center": 1.9,
        "verified": True,
        "rating": 4.6,
        "amenities": ["pool", "wifi", "restaurant", "gym"],
        "room_types": [
            {"type": "Deluxe", "description": "King bed, city view", "price": 85000, "available": 20,
             "maxOccupancy": 2, "amenities": ["wifi", "minibar"], "images": []},
            {"type": "Executive Suite", "description": "Separate lounge", "price": 250000, "available": 5,
             "maxOccupancy": 3, "amenities": ["wifi", "minibar", "lounge access"], "images": []},
        ],
    },
    {
        "slug": "axari-hotel-and-suites",
        "name": "Axari Hotel & Suites",
        "address": "8 Ekpo Abasi Street, Calabar",
        "location_lat": 4.9552,
        "location_lng": 8.3301,
        "phone": "+234 803 000 1111",
        "star_rating": 4,
        "price_range": "mid-range",
        "price_per_night_min": 35000,
        "price_per_night_max": 70000,
        "total_rooms": 60,
        "available_rooms": 25,
        "distance_from_center": 0.9,
        "rating": 4.2,
        "amenities": ["wifi", "restaurant", "parking"],
        "room_types": [
            {"type": "Standard", "description": "Queen bed", "price": 35000, "available": 15,
             "maxOccupancy": 2, "amenities": ["wifi"], "images": []},
            {"type": "Family Room", "description": "Two double beds", "price": 70000, "available": 6,
             "maxOccupancy": 4, "amenities": ["wifi"], "images": []},
        ],
    },
    {
        "slug": "channel-view-hotel",
        "name": "Channel View Hotel",
        "address": "Mary Slessor Avenue, Calabar",
        "location_lat": 4.9490,
        "location_lng": 8.3215,
        "phone": "+234 805 222 3344",
        "star_rating": 3,
        "price_range": "budget",
        "price_per_night_min": 18000,
        "price_per_night_max": 30000,
        "total_rooms": 40,
        "available_rooms": 18,
        "distance_from_center": 0.4,
        "rating": 3.9,
        "amenities": ["wifi", "parking"],
        "room_types": [
            {"type": "Standard", "description": "Double bed", "price": 18000, "available": 12,
             "maxOccupancy": 2, "amenities": ["wifi"], "images": []},
        ],
    },
]

BANDS = [
    {"name": "Bayside Band", "theme": "Ocean Rhythms"},
    {"name": "Seagull Band", "theme": "Wings of Freedom"},
    {"name": "Masta Blasta Band", "theme": "Afro Fusion"},
    {"name": "Freedom Band", "theme": "Roots and Unity"},
    {"name": "Passion 4 Band", "theme": "Fire of Culture"},
]

LIVE_UPDATES = [
    {"content": "Welcome to Calabar Carnival! Parade route maps are now live in the app.", "is_pinned": True},
    {"content": "Main stage gates open at 6pm at the Cultural Centre.", "location": "Cultural Centre"},
]


def seed_data():
    """Insert sample rows, skipping tables that already hold data"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Event).count() == 0:
            db.add_all(Event(**event) for event in EVENTS)
            logger.info("Added %d events", len(EVENTS))
        if db.query(Hotel).count() == 0:
            db.add_all(Hotel(**hotel) for hotel in HOTELS)
            logger.info("Added %d hotels", len(HOTELS))
        if db.query(Band).filter(Band.year == CARNIVAL_YEAR).count() == 0:
            db.add_all(Band(year=CARNIVAL_YEAR, **band) for band in BANDS)
            logger.info("Added %d bands for %d", len(BANDS), CARNIVAL_YEAR)
        if db.query(LiveUpdate).count() == 0:
            db.add_all(LiveUpdate(**update) for update in LIVE_UPDATES)
            logger.info("Added %d live updates", len(LIVE_UPDATES))

        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Error seeding data")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger.info("Seeding carnival data...")
    try:
        seed_data()
        logger.info("Seeding completed")
    except Exception:
        sys.exit(1)
