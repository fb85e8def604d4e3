#!/usr/bin/env python3
"""
Creates every CarnivalXperience table that does not exist yet.

Point DATABASE_URL (or the DB_* variables) at the target database first.
Follow with seed_data.py for sample carnival content.
"""
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "app"))

from carnival.database import Base, engine
from carnival.models.user_model import User, AuthSession, UserProfile
from carnival.models.event_model import Event, SavedEvent
from carnival.models.hotel_model import Hotel, HotelBooking
from carnival.models.band_model import Band, BandVote
from carnival.models.live_update_model import LiveUpdate
from carnival.models.safety_model import IncidentReport, FamilyGroup, FamilyMember, LocationShare, LostFoundItem
from carnival.models.chat_model import ChatSession, ChatMessage

logger = logging.getLogger("create_tables")


def create_tables():
    try:
        logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
        Base.metadata.create_all(bind=engine)
        logger.info("Created %d tables", len(Base.metadata.tables))
        return True
    except Exception:
        logger.exception("Error creating tables")
        return False


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    sys.exit(0 if create_tables() else 1)
