"""Geocoding and straight-line routing around Calabar.

Forward and reverse lookups go to Nominatim (OpenStreetMap), which needs no
API key but insists on an identifying User-Agent. Directions are estimated
from the Haversine distance and a fixed speed per travel profile.
"""

import asyncio
import logging
import math
from typing import List, Optional

import requests

from carnival import config

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371e3

# metres per second
PROFILE_SPEEDS = {
    "walking": 5000 / 3600,
    "cycling": 15000 / 3600,
    "driving": 40000 / 3600,
}


def _headers():
    return {"User-Agent": config.GEOCODING_USER_AGENT}


def _to_result(item: dict) -> dict:
    address = item.get("address") or {}
    return {
        "id": str(item.get("place_id")),
        "placeName": item.get("display_name"),
        "coordinates": [float(item["lon"]), float(item["lat"])],
        "relevance": float(item.get("importance") or 0.5),
        "placeType": [item.get("type")],
        "address": address.get("road") or address.get("suburb"),
        "context": {
            "neighborhood": address.get("suburb") or address.get("neighbourhood"),
            "locality": address.get("city") or address.get("town"),
            "place": address.get("city") or address.get("town"),
            "region": address.get("state"),
            "country": address.get("country"),
        },
    }


def _get_json(path: str, params: dict):
    response = requests.get(
        f"{config.NOMINATIM_URL}{path}",
        params=params,
        headers=_headers(),
        timeout=config.GEOCODING_TIMEOUT,
    )
    response.raise_for_status()
    return response.json()


# ------------------ Forward Geocoding ------------------
async def geocode_address(query: str) -> List[dict]:
    params = {
        "q": query,
        "format": "json",
        "countrycodes": "ng",
        "limit": 5,
        "addressdetails": 1,
    }
    try:
        data = await asyncio.to_thread(_get_json, "/search", params)
    except (requests.RequestException, ValueError) as e:
        logger.error("Geocoding error: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Unexpected geocoding response for %r: %s", query, data)
        return []

    results = []
    for item in data:
        try:
            results.append(_to_result(item))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping malformed geocoding result: %s", item)
    return results


# ------------------ Reverse Geocoding ------------------
async def reverse_geocode(lng: float, lat: float) -> Optional[dict]:
    params = {"lat": lat, "lon": lng, "format": "json", "addressdetails": 1}
    try:
        data = await asyncio.to_thread(_get_json, "/reverse", params)
    except (requests.RequestException, ValueError) as e:
        logger.error("Reverse geocoding error: %s", e)
        return None
    if not isinstance(data, dict) or not data.get("place_id"):
        return None
    try:
        return _to_result(data)
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.warning("Malformed reverse geocoding result: %s", data)
        return None


# ------------------ Distance & Directions ------------------
def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in metres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def get_directions(origin, destination, profile: str = "walking") -> dict:
    """Straight-line route between two ``[lng, lat]`` points."""
    if profile not in PROFILE_SPEEDS:
        raise ValueError(f"Unknown travel profile '{profile}'")

    distance = calculate_distance(origin[1], origin[0], destination[1], destination[0])
    duration = distance / PROFILE_SPEEDS[profile]
    return {
        "distance": distance,
        "duration": duration,
        "geometry": {
            "type": "LineString",
            "coordinates": [list(origin), list(destination)],
        },
        "steps": [
            {
                "instruction": "Head towards destination",
                "distance": distance,
                "duration": duration,
                "maneuver": {"type": "depart", "location": list(origin)},
            },
            {
                "instruction": "Arrive at destination",
                "distance": 0,
                "duration": 0,
                "maneuver": {"type": "arrive", "location": list(destination)},
            },
        ],
    }


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    minutes = math.floor(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    hours, remaining = divmod(minutes, 60)
    return f"{hours} hr {remaining} min"
