import logging

from fastapi import APIRouter, Query

from carnival.controller.geocoding import (
    geocode_address, reverse_geocode, get_directions, format_distance, format_duration
)
from carnival.response_model import ResponseModel, ErrorResponseModel, InternalErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- Geocoding -----------------------
@router.get("/geocode", response_description="Address search, Nigeria only")
async def geocode(q: str = Query(..., min_length=1)):
    try:
        results = await geocode_address(q)
        return ResponseModel({"results": results})
    except Exception:
        logger.exception("Geocode route error")
        return InternalErrorResponse()


@router.get("/reverse", response_description="Place at a coordinate")
async def reverse(lng: float, lat: float):
    try:
        result = await reverse_geocode(lng, lat)
        return ResponseModel({"result": result})
    except Exception:
        logger.exception("Reverse geocode route error")
        return InternalErrorResponse()


# ----------------------- Directions -----------------------
@router.get("/directions", response_description="Straight-line route estimate")
async def directions(
    origin_lng: float = Query(..., alias="originLng"),
    origin_lat: float = Query(..., alias="originLat"),
    dest_lng: float = Query(..., alias="destLng"),
    dest_lat: float = Query(..., alias="destLat"),
    profile: str = "walking",
):
    try:
        route = get_directions([origin_lng, origin_lat], [dest_lng, dest_lat], profile)
    except ValueError as e:
        return ErrorResponseModel(str(e), 400, "VALIDATION_ERROR")
    return ResponseModel({
        "route": route,
        "formattedDistance": format_distance(route["distance"]),
        "formattedDuration": format_duration(route["duration"]),
    })


__all__ = ["router"]
