import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from carnival.controller.hotel_controller import retrieve_hotels_controller, retrieve_hotel_by_slug
from carnival.database import get_db
from carnival.errors import CarnivalError
from carnival.response_model import PlainResponseModel, CarnivalErrorResponse, InternalErrorResponse
from carnival.schema.base import serialize
from carnival.schema.hotel_schema import HotelOut

logger = logging.getLogger(__name__)

router = APIRouter()


# ----------------------- GET ALL Hotels -----------------------
@router.get("", response_description="Active hotels")
async def get_hotels(
    price_range: Optional[str] = Query(None, alias="priceRange"),
    star_rating: Optional[int] = Query(None, alias="starRating"),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    search: Optional[str] = None,
    sort_by: str = Query("distance", alias="sortBy"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    try:
        hotels = await retrieve_hotels_controller(
            db,
            price_range=price_range,
            star_rating=star_rating,
            min_price=min_price,
            max_price=max_price,
            search=search,
            sort_by=sort_by,
            limit=limit,
            offset=offset,
        )
        return PlainResponseModel(serialize(HotelOut, hotels))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching hotels")
        return InternalErrorResponse()


# ----------------------- GET Hotel -----------------------
@router.get("/{slug}", response_description="Hotel by slug")
async def get_hotel(slug: str, db: Session = Depends(get_db)):
    try:
        hotel = await retrieve_hotel_by_slug(db, slug)
        return PlainResponseModel(serialize(HotelOut, hotel))
    except CarnivalError as e:
        return CarnivalErrorResponse(e)
    except Exception:
        logger.exception("Error fetching hotel %s", slug)
        return InternalErrorResponse()


__all__ = ["router"]
