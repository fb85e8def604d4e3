from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from carnival.errors import NotFound, ValidationFailed
from carnival.models.hotel_model import Hotel, PRICE_RANGES

SORT_FIELDS = ("distance", "price", "rating")


# ------------------ Retrieve Hotels ------------------
async def retrieve_hotels_controller(
    db: Session,
    price_range: Optional[str] = None,
    star_rating: Optional[int] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    search: Optional[str] = None,
    sort_by: str = "distance",
    limit: int = 20,
    offset: int = 0,
):
    if price_range and price_range not in PRICE_RANGES:
        raise ValidationFailed(f"Invalid price range '{price_range}'")
    if sort_by not in SORT_FIELDS:
        raise ValidationFailed(f"Invalid sortBy '{sort_by}'. Use distance, price or rating")

    query = db.query(Hotel).filter(Hotel.is_active.is_(True))
    if price_range:
        query = query.filter(Hotel.price_range == price_range)
    if star_rating:
        query = query.filter(Hotel.star_rating >= star_rating)
    if min_price:
        query = query.filter(Hotel.price_per_night_min >= min_price)
    if max_price:
        query = query.filter(Hotel.price_per_night_max <= max_price)
    if search:
        search_pattern = f"%{search}%"
        query = query.filter(or_(Hotel.name.ilike(search_pattern), Hotel.address.ilike(search_pattern)))

    if sort_by == "price":
        query = query.order_by(Hotel.price_per_night_min.asc())
    elif sort_by == "rating":
        # unrated hotels last
        query = query.order_by(Hotel.rating.is_(None), Hotel.rating.desc())
    else:
        query = query.order_by(Hotel.distance_from_center.asc())

    return query.offset(offset).limit(limit).all()


async def retrieve_hotel_by_slug(db: Session, slug: str):
    hotel = db.query(Hotel).filter(Hotel.slug == slug).first()
    if not hotel:
        raise NotFound("Hotel not found")
    return hotel
