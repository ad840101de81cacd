from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from redis.asyncio import Redis
from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import cached_json
from protohub.models.stays import Booking, Destination, Property, Testimonial
from protohub.schemas.stays import BookingCreate, DestinationOut, PropertyOut, TestimonialOut
from protohub.utils.dates import as_utc, nights_between
from protohub.utils.search import LIKE_ESCAPE, contains_pattern

logger = get_logger()

ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")


class BookingError(Exception):
    """Booking request rejected by a business rule."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _dump_properties(rows) -> List[dict]:
    return [PropertyOut.model_validate(row).model_dump(mode="json") for row in rows]


async def list_properties(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Property).order_by(Property.id))
        return _dump_properties(result.scalars().all())
    return await cached_json(cache, "stays:properties:all", load)


async def list_featured_properties(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Property).where(Property.is_featured.is_(True)).order_by(Property.id))
        return _dump_properties(result.scalars().all())
    return await cached_json(cache, "stays:properties:featured", load)


async def list_unique_stays(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Property).where(Property.is_unique_stay.is_(True)).order_by(Property.id))
        return _dump_properties(result.scalars().all())
    return await cached_json(cache, "stays:properties:unique", load)


async def get_property(db: AsyncSession, property_id: int) -> Optional[Property]:
    return await db.get(Property, property_id)


async def list_destinations(db: AsyncSession, cache: Optional[Redis] = None, featured: Optional[bool] = None) -> List[dict]:
    async def load():
        query = select(Destination).order_by(Destination.id)
        if featured is not None:
            query = query.where(Destination.featured.is_(featured))
        result = await db.execute(query)
        return [DestinationOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, f"stays:destinations:{featured}", load)


async def list_testimonials(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Testimonial).order_by(Testimonial.id))
        return [TestimonialOut.model_validate(row).model_dump(mode="json") for row in result.scalars().all()]
    return await cached_json(cache, "stays:testimonials", load)


def _overlapping_bookings(check_in: datetime, check_out: datetime):
    # Half-open [check_in, check_out): back-to-back stays do not clash
    return and_(
        Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        Booking.check_in < check_out,
        Booking.check_out > check_in,
    )


def _within_availability(prop: Property, check_in: datetime, check_out: datetime) -> bool:
    if prop.available_start is not None and as_utc(check_in) < as_utc(prop.available_start):
        return False
    if prop.available_end is not None and as_utc(check_out) > as_utc(prop.available_end):
        return False
    return True


async def search_properties(
    db: AsyncSession,
    q: str = "",
    check_in: Optional[datetime] = None,
    check_out: Optional[datetime] = None,
    guests: Optional[int] = None,
) -> List[Property]:
    if (check_in is None) != (check_out is None):
        raise BookingError("check_in and check_out must be provided together")
    if check_in is not None and as_utc(check_out) <= as_utc(check_in):
        raise BookingError("check_out must be after check_in")

    query = select(Property)
    term = (q or "").strip().lower()
    if term:
        pattern = contains_pattern(term)
        query = query.where(or_(
            func.lower(Property.title).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Property.description).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Property.location).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Property.city).like(pattern, escape=LIKE_ESCAPE),
            func.lower(Property.country).like(pattern, escape=LIKE_ESCAPE),
        ))
    if guests:
        query = query.where(Property.max_guests >= guests)

    if check_in is not None:
        check_in, check_out = as_utc(check_in), as_utc(check_out)
        booked = select(Booking.property_id).where(_overlapping_bookings(check_in, check_out))
        query = query.where(Property.id.not_in(booked))

    result = await db.execute(query.order_by(Property.id))
    properties = list(result.scalars().all())
    if check_in is not None:
        properties = [p for p in properties if _within_availability(p, check_in, check_out)]
    return properties


async def create_booking(db: AsyncSession, user_id: str, request: BookingCreate) -> Booking:
    prop = await db.get(Property, request.property_id)
    if prop is None:
        raise BookingError("Property not found", status_code=404)

    check_in, check_out = as_utc(request.check_in), as_utc(request.check_out)
    if check_out <= check_in:
        raise BookingError("check_out must be after check_in")
    nights = nights_between(check_in, check_out)
    if nights < 1:
        raise BookingError("Stay must be at least one night")
    if request.guests < 1 or request.guests > prop.max_guests:
        raise BookingError(f"guests must be between 1 and {prop.max_guests}")
    if not _within_availability(prop, check_in, check_out):
        raise BookingError("Property is not available for the requested dates", status_code=409)

    clash = await db.execute(
        select(func.count(Booking.id)).where(
            Booking.property_id == prop.id,
            _overlapping_bookings(check_in, check_out),
        )
    )
    if clash.scalar_one() > 0:
        raise BookingError("Property is already booked for the requested dates", status_code=409)

    booking = Booking(
        user_id=user_id,
        property_id=prop.id,
        check_in=check_in,
        check_out=check_out,
        guests=request.guests,
        total_price=Decimal(prop.price) * nights,
        status="pending",
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    logger.info("Booking created", booking_id=booking.id, property_id=prop.id, user_id=user_id, nights=nights)
    return booking


async def list_user_bookings(db: AsyncSession, user_id: str) -> List[Booking]:
    result = await db.execute(
        select(Booking).where(Booking.user_id == user_id).order_by(Booking.check_in.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())


async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    return await db.get(Booking, booking_id)


async def cancel_booking(db: AsyncSession, booking: Booking) -> Booking:
    if booking.status == "cancelled":
        raise BookingError("Booking is already cancelled", status_code=409)
    booking.status = "cancelled"
    await db.commit()
    await db.refresh(booking)
    logger.info("Booking cancelled", booking_id=booking.id, user_id=booking.user_id)
    return booking
