from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.access.roles import has_role
from protohub.core.cache import get_cache
from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.stays import (
    BookingCreate,
    BookingOut,
    DestinationOut,
    PropertyOut,
    StaySearchQuery,
    TestimonialOut,
)
from protohub.services import stays as stay_service
from protohub.services.stays import BookingError

logger = get_logger()
router = APIRouter(prefix="/api", tags=["stays"])


@router.get("/properties", response_model=List[PropertyOut], dependencies=[rate_limit(30, 60)])
async def list_properties(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await stay_service.list_properties(db, cache)
    except Exception as e:
        logger.error("Failed to fetch properties", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch properties")


@router.get("/properties/featured", response_model=List[PropertyOut], dependencies=[rate_limit(30, 60)])
async def list_featured_properties(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await stay_service.list_featured_properties(db, cache)
    except Exception as e:
        logger.error("Failed to fetch featured properties", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch featured properties")


@router.get("/properties/unique-stays", response_model=List[PropertyOut], dependencies=[rate_limit(30, 60)])
async def list_unique_stays(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await stay_service.list_unique_stays(db, cache)
    except Exception as e:
        logger.error("Failed to fetch unique stays", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch unique stays")


@router.get("/properties/{property_id}", response_model=PropertyOut, dependencies=[rate_limit(30, 60)])
async def get_property(property_id: int, db: AsyncSession = Depends(get_session)):
    try:
        item = await stay_service.get_property(db, property_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")
        return item
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Get property failed", property_id=property_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch property")


@router.get("/destinations", response_model=List[DestinationOut], dependencies=[rate_limit(30, 60)])
async def list_destinations(
    featured: Optional[bool] = None,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    try:
        return await stay_service.list_destinations(db, cache, featured=featured)
    except Exception as e:
        logger.error("Failed to fetch destinations", featured=featured, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch destinations")


@router.get("/testimonials", response_model=List[TestimonialOut], dependencies=[rate_limit(30, 60)])
async def list_testimonials(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await stay_service.list_testimonials(db, cache)
    except Exception as e:
        logger.error("Failed to fetch testimonials", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch testimonials")


@router.get("/search", response_model=List[PropertyOut], dependencies=[rate_limit(10, 60)])
async def search(query: StaySearchQuery = Depends(), db: AsyncSession = Depends(get_session)):
    logger.info("Received search request", query_params=query.model_dump(mode="json"))
    try:
        results = await stay_service.search_properties(
            db,
            q=query.q,
            check_in=query.check_in,
            check_out=query.check_out,
            guests=query.guests,
        )
        logger.info("Search completed", result_count=len(results))
        return results
    except BookingError as e:
        logger.warning("Invalid search dates", error=e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error("Search failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Search failed")


@router.post("/bookings", response_model=BookingOut, status_code=status.HTTP_201_CREATED, dependencies=[rate_limit(5, 60)])
async def create_booking(
    request: BookingCreate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        return await stay_service.create_booking(db, user["id"], request)
    except BookingError as e:
        logger.warning("Booking rejected", user_id=user["id"], property_id=request.property_id, reason=e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error("Create booking failed", user_id=user["id"], error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create booking")


@router.get("/bookings/me", response_model=List[BookingOut])
async def my_bookings(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        return await stay_service.list_user_bookings(db, user["id"])
    except Exception as e:
        logger.error("Failed to fetch bookings", user_id=user["id"], error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch bookings")


@router.get("/users/{user_id}/bookings", response_model=List[BookingOut])
async def user_bookings(user_id: str, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    if user["id"] != user_id and not has_role(user.get("role"), "admin"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view these bookings")
    try:
        return await stay_service.list_user_bookings(db, user_id)
    except Exception as e:
        logger.error("Failed to fetch bookings", user_id=user_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch bookings")


@router.post("/bookings/{booking_id}/cancel", response_model=BookingOut)
async def cancel_booking(booking_id: int, user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    try:
        booking = await stay_service.get_booking(db, booking_id)
        if booking is None or (booking.user_id != user["id"] and not has_role(user.get("role"), "admin")):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
        return await stay_service.cancel_booking(db, booking)
    except HTTPException:
        raise
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error("Cancel booking failed", booking_id=booking_id, error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to cancel booking")
