from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.access.roles import has_role
from protohub.core.cache import get_cache
from protohub.core.database import get_session
from protohub.dependencies.auth import get_current_user, require_role
from protohub.dependencies.rate_limit import rate_limit
from protohub.schemas.dining import (
    CulturalInsightOut,
    FoodOriginStoryCreate,
    FoodOriginStoryOut,
    MenuItemOut,
    ReservationCreate,
    ReservationOut,
    ReservationStatusUpdate,
    RestaurantOut,
    ReviewCreate,
    ReviewOut,
)
from protohub.services import dining as dining_service
from protohub.services.dining import DiningError

logger = get_logger()
router = APIRouter(prefix="/api", tags=["dining"])


async def _restaurant_or_404(db: AsyncSession, restaurant_id: int):
    restaurant = await dining_service.get_restaurant(db, restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    return restaurant


@router.get("/restaurants", response_model=List[RestaurantOut], dependencies=[rate_limit(30, 60)])
async def list_restaurants(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    try:
        return await dining_service.list_restaurants(db, cache)
    except Exception as e:
        logger.error("Failed to fetch restaurants", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch restaurants")


@router.get("/restaurants/cuisine/{cuisine_type}", response_model=List[RestaurantOut])
async def restaurants_by_cuisine(cuisine_type: str, db: AsyncSession = Depends(get_session)):
    return await dining_service.restaurants_by_cuisine(db, cuisine_type)


@router.get("/restaurants/city/{city}", response_model=List[RestaurantOut])
async def restaurants_by_city(city: str, db: AsyncSession = Depends(get_session)):
    return await dining_service.restaurants_by_city(db, city)


@router.get("/restaurants/{restaurant_id}", response_model=RestaurantOut)
async def get_restaurant(restaurant_id: int, db: AsyncSession = Depends(get_session)):
    return await _restaurant_or_404(db, restaurant_id)


@router.get("/restaurants/{restaurant_id}/menu", response_model=List[MenuItemOut])
async def restaurant_menu(
    restaurant_id: int,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    await _restaurant_or_404(db, restaurant_id)
    return await dining_service.restaurant_menu(db, restaurant_id, cache)


@router.get("/restaurants/{restaurant_id}/menu/featured", response_model=List[MenuItemOut])
async def restaurant_featured_menu(
    restaurant_id: int,
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    await _restaurant_or_404(db, restaurant_id)
    return await dining_service.restaurant_menu(db, restaurant_id, cache, featured_only=True)


@router.get("/restaurants/{restaurant_id}/reviews", response_model=List[ReviewOut])
async def restaurant_reviews(restaurant_id: int, db: AsyncSession = Depends(get_session)):
    await _restaurant_or_404(db, restaurant_id)
    return await dining_service.restaurant_reviews(db, restaurant_id)


@router.post("/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED, dependencies=[rate_limit(10, 60)])
async def create_review(
    request: ReviewCreate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    try:
        return await dining_service.create_review(db, user["id"], request, cache)
    except DiningError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/me/reviews", response_model=List[ReviewOut])
async def my_reviews(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await dining_service.user_reviews(db, user["id"])


@router.post("/reservations", response_model=ReservationOut, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    request: ReservationCreate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    try:
        return await dining_service.create_reservation(db, user["id"], request)
    except DiningError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/me/reservations", response_model=List[ReservationOut])
async def my_reservations(user: dict = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await dining_service.user_reservations(db, user["id"])


@router.patch("/reservations/{reservation_id}/status", response_model=ReservationOut)
async def update_reservation_status(
    reservation_id: int,
    request: ReservationStatusUpdate,
    user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    reservation = await dining_service.get_reservation(db, reservation_id)
    if reservation is None or (reservation.user_id != user["id"] and not has_role(user.get("role"), "admin")):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found")
    try:
        return await dining_service.update_reservation_status(db, reservation, request.status.value)
    except DiningError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/cultural-insights", response_model=List[CulturalInsightOut])
async def list_cultural_insights(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    return await dining_service.list_cultural_insights(db, cache)


@router.get("/cultural-insights/cuisine/{cuisine_type}", response_model=List[CulturalInsightOut])
async def cultural_insights_by_cuisine(cuisine_type: str, db: AsyncSession = Depends(get_session)):
    return await dining_service.cultural_insights_by_cuisine(db, cuisine_type)


@router.get("/cultural-insights/{insight_id}", response_model=CulturalInsightOut)
async def get_cultural_insight(insight_id: int, db: AsyncSession = Depends(get_session)):
    insight = await dining_service.get_cultural_insight(db, insight_id)
    if insight is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cultural insight not found")
    return insight


@router.get("/food-origin-stories", response_model=List[FoodOriginStoryOut])
async def list_origin_stories(db: AsyncSession = Depends(get_session), cache: Optional[Redis] = Depends(get_cache)):
    return await dining_service.list_origin_stories(db, cache)


@router.get("/food-origin-stories/dish/{dish_name}", response_model=List[FoodOriginStoryOut])
async def origin_stories_by_dish(dish_name: str, db: AsyncSession = Depends(get_session)):
    return await dining_service.origin_stories_by_dish(db, dish_name)


@router.get("/food-origin-stories/cuisine/{cuisine_type}", response_model=List[FoodOriginStoryOut])
async def origin_stories_by_cuisine(cuisine_type: str, db: AsyncSession = Depends(get_session)):
    return await dining_service.origin_stories_by_cuisine(db, cuisine_type)


@router.get("/food-origin-stories/{story_id}", response_model=FoodOriginStoryOut)
async def get_origin_story(story_id: int, db: AsyncSession = Depends(get_session)):
    story = await dining_service.get_origin_story(db, story_id)
    if story is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food origin story not found")
    return story


@router.post("/food-origin-stories", response_model=FoodOriginStoryOut, status_code=status.HTTP_201_CREATED)
async def create_origin_story(
    request: FoodOriginStoryCreate,
    user: dict = Depends(require_role("admin")),
    db: AsyncSession = Depends(get_session),
    cache: Optional[Redis] = Depends(get_cache),
):
    return await dining_service.create_origin_story(db, request, cache)
