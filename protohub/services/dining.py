from typing import List, Optional

from redis.asyncio import Redis
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.cache import cached_json, invalidate
from protohub.models.dining import CulturalInsight, FoodOriginStory, MenuItem, Reservation, Restaurant, Review
from protohub.schemas.dining import (
    CulturalInsightOut,
    FoodOriginStoryCreate,
    FoodOriginStoryOut,
    MenuItemOut,
    ReservationCreate,
    RestaurantOut,
    ReviewCreate,
)
from protohub.utils.dates import as_utc, utcnow
from protohub.utils.search import LIKE_ESCAPE, contains_pattern

logger = get_logger()

FINAL_RESERVATION_STATUSES = ("cancelled", "completed")


class DiningError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _dump(schema, rows) -> List[dict]:
    return [schema.model_validate(row).model_dump(mode="json") for row in rows]


async def list_restaurants(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(Restaurant).order_by(Restaurant.id))
        return _dump(RestaurantOut, result.scalars().all())
    return await cached_json(cache, "dining:restaurants:all", load)


async def get_restaurant(db: AsyncSession, restaurant_id: int) -> Optional[Restaurant]:
    return await db.get(Restaurant, restaurant_id)


async def restaurants_by_cuisine(db: AsyncSession, cuisine_type: str) -> List[Restaurant]:
    result = await db.execute(
        select(Restaurant)
        .where(func.lower(Restaurant.cuisine_type) == cuisine_type.strip().lower())
        .order_by(Restaurant.id)
    )
    return list(result.scalars().all())


async def restaurants_by_city(db: AsyncSession, city: str) -> List[Restaurant]:
    pattern = contains_pattern(city.strip().lower())
    result = await db.execute(
        select(Restaurant).where(func.lower(Restaurant.city).like(pattern, escape=LIKE_ESCAPE)).order_by(Restaurant.id)
    )
    return list(result.scalars().all())


async def restaurant_menu(
    db: AsyncSession, restaurant_id: int, cache: Optional[Redis] = None, featured_only: bool = False
) -> List[dict]:
    async def load():
        query = select(MenuItem).where(MenuItem.restaurant_id == restaurant_id).order_by(MenuItem.id)
        if featured_only:
            query = query.where(MenuItem.featured.is_(True))
        result = await db.execute(query)
        return _dump(MenuItemOut, result.scalars().all())
    suffix = "featured" if featured_only else "all"
    return await cached_json(cache, f"dining:menu:{restaurant_id}:{suffix}", load)


async def restaurant_reviews(db: AsyncSession, restaurant_id: int) -> List[Review]:
    result = await db.execute(
        select(Review).where(Review.restaurant_id == restaurant_id).order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def user_reviews(db: AsyncSession, user_id: str) -> List[Review]:
    result = await db.execute(
        select(Review).where(Review.user_id == user_id).order_by(Review.created_at.desc(), Review.id.desc())
    )
    return list(result.scalars().all())


async def create_review(
    db: AsyncSession, user_id: str, request: ReviewCreate, cache: Optional[Redis] = None
) -> Review:
    """Store a review and refresh the restaurant's average rating and review count."""
    restaurant = await db.get(Restaurant, request.restaurant_id)
    if restaurant is None:
        raise DiningError("Restaurant not found", status_code=404)

    review = Review(
        restaurant_id=restaurant.id,
        user_id=user_id,
        rating=request.rating,
        comment=request.comment,
        created_at=utcnow(),
    )
    db.add(review)
    await db.flush()

    result = await db.execute(
        select(func.count(Review.id), func.avg(Review.rating)).where(Review.restaurant_id == restaurant.id)
    )
    count, average = result.one()
    restaurant.review_count = count
    restaurant.rating = round(float(average), 1)

    await db.commit()
    await db.refresh(review)
    await invalidate(cache, "dining:restaurants:*")
    logger.info("Review created", review_id=review.id, restaurant_id=restaurant.id, rating=restaurant.rating)
    return review


async def create_reservation(db: AsyncSession, user_id: str, request: ReservationCreate) -> Reservation:
    if await db.get(Restaurant, request.restaurant_id) is None:
        raise DiningError("Restaurant not found", status_code=404)
    date = as_utc(request.date)
    if date <= utcnow():
        raise DiningError("Reservation date must be in the future")

    reservation = Reservation(
        restaurant_id=request.restaurant_id,
        user_id=user_id,
        date=date,
        party_size=request.party_size,
        special_requests=request.special_requests,
        status="pending",
        created_at=utcnow(),
    )
    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)
    logger.info("Reservation created", reservation_id=reservation.id, restaurant_id=request.restaurant_id, user_id=user_id)
    return reservation


async def user_reservations(db: AsyncSession, user_id: str) -> List[Reservation]:
    result = await db.execute(
        select(Reservation).where(Reservation.user_id == user_id).order_by(Reservation.date.desc(), Reservation.id.desc())
    )
    return list(result.scalars().all())


async def get_reservation(db: AsyncSession, reservation_id: int) -> Optional[Reservation]:
    return await db.get(Reservation, reservation_id)


async def update_reservation_status(db: AsyncSession, reservation: Reservation, new_status: str) -> Reservation:
    if reservation.status in FINAL_RESERVATION_STATUSES:
        raise DiningError(f"Reservation is already {reservation.status}", status_code=409)
    reservation.status = new_status
    await db.commit()
    await db.refresh(reservation)
    logger.info("Reservation status updated", reservation_id=reservation.id, status=new_status)
    return reservation


async def list_cultural_insights(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(CulturalInsight).order_by(CulturalInsight.id))
        return _dump(CulturalInsightOut, result.scalars().all())
    return await cached_json(cache, "dining:insights", load)


async def get_cultural_insight(db: AsyncSession, insight_id: int) -> Optional[CulturalInsight]:
    return await db.get(CulturalInsight, insight_id)


async def cultural_insights_by_cuisine(db: AsyncSession, cuisine_type: str) -> List[CulturalInsight]:
    result = await db.execute(
        select(CulturalInsight)
        .where(func.lower(CulturalInsight.cuisine_type) == cuisine_type.strip().lower())
        .order_by(CulturalInsight.id)
    )
    return list(result.scalars().all())


async def list_origin_stories(db: AsyncSession, cache: Optional[Redis] = None) -> List[dict]:
    async def load():
        result = await db.execute(select(FoodOriginStory).order_by(FoodOriginStory.id))
        return _dump(FoodOriginStoryOut, result.scalars().all())
    return await cached_json(cache, "dining:stories", load)


async def get_origin_story(db: AsyncSession, story_id: int) -> Optional[FoodOriginStory]:
    return await db.get(FoodOriginStory, story_id)


async def origin_stories_by_dish(db: AsyncSession, dish_name: str) -> List[FoodOriginStory]:
    pattern = contains_pattern(dish_name.strip().lower())
    result = await db.execute(
        select(FoodOriginStory)
        .where(func.lower(FoodOriginStory.dish_name).like(pattern, escape=LIKE_ESCAPE))
        .order_by(FoodOriginStory.id)
    )
    return list(result.scalars().all())


async def origin_stories_by_cuisine(db: AsyncSession, cuisine_type: str) -> List[FoodOriginStory]:
    result = await db.execute(
        select(FoodOriginStory)
        .where(func.lower(FoodOriginStory.cuisine_type) == cuisine_type.strip().lower())
        .order_by(FoodOriginStory.id)
    )
    return list(result.scalars().all())


async def create_origin_story(
    db: AsyncSession, request: FoodOriginStoryCreate, cache: Optional[Redis] = None
) -> FoodOriginStory:
    story = FoodOriginStory(**request.model_dump())
    db.add(story)
    await db.commit()
    await db.refresh(story)
    await invalidate(cache, "dining:stories")
    logger.info("Food origin story created", story_id=story.id, dish=story.dish_name)
    return story
