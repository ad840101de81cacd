from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, func

from protohub.models import Base


class Restaurant(Base):
    __tablename__ = "restaurants"
    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    cuisine_type = Column(String(100), nullable=False, index=True)
    country = Column(String(120), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(120), nullable=False)
    phone_number = Column(String(50), nullable=True)
    website = Column(Text, nullable=True)
    opening_hours = Column(String(255), nullable=False)
    price_range = Column(String(10), nullable=False)
    image_url = Column(Text, nullable=False)
    rating = Column(Float, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)


class MenuItem(Base):
    __tablename__ = "menu_items"
    id = Column(Integer, primary_key=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    image_url = Column(Text, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)


class Review(Base):
    __tablename__ = "reviews"
    id = Column(Integer, primary_key=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class Reservation(Base):
    __tablename__ = "reservations"
    id = Column(Integer, primary_key=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False)
    party_size = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    special_requests = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CulturalInsight(Base):
    __tablename__ = "cultural_insights"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    cuisine_type = Column(String(100), nullable=False, index=True)
    region = Column(String(120), nullable=False)
    image_url = Column(Text, nullable=False)


class FoodOriginStory(Base):
    __tablename__ = "food_origin_stories"
    id = Column(Integer, primary_key=True)
    dish_name = Column(String(255), nullable=False)
    cuisine_type = Column(String(100), nullable=False, index=True)
    country = Column(String(120), nullable=False)
    story_content = Column(Text, nullable=False)
    historical_period = Column(String(255), nullable=True)
    cultural_significance = Column(Text, nullable=True)
    ingredients = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
