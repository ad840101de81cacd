from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from protohub.models import Base


class Property(Base):
    __tablename__ = "properties"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    city = Column(String(120), nullable=False)
    country = Column(String(120), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(Text, nullable=False)
    host_id = Column(String(64), nullable=False)  # Hosts live in the auth service
    rating = Column(Numeric(3, 2), nullable=True)
    review_count = Column(Integer, nullable=False, default=0)
    property_type = Column(String(50), nullable=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_unique_stay = Column(Boolean, nullable=False, default=False)
    unique_stay_type = Column(String(100), nullable=True)
    available_start = Column(DateTime(timezone=True), nullable=True)
    available_end = Column(DateTime(timezone=True), nullable=True)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    max_guests = Column(Integer, nullable=False)

    bookings = relationship("Booking", back_populates="property", lazy="raise")


class Destination(Base):
    __tablename__ = "destinations"
    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    country = Column(String(120), nullable=False)
    image_url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)


class Testimonial(Base):
    __tablename__ = "testimonials"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    user_country = Column(String(120), nullable=True)
    user_name = Column(String(120), nullable=False)
    user_image = Column(Text, nullable=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=True)


class Booking(Base):
    __tablename__ = "bookings"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    check_in = Column(DateTime(timezone=True), nullable=False)
    check_out = Column(DateTime(timezone=True), nullable=False)
    guests = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    property = relationship("Property", back_populates="bookings", lazy="raise")
