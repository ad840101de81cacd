from sqlalchemy import JSON, Column, DateTime, Integer, Numeric, String, Text, func

from protohub.models import Base


class Service(Base):
    __tablename__ = "services"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)


class Professional(Base):
    __tablename__ = "professionals"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    profession = Column(String(100), nullable=False)
    bio = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)
    rating = Column(Numeric(3, 1), nullable=False)
    review_count = Column(Integer, nullable=False, default=0)
    verifications = Column(JSON, nullable=False, default=list)


class ServiceTestimonial(Base):
    __tablename__ = "service_testimonials"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    location = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    service = Column(String(100), nullable=False)
    image_url = Column(Text, nullable=False)


class ContactSubmission(Base):
    __tablename__ = "contact_forms"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
