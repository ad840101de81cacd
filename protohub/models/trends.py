from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from protohub.models import Base


class Trend(Base):
    __tablename__ = "trends"
    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    category = Column(String(20), nullable=False, index=True)
    searches = Column(Integer, nullable=False)
    growth = Column(Integer, nullable=False)  # signed percent
    countries = Column(Integer, nullable=False)
    ai_summary = Column(Text, nullable=False)
    prediction = Column(String(20), nullable=True)
    region = Column(String(10), nullable=False, default="global", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TrendSubmission(Base):
    __tablename__ = "trend_submissions"
    id = Column(Integer, primary_key=True)
    topic = Column(String(255), nullable=False)
    category = Column(String(20), nullable=False)
    region = Column(String(10), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
