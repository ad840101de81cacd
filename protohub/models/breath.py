from sqlalchemy import Column, DateTime, Float, Integer, String, Text, func

from protohub.models import Base


class BreathTest(Base):
    __tablename__ = "breath_tests"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    bac = Column(Float, nullable=False)
    level = Column(String(10), nullable=False)
    message = Column(Text, nullable=False)
    location = Column(String(255), nullable=True)
    audio_sample = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
