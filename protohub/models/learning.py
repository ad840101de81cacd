from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func

from protohub.models import Base


class Subject(Base):
    __tablename__ = "subjects"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    code = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    color = Column(String(20), nullable=True)


class Course(Base):
    __tablename__ = "courses"
    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    level = Column(String(20), nullable=False)
    image_url = Column(Text, nullable=True)
    certification_type = Column(String(20), nullable=True)


class Lesson(Base):
    __tablename__ = "lessons"
    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)
    order = Column(Integer, nullable=False)
    duration = Column(Integer, nullable=True)


class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_user_progress"),)
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    last_lesson_id = Column(Integer, ForeignKey("lessons.id", ondelete="SET NULL"), nullable=True)
    percent_complete = Column(Integer, nullable=False, default=0)
    last_accessed = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class AiInstructor(Base):
    __tablename__ = "ai_instructors"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    appearance = Column(Text, nullable=False)
    voice = Column(String(100), nullable=False)
    subject_specialties = Column(JSON, nullable=False, default=list)
    language = Column(String(10), nullable=False, default="en")
    # 0-50, shown to users as 0.0-5.0 stars
    rating = Column(Integer, nullable=False, default=50)
    rating_count = Column(Integer, nullable=False, default=0)


class UserInstructor(Base):
    __tablename__ = "user_instructors"
    __table_args__ = (UniqueConstraint("user_id", "instructor_id", name="uq_user_instructor"),)
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    instructor_id = Column(Integer, ForeignKey("ai_instructors.id", ondelete="CASCADE"), nullable=False)
    is_customized = Column(Boolean, nullable=False, default=False)
    custom_settings = Column(JSON, nullable=True)


class ActivityEntry(Base):
    __tablename__ = "activity_feed"
    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    activity_type = Column(String(50), nullable=False)
    resource_id = Column(Integer, nullable=True)
    resource_type = Column(String(50), nullable=True)
    details = Column(JSON, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
