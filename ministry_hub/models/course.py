from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, generate_uuid


class Course(Base):
    """Seeded discipleship course"""
    __tablename__ = "courses"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    difficulty_level = Column(String(20), default="beginner")
    required_tier = Column(String(20), default="free", nullable=False)
    status = Column(String(20), default="published", nullable=False)
    estimated_hours = Column(Integer, nullable=True)
    has_certificate = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    modules = relationship(
        "CourseModule",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseModule.sequence_order",
        lazy="selectin",
    )


class CourseModule(Base):
    __tablename__ = "course_modules"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    course_id = Column(GUID, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    slug = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sequence_order = Column(Integer, default=1, nullable=False)
    has_quiz = Column(Boolean, default=False, nullable=False)

    course = relationship("Course", back_populates="modules")
    lessons = relationship(
        "CourseLesson",
        back_populates="module",
        cascade="all, delete-orphan",
        order_by="CourseLesson.sequence_order",
        lazy="selectin",
    )


class CourseLesson(Base):
    __tablename__ = "course_lessons"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    module_id = Column(GUID, ForeignKey("course_modules.id", ondelete="CASCADE"), nullable=False, index=True)
    slug = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    content_type = Column(String(20), default="text")
    content_html = Column(Text, nullable=True)
    estimated_minutes = Column(Integer, default=10)
    is_preview = Column(Boolean, default=False, nullable=False)
    sequence_order = Column(Integer, default=1, nullable=False)

    module = relationship("CourseModule", back_populates="lessons")
