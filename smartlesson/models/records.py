import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from smartlesson.db.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LessonPlan(Base):
    """Generated lesson plan; `content` holds the whole LessonContent document"""
    __tablename__ = "lesson_plans"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), index=True, nullable=False)
    content = Column(JSON, nullable=False)
    parameters = Column(JSON, nullable=False)  # original generation request
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    quizzes = relationship("Quiz", back_populates="plan", cascade="all, delete-orphan")
    resources = relationship("ResourceSuggestion", back_populates="plan", cascade="all, delete-orphan")
    calendar_events = relationship("CalendarEvent", back_populates="plan", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<LessonPlan(id={self.id}, user_id={self.user_id})>"


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(String(36), primary_key=True, default=new_id)
    plan_id = Column(String(36), ForeignKey("lesson_plans.id", ondelete="CASCADE"), index=True, nullable=False)
    content = Column(JSON, nullable=False)  # [{question, choices, answer}]
    parameters = Column(JSON)  # {topics, learnerLevel, numQuestions}
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    plan = relationship("LessonPlan", back_populates="quizzes")


class ResourceSuggestion(Base):
    __tablename__ = "resource_suggestions"

    id = Column(String(36), primary_key=True, default=new_id)
    plan_id = Column(String(36), ForeignKey("lesson_plans.id", ondelete="CASCADE"), index=True, nullable=False)
    resource = Column(JSON, nullable=False)  # {type, title, url, description, tags}
    created_at = Column(DateTime(timezone=True), default=utcnow)

    plan = relationship("LessonPlan", back_populates="resources")


class AnalyticsEvent(Base):
    """Usage event; plan and quiz ids are loose references, not enforced"""
    __tablename__ = "analytics_events"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), index=True, nullable=False)
    event_type = Column(String(64), nullable=False)
    plan_id = Column(String(36), index=True)
    quiz_id = Column(String(36))
    event_metadata = Column("metadata", JSON)
    occurred_at = Column(DateTime(timezone=True), default=utcnow)


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(String(36), primary_key=True, default=new_id)
    plan_id = Column(String(36), ForeignKey("lesson_plans.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String(64), index=True, nullable=False)
    scheduled_for = Column(DateTime(timezone=True), nullable=False)
    title = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    plan = relationship("LessonPlan", back_populates="calendar_events")


class Profile(Base):
    """One row per signed-in user; created on first save"""
    __tablename__ = "profiles"

    user_id = Column(String(64), primary_key=True)
    full_name = Column(String(255))
    role = Column(String(32), default="teacher")  # assigned by an administrator
    subjects = Column(JSON, default=list)
    school_name = Column(String(255))
    location = Column(String(255))
    bio = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
