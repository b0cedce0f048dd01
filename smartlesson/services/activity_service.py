"""Resource lookups, analytics events and calendar scheduling."""

from typing import List

from sqlalchemy.orm import Session

from smartlesson.core.logging import logger
from smartlesson.models.records import AnalyticsEvent, CalendarEvent, LessonPlan, ResourceSuggestion
from smartlesson.schemas.activity import CalendarEventCreate, LogEventRequest
from smartlesson.services.lesson_service import get_lesson_plan


def list_resources(db: Session, plan_id: str) -> List[ResourceSuggestion]:
    logger.info(f"Fetching resources for planId: {plan_id}")
    return db.query(ResourceSuggestion).filter(ResourceSuggestion.plan_id == plan_id).all()


def log_event(db: Session, user_id: str, request: LogEventRequest) -> AnalyticsEvent:
    metadata = dict(request.metadata or {})
    if request.resource_id:
        metadata["resourceId"] = request.resource_id

    event = AnalyticsEvent(
        user_id=user_id,
        event_type=request.event_type,
        plan_id=request.plan_id,
        quiz_id=request.quiz_id,
        event_metadata=metadata or None,
    )
    db.add(event)
    db.commit()
    logger.info(f"Logging event: {request.event_type} for user: {user_id}")
    return event


def schedule_lesson(db: Session, user_id: str, request: CalendarEventCreate) -> CalendarEvent:
    plan = get_lesson_plan(db, request.plan_id)
    title = request.title or (plan.content or {}).get("lessonTopic") or "Lesson"
    event = CalendarEvent(
        plan_id=plan.id,
        user_id=user_id,
        scheduled_for=request.scheduled_for,
        title=title,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def list_calendar_events(db: Session, user_id: str) -> List[CalendarEvent]:
    return (
        db.query(CalendarEvent)
        .filter(CalendarEvent.user_id == user_id)
        .order_by(CalendarEvent.scheduled_for)
        .all()
    )


def list_unscheduled_plans(db: Session, user_id: str) -> List[LessonPlan]:
    scheduled = {event.plan_id for event in list_calendar_events(db, user_id)}
    plans = (
        db.query(LessonPlan)
        .filter(LessonPlan.user_id == user_id)
        .order_by(LessonPlan.created_at.desc())
        .all()
    )
    return [plan for plan in plans if plan.id not in scheduled]
