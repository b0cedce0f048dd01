from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smartlesson.core.logging import logger
from smartlesson.db.database import get_db
from smartlesson.schemas.activity import (
    CalendarEventCreate,
    CalendarEventRecord,
    LogEventRequest,
    LogEventResponse,
)
from smartlesson.schemas.lesson import LessonPlanRecord
from smartlesson.schemas.resource import FetchResourcesRequest, ResourceItem
from smartlesson.services import activity_service

router = APIRouter(tags=["activity"])


def require_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


@router.post("/fetch-resources", response_model=List[ResourceItem])
async def fetch_resources(request: FetchResourcesRequest, db: Session = Depends(get_db)):
    try:
        rows = activity_service.list_resources(db, request.plan_id)
    except SQLAlchemyError as e:
        logger.error(f"Error in fetch-resources: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return [ResourceItem(id=row.id, resource=row.resource) for row in rows]


@router.post("/log-event", response_model=LogEventResponse)
async def log_event(
    request: LogEventRequest,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        activity_service.log_event(db, user_id, request)
    except SQLAlchemyError as e:
        logger.error(f"Error logging event: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return LogEventResponse(success=True)


@router.post("/calendar-events", response_model=CalendarEventRecord)
async def schedule_lesson(
    request: CalendarEventCreate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    return activity_service.schedule_lesson(db, user_id, request)


@router.get("/calendar-events", response_model=List[CalendarEventRecord])
async def list_calendar_events(user_id: str, db: Session = Depends(get_db)):
    return activity_service.list_calendar_events(db, user_id)


@router.get("/calendar-events/unscheduled", response_model=List[LessonPlanRecord])
async def list_unscheduled_lessons(user_id: str, db: Session = Depends(get_db)):
    return activity_service.list_unscheduled_plans(db, user_id)
