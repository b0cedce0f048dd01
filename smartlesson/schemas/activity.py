from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from smartlesson.schemas.lesson import CamelModel


class LogEventRequest(CamelModel):
    event_type: str = Field(..., min_length=1)
    plan_id: Optional[str] = None
    resource_id: Optional[str] = None
    quiz_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class LogEventResponse(BaseModel):
    success: bool


class CalendarEventCreate(CamelModel):
    plan_id: str = Field(..., min_length=1)
    scheduled_for: datetime
    title: Optional[str] = None


class CalendarEventRecord(BaseModel):
    """Row shape of ``calendar_events``"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    plan_id: str
    user_id: str
    scheduled_for: datetime
    title: str
    created_at: Optional[datetime] = None
