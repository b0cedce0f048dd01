from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from smartlesson.schemas.lesson import CamelModel


class ResourceDetail(BaseModel):
    type: str
    title: str
    url: str
    description: str
    tags: Optional[List[str]] = None


class ResourceItem(BaseModel):
    """What ``fetch-resources`` returns per row"""
    id: str
    resource: ResourceDetail


class ResourceSuggestion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    plan_id: str
    resource: ResourceDetail
    created_at: Optional[datetime] = None


class FetchResourcesRequest(CamelModel):
    plan_id: str = Field(..., min_length=1)
