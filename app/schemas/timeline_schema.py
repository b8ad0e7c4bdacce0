from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from app.schemas.base import CamelModel, RequiredDate

EventType = Literal["birth", "marriage", "education", "career", "death", "other"]


class TimelineEventCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    event_date: RequiredDate
    location: Optional[str] = None
    event_type: EventType = "other"


class TimelineEventResponse(CamelModel):
    id: int
    family_member_id: int
    title: str
    description: Optional[str]
    event_date: RequiredDate
    location: Optional[str]
    event_type: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
