from pydantic import Field
from datetime import datetime
from typing import Any, List, Literal, Optional
from app.schemas.base import CamelModel, OptionalDate
from app.schemas.timeline_schema import TimelineEventResponse
from app.schemas.document_schema import DocumentResponse


class RelationshipDeclaration(CamelModel):
    # Left untyped so the relationship engine reports field-level errors itself
    related_person_id: Any = None
    relation_type: Any = None


class SingleRelationshipRequest(RelationshipDeclaration):
    person_id: int


class MemberBase(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    gender: Literal["male", "female", "other"]
    birth_date: OptionalDate = None
    death_date: OptionalDate = None
    birth_place: Optional[str] = None
    current_location: Optional[str] = None
    bio: Optional[str] = None


class MemberCreate(MemberBase):
    relationships: List[RelationshipDeclaration] = []


class MemberUpdate(MemberCreate):
    pass


class RelatedPersonSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    gender: str
    birth_date: OptionalDate
    death_date: OptionalDate


class RelationshipResponse(CamelModel):
    id: int
    person_id: int
    related_person_id: int
    relation_type: str
    related_person: Optional[RelatedPersonSummary]


class MemberResponse(MemberBase):
    id: int
    gender: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    relationships: List[RelationshipResponse] = []
    timeline_events: List[TimelineEventResponse] = []
    documents: List[DocumentResponse] = []
