from app.schemas.member_schema import (
    MemberCreate,
    MemberUpdate,
    MemberResponse,
    RelatedPersonSummary,
    RelationshipDeclaration,
    RelationshipResponse,
    SingleRelationshipRequest,
)
from app.schemas.timeline_schema import TimelineEventCreate, TimelineEventResponse
from app.schemas.document_schema import DocumentCreate, DocumentResponse, DocumentUploadResponse

__all__ = [
    "MemberCreate",
    "MemberUpdate",
    "MemberResponse",
    "RelatedPersonSummary",
    "RelationshipDeclaration",
    "RelationshipResponse",
    "SingleRelationshipRequest",
    "TimelineEventCreate",
    "TimelineEventResponse",
    "DocumentCreate",
    "DocumentResponse",
    "DocumentUploadResponse",
]
