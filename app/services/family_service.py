"""Transactional family tree operations used by the API layer"""
import logging
from datetime import datetime
from typing import Dict, List

from sqlalchemy.orm import Session, joinedload, selectinload

from app.database import transaction
from app.models import Document, FamilyMember, Relationship, TimelineEvent
from app.schemas import (
    DocumentCreate,
    DocumentResponse,
    MemberCreate,
    MemberResponse,
    MemberUpdate,
    RelatedPersonSummary,
    RelationshipResponse,
    SingleRelationshipRequest,
    TimelineEventCreate,
    TimelineEventResponse,
)
from app.services.errors import MemberReferenceError, RecordNotFoundError
from app.services.relationship_engine import RelationshipEngine

logger = logging.getLogger(__name__)

MEMBER_FIELDS = (
    "first_name",
    "last_name",
    "gender",
    "birth_date",
    "death_date",
    "birth_place",
    "current_location",
    "bio",
)


def to_relationship_response(edge: Relationship) -> RelationshipResponse:
    related = edge.to_member
    return RelationshipResponse(
        id=edge.id,
        person_id=edge.from_member_id,
        related_person_id=edge.to_member_id,
        relation_type=edge.relation_type,
        related_person=RelatedPersonSummary.model_validate(related) if related else None
    )


def to_member_response(member: FamilyMember) -> MemberResponse:
    """Member with its outgoing relationships in insertion order"""
    return MemberResponse(
        id=member.id,
        first_name=member.first_name,
        last_name=member.last_name,
        gender=member.gender,
        birth_date=member.birth_date,
        death_date=member.death_date,
        birth_place=member.birth_place,
        current_location=member.current_location,
        bio=member.bio,
        created_at=member.created_at,
        updated_at=member.updated_at,
        relationships=[to_relationship_response(edge) for edge in member.outgoing_relationships],
        timeline_events=[TimelineEventResponse.model_validate(event) for event in member.timeline_events],
        documents=[DocumentResponse.model_validate(doc) for doc in member.documents]
    )


class FamilyService:
    """Member, relationship, timeline and document operations for one session"""

    def __init__(self, db: Session):
        self.db = db
        self.engine = RelationshipEngine(db)

    def _member_query(self):
        return self.db.query(FamilyMember).options(
            selectinload(FamilyMember.outgoing_relationships).joinedload(Relationship.to_member),
            selectinload(FamilyMember.timeline_events),
            selectinload(FamilyMember.documents)
        )

    def _require_member(self, member_id: int) -> None:
        exists = self.db.query(FamilyMember.id).filter(FamilyMember.id == member_id).first()
        if not exists:
            raise MemberReferenceError(f"Family member {member_id} not found", field="memberId")

    def list_members(self) -> List[MemberResponse]:
        members = self._member_query().order_by(FamilyMember.id).all()
        return [to_member_response(member) for member in members]

    def get_member_with_relationships(self, member_id: int) -> MemberResponse:
        member = self._member_query().filter(FamilyMember.id == member_id).first()
        if not member:
            raise MemberReferenceError(f"Family member {member_id} not found", field="memberId")
        return to_member_response(member)

    def create_member(self, data: MemberCreate) -> MemberResponse:
        """Insert a member and its declared relationships in one transaction"""
        with transaction(self.db):
            member = FamilyMember(**data.model_dump(include=set(MEMBER_FIELDS)))
            self.db.add(member)
            self.db.flush()
            member_id = member.id

            self.engine.declare_relationships(member_id, data.relationships)

        logger.info(f"Created family member {member_id} ({data.first_name} {data.last_name})")
        return self.get_member_with_relationships(member_id)

    def update_member(self, member_id: int, data: MemberUpdate) -> MemberResponse:
        """Replace scalar fields and the full relationship set"""
        with transaction(self.db):
            member = (
                self.db.query(FamilyMember)
                .filter(FamilyMember.id == member_id)
                .with_for_update()
                .first()
            )
            if not member:
                raise MemberReferenceError(f"Family member {member_id} not found", field="memberId")

            for field, value in data.model_dump(include=set(MEMBER_FIELDS)).items():
                setattr(member, field, value)
            member.updated_at = datetime.utcnow()

            self.engine.replace_relationships(member_id, data.relationships)

        logger.info(f"Updated family member {member_id}")
        return self.get_member_with_relationships(member_id)

    def delete_member(self, member_id: int) -> Dict[str, int]:
        with transaction(self.db):
            return self.engine.delete_member(member_id)

    def declare_relationship(self, request: SingleRelationshipRequest) -> List[RelationshipResponse]:
        """Single-declaration path; returns the edge and its reciprocal"""
        with transaction(self.db):
            rows = self.engine.declare_relationships(request.person_id, [request])
            edge_ids = [row.id for row in rows]

        edges = (
            self.db.query(Relationship)
            .options(joinedload(Relationship.to_member))
            .filter(Relationship.id.in_(edge_ids))
            .order_by(Relationship.id)
            .all()
        )
        return [to_relationship_response(edge) for edge in edges]

    def delete_relationship(self, relationship_id: int) -> int:
        with transaction(self.db):
            return self.engine.delete_relationship(relationship_id)

    def add_timeline_event(self, member_id: int, data: TimelineEventCreate) -> TimelineEventResponse:
        with transaction(self.db):
            self._require_member(member_id)
            event = TimelineEvent(family_member_id=member_id, **data.model_dump())
            self.db.add(event)

        self.db.refresh(event)
        logger.info(f"Added {event.event_type} event {event.id} to member {member_id}")
        return TimelineEventResponse.model_validate(event)

    def list_timeline_events(self, member_id: int) -> List[TimelineEventResponse]:
        self._require_member(member_id)
        events = (
            self.db.query(TimelineEvent)
            .filter(TimelineEvent.family_member_id == member_id)
            .order_by(TimelineEvent.event_date, TimelineEvent.id)
            .all()
        )
        return [TimelineEventResponse.model_validate(event) for event in events]

    def delete_timeline_event(self, event_id: int) -> None:
        with transaction(self.db):
            deleted = self.db.query(TimelineEvent).filter(TimelineEvent.id == event_id).delete()
            if not deleted:
                raise RecordNotFoundError(f"Timeline event {event_id} not found")

    def add_document(self, data: DocumentCreate) -> DocumentResponse:
        with transaction(self.db):
            self._require_member(data.family_member_id)
            document = Document(upload_date=datetime.utcnow(), **data.model_dump())
            self.db.add(document)

        self.db.refresh(document)
        logger.info(f"Attached {document.document_type} '{document.title}' to member {document.family_member_id}")
        return DocumentResponse.model_validate(document)

    def list_documents(self, member_id: int) -> List[DocumentResponse]:
        self._require_member(member_id)
        documents = (
            self.db.query(Document)
            .filter(Document.family_member_id == member_id)
            .order_by(Document.id)
            .all()
        )
        return [DocumentResponse.model_validate(doc) for doc in documents]

    def delete_document(self, document_id: int) -> None:
        with transaction(self.db):
            deleted = self.db.query(Document).filter(Document.id == document_id).delete()
            if not deleted:
                raise RecordNotFoundError(f"Document {document_id} not found")
