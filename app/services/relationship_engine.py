"""
Relationship consistency engine

Keeps the directed, typed relationship graph between family members
consistent. Every stored edge (A, B, T), read as "B is A's T", has a
stored reciprocal (B, A, reciprocal(T)); edges never point at their own
source; no (from, to, type) triple is stored twice.

The engine works inside the caller's session and never commits. Wrap
calls in app.database.transaction() so each operation is all-or-nothing.
"""
import logging
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from sqlalchemy import and_, case, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from app.models import Document, FamilyMember, Relationship, TimelineEvent
from app.services.errors import (
    DuplicateRelationshipError,
    MemberReferenceError,
    RelationshipNotFoundError,
    ValidationError,
    translate_integrity_error,
)

logger = logging.getLogger(__name__)

RELATION_TYPES = ("parent", "child", "spouse")
RECIPROCAL_TYPES = {"parent": "child", "child": "parent", "spouse": "spouse"}

# Largest value the INTEGER id columns hold on PostgreSQL
MAX_MEMBER_ID = 2 ** 31 - 1

# camelCase keys accepted when declarations arrive as raw dicts
FIELD_ALIASES = {"related_person_id": "relatedPersonId", "relation_type": "relationType"}


def reciprocal(relation_type: str) -> str:
    """parent <-> child, spouse <-> spouse"""
    return RECIPROCAL_TYPES[relation_type]


class Declaration(NamedTuple):
    """A validated request to relate a member to another member"""
    related_person_id: int
    relation_type: str


class Edge(NamedTuple):
    from_member_id: int
    to_member_id: int
    relation_type: str

    def reversed(self) -> "Edge":
        return Edge(self.to_member_id, self.from_member_id, reciprocal(self.relation_type))


def _read(declaration: Any, key: str) -> Any:
    if isinstance(declaration, dict):
        value = declaration.get(key)
        if value is None:
            value = declaration.get(FIELD_ALIASES[key])
        return value
    return getattr(declaration, key, None)


def is_member_id(value: int) -> bool:
    """Inside the range of the integer id column"""
    return 0 < value <= MAX_MEMBER_ID


def _to_member_id(value: Any) -> Optional[int]:
    """Member ids arrive as ints or ASCII digit strings (HTML form values)"""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        digits = value[1:] if value.startswith("-") else value
        if not (digits.isascii() and digits.isdigit()):
            return None
        value = int(value)
    if isinstance(value, int) and is_member_id(value):
        return value
    return None


class RelationshipEngine:
    """Validates and applies relationship changes for one session"""

    def __init__(self, db: Session):
        self.db = db

    def validate_declarations(self, member_id: int, declarations: Iterable[Any]) -> List[Declaration]:
        """
        Normalize declarations and reject malformed ones.
        Raises ValidationError on a missing or non-numeric related person,
        an unknown relation type, a self-relation, or a (person, type) pair
        repeated within the request. The first occurrence of a pair wins;
        any repeat rejects the whole request.
        """
        accepted = []
        seen = set()

        for index, declaration in enumerate(declarations):
            field_prefix = f"relationships[{index}]"

            raw_id = _read(declaration, "related_person_id")
            if raw_id is None or raw_id == "":
                raise ValidationError(
                    "Please select a family member",
                    field=f"{field_prefix}.relatedPersonId"
                )

            related_id = _to_member_id(raw_id)
            if related_id is None:
                raise ValidationError(
                    f"Related person id must be a positive numeric id, got {raw_id!r}",
                    field=f"{field_prefix}.relatedPersonId"
                )

            relation_type = _read(declaration, "relation_type")
            if relation_type not in RELATION_TYPES:
                raise ValidationError(
                    f"Relationship type must be one of {', '.join(RELATION_TYPES)}",
                    field=f"{field_prefix}.relationType"
                )

            if related_id == member_id:
                raise ValidationError(
                    "A family member cannot be related to themselves",
                    field=f"{field_prefix}.relatedPersonId"
                )

            key = Declaration(related_id, relation_type)
            if key in seen:
                raise ValidationError(
                    f"Duplicate relationship: member {related_id} is already declared as '{relation_type}'",
                    field=f"{field_prefix}"
                )

            seen.add(key)
            accepted.append(key)

        return accepted

    def check_references(self, member_id: int, related_ids: Sequence[int]) -> None:
        """
        Ensure the member and every related member exist.
        Matched rows are locked for the rest of the transaction so a
        concurrent delete cannot slip in before the edges are written.
        """
        ids = {i for i in (member_id, *related_ids) if is_member_id(i)}
        found = {
            row.id for row in (
                self.db.query(FamilyMember.id)
                .filter(FamilyMember.id.in_(ids))
                .order_by(FamilyMember.id)
                .with_for_update()
            )
        }

        if member_id not in found:
            raise MemberReferenceError(f"Family member {member_id} not found", field="memberId")

        for related_id in related_ids:
            if related_id not in found:
                raise MemberReferenceError(
                    f"Related family member {related_id} not found",
                    field="relatedPersonId"
                )

    def check_existing(self, member_id: int, declarations: Sequence[Declaration]) -> None:
        """Reject declarations whose edge or reciprocal is already stored"""
        if not declarations:
            return

        clauses = []
        for declaration in declarations:
            forward = Edge(member_id, declaration.related_person_id, declaration.relation_type)
            for edge in (forward, forward.reversed()):
                clauses.append(and_(
                    Relationship.from_member_id == edge.from_member_id,
                    Relationship.to_member_id == edge.to_member_id,
                    Relationship.relation_type == edge.relation_type
                ))

        conflict = self.db.query(Relationship).filter(or_(*clauses)).order_by(Relationship.id).first()
        if conflict:
            raise DuplicateRelationshipError(
                f"Members {conflict.from_member_id} and {conflict.to_member_id} "
                f"are already related as '{conflict.relation_type}'",
                field="relationships"
            )

    @staticmethod
    def synthesize_reciprocals(member_id: int, declarations: Sequence[Declaration]) -> List[Edge]:
        """Each declared edge followed by its reciprocal"""
        edges = []
        for declaration in declarations:
            forward = Edge(member_id, declaration.related_person_id, declaration.relation_type)
            edges.append(forward)
            edges.append(forward.reversed())
        return edges

    def apply_edges(self, edges: Sequence[Edge]) -> List[Relationship]:
        """Insert edges as one batch; store constraint violations become domain errors"""
        rows = [
            Relationship(
                from_member_id=edge.from_member_id,
                to_member_id=edge.to_member_id,
                relation_type=edge.relation_type
            )
            for edge in edges
        ]

        try:
            self.db.add_all(rows)
            self.db.flush()
        except IntegrityError as e:
            logger.warning(f"Relationship batch rejected by store: {e.orig}")
            raise translate_integrity_error(e) from e

        return rows

    def delete_edges_for_member(self, member_id: int) -> int:
        """Delete every edge touching the member, in either direction"""
        return self.db.query(Relationship).filter(
            or_(Relationship.from_member_id == member_id, Relationship.to_member_id == member_id)
        ).delete()

    def declare_relationships(self, member_id: int, declarations: Iterable[Any]) -> List[Relationship]:
        """Add relationships to an existing member, with reciprocals"""
        accepted = self.validate_declarations(member_id, declarations)
        self.check_references(member_id, [d.related_person_id for d in accepted])

        if not accepted:
            return []

        self.check_existing(member_id, accepted)
        rows = self.apply_edges(self.synthesize_reciprocals(member_id, accepted))

        logger.info(f"Declared {len(accepted)} relationship(s) for member {member_id} ({len(rows)} edges)")
        return rows

    def replace_relationships(self, member_id: int, declarations: Iterable[Any]) -> List[Relationship]:
        """
        Replace the member's whole relationship set.
        Edges pointing at the member from elsewhere are removed too, so no
        stale reciprocal survives. Edges between other members are untouched.
        """
        accepted = self.validate_declarations(member_id, declarations)
        self.check_references(member_id, [d.related_person_id for d in accepted])

        removed = self.delete_edges_for_member(member_id)
        rows = []
        if accepted:
            rows = self.apply_edges(self.synthesize_reciprocals(member_id, accepted))

        logger.info(f"Replaced relationships for member {member_id}: removed {removed} edges, added {len(rows)}")
        return rows

    def delete_member(self, member_id: int) -> Dict[str, int]:
        """Delete a member with its edges, timeline events and documents"""
        member = (
            self.db.query(FamilyMember)
            .filter(FamilyMember.id == member_id)
            .with_for_update()
            .first()
        )
        if not member:
            raise MemberReferenceError(f"Family member {member_id} not found", field="memberId")

        counts = {
            "relationships": self.delete_edges_for_member(member_id),
            "timeline_events": self.db.query(TimelineEvent).filter(
                TimelineEvent.family_member_id == member_id
            ).delete(),
            "documents": self.db.query(Document).filter(
                Document.family_member_id == member_id
            ).delete(),
        }
        self.db.query(FamilyMember).filter(FamilyMember.id == member_id).delete()
        self.db.flush()

        logger.info(f"Deleted member {member_id} with {counts}")
        return counts

    def delete_relationship(self, relationship_id: int) -> int:
        """Delete one edge by id together with its reciprocal"""
        edge = (
            self.db.query(Relationship)
            .filter(Relationship.id == relationship_id)
            .with_for_update()
            .first()
        )
        if not edge:
            raise RelationshipNotFoundError(f"Relationship {relationship_id} not found")

        counterpart = Edge(edge.from_member_id, edge.to_member_id, edge.relation_type).reversed()
        deleted = self.db.query(Relationship).filter(
            or_(
                Relationship.id == relationship_id,
                and_(
                    Relationship.from_member_id == counterpart.from_member_id,
                    Relationship.to_member_id == counterpart.to_member_id,
                    Relationship.relation_type == counterpart.relation_type
                )
            )
        ).delete()

        logger.info(f"Deleted relationship {relationship_id} and its reciprocal ({deleted} edges)")
        return deleted

    def find_asymmetric_edges(self) -> List[Relationship]:
        """Stored edges whose reciprocal is missing"""
        counterpart = aliased(Relationship)
        reciprocal_type = case(RECIPROCAL_TYPES, value=Relationship.relation_type)

        return (
            self.db.query(Relationship)
            .outerjoin(counterpart, and_(
                counterpart.from_member_id == Relationship.to_member_id,
                counterpart.to_member_id == Relationship.from_member_id,
                counterpart.relation_type == reciprocal_type
            ))
            .filter(counterpart.id.is_(None))
            .order_by(Relationship.id)
            .all()
        )

    def repair_symmetry(self, asymmetric: Optional[Sequence[Relationship]] = None) -> List[Relationship]:
        """Insert the missing reciprocal for every asymmetric edge"""
        if asymmetric is None:
            asymmetric = self.find_asymmetric_edges()
        if not asymmetric:
            return []

        missing = [
            Edge(row.from_member_id, row.to_member_id, row.relation_type).reversed()
            for row in asymmetric
        ]
        rows = self.apply_edges(missing)
        logger.info(f"Restored {len(rows)} missing reciprocal edge(s)")
        return rows
