"""Sample family used to populate an empty archive"""
from datetime import date
import logging

from sqlalchemy.orm import Session

from app.database import transaction
from app.models import Document, FamilyMember, Relationship, TimelineEvent
from app.services.relationship_engine import Declaration, RelationshipEngine

logger = logging.getLogger(__name__)


def clear_archive(db: Session) -> None:
    """Delete all rows, children before parents"""
    for model in (TimelineEvent, Document, Relationship, FamilyMember):
        db.query(model).delete()


def seed_sample_family(db: Session) -> dict:
    """
    Replace the archive contents with three generations of the Smith family.
    Relationships go through the engine so reciprocals are synthesized.
    """
    with transaction(db):
        clear_archive(db)

        grandfather = FamilyMember(
            first_name="John",
            last_name="Smith",
            gender="male",
            birth_date=date(1940, 3, 15),
            birth_place="London",
            bio="Family patriarch"
        )
        grandmother = FamilyMember(
            first_name="Mary",
            last_name="Smith",
            gender="female",
            birth_date=date(1942, 6, 20),
            birth_place="Manchester",
            bio="Family matriarch"
        )
        father = FamilyMember(
            first_name="James",
            last_name="Smith",
            gender="male",
            birth_date=date(1965, 9, 10),
            birth_place="Birmingham",
            bio="Middle generation"
        )
        db.add_all([grandfather, grandmother, father])
        db.flush()

        engine = RelationshipEngine(db)
        engine.declare_relationships(grandfather.id, [Declaration(grandmother.id, "spouse")])
        engine.declare_relationships(father.id, [
            Declaration(grandfather.id, "parent"),
            Declaration(grandmother.id, "parent"),
        ])

        db.add_all([
            TimelineEvent(
                family_member_id=grandfather.id,
                title="Graduated University",
                description="Graduated from Oxford University with honors in Engineering",
                event_date=date(1962, 6, 15),
                location="Oxford",
                event_type="education"
            ),
            TimelineEvent(
                family_member_id=grandfather.id,
                title="Marriage",
                description="Married Mary in a beautiful ceremony",
                event_date=date(1964, 8, 20),
                location="London",
                event_type="marriage"
            ),
            TimelineEvent(
                family_member_id=grandmother.id,
                title="Started Teaching Career",
                description="Began teaching at London Primary School",
                event_date=date(1963, 9, 1),
                location="London",
                event_type="career"
            ),
            TimelineEvent(
                family_member_id=father.id,
                title="First Job",
                description="Started working at Thames Engineering",
                event_date=date(1987, 7, 1),
                location="London",
                event_type="career"
            ),
        ])

    stats = {
        "members": db.query(FamilyMember).count(),
        "relationships": db.query(Relationship).count(),
        "timeline_events": db.query(TimelineEvent).count(),
    }
    logger.info(f"Seeded sample family: {stats}")
    return stats
