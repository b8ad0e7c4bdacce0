from app.models.member import FamilyMember
from app.models.relationship import Relationship
from app.models.timeline_event import TimelineEvent
from app.models.document import Document
from app.models.processing_job import ProcessingJob

__all__ = [
    "FamilyMember",
    "Relationship",
    "TimelineEvent",
    "Document",
    "ProcessingJob",
]
