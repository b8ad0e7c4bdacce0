"""Relationship endpoints: single declarations, deletion and symmetry audits"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.database import get_db
from app.api.endpoints.family_members import raise_http_error
from app.models import ProcessingJob
from app.schemas import RelationshipResponse, SingleRelationshipRequest
from app.services.errors import FamilyTreeError
from app.services.family_service import FamilyService
from app.tasks.celery_tasks import audit_relationships_task
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/relationships", response_model=List[RelationshipResponse])
def create_relationship(request: SingleRelationshipRequest, db: Session = Depends(get_db)):
    """
    Relate an existing member to another member
    Returns the declared edge followed by its reciprocal
    """
    try:
        return FamilyService(db).declare_relationship(request)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.delete("/relationships/{relationship_id}")
def delete_relationship(relationship_id: int, db: Session = Depends(get_db)):
    """Delete a relationship and its reciprocal"""
    try:
        deleted = FamilyService(db).delete_relationship(relationship_id)
    except FamilyTreeError as e:
        raise_http_error(e)

    return {"success": True, "deleted": deleted}


@router.post("/relationships/audit")
def audit_relationships(
    repair: bool = Query(default=False),
    db: Session = Depends(get_db)
):
    """
    Queue a symmetry audit of the relationship table
    With repair=true the missing reciprocal edges are inserted
    """
    try:
        job = ProcessingJob(
            job_type="relationship_audit",
            status="pending",
            result_data={"repair": repair}
        )
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create audit job: {e}")
        raise HTTPException(status_code=500, detail={"message": "Failed to queue audit"})

    audit_relationships_task.delay(job.id, repair)
    logger.info(f"Queued relationship audit job {job.id} (repair={repair})")

    return {"jobId": job.id, "status": "pending", "repair": repair}
