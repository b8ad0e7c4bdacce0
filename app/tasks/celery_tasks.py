"""Celery background tasks for relationship graph maintenance"""
from celery import Celery
from app.config import get_settings
from app.database import SessionLocal, transaction
from app.models import ProcessingJob, Relationship
from app.services.relationship_engine import RelationshipEngine
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

settings = get_settings()

# Initialize Celery
celery_app = Celery(
    "family_tree_tasks",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend
)

celery_app.conf.task_routes = {
    "app.tasks.celery_tasks.*": {"queue": "family_tree"}
}


@celery_app.task(name="audit_relationships_task")
def audit_relationships_task(job_id: int, repair: bool = False):
    """
    Background task to audit relationship symmetry:
    1. Find stored edges whose reciprocal is missing
    2. Optionally insert the missing reciprocals
    3. Record findings on the processing job
    """
    db = SessionLocal()
    job = None

    try:
        job = db.query(ProcessingJob).filter(ProcessingJob.id == job_id).first()
        if not job:
            return {"error": "Job not found"}

        job.status = "running"
        job.started_at = datetime.utcnow()
        db.commit()

        engine = RelationshipEngine(db)
        repaired = 0

        with transaction(db):
            total_edges = db.query(Relationship).count()
            asymmetric = engine.find_asymmetric_edges()
            findings = [
                {
                    "id": edge.id,
                    "fromMemberId": edge.from_member_id,
                    "toMemberId": edge.to_member_id,
                    "relationType": edge.relation_type
                }
                for edge in asymmetric
            ]
            if repair and asymmetric:
                repaired = len(engine.repair_symmetry(asymmetric))

        # Mark job complete
        job.status = "completed"
        job.completed_at = datetime.utcnow()
        job.total_records = total_edges
        job.records_processed = total_edges
        job.result_data = {
            "asymmetric_edges": len(findings),
            "repaired": repaired,
            "edges": findings
        }
        db.commit()

        logger.info(f"Relationship audit job {job_id}: {len(findings)} asymmetric edge(s), {repaired} repaired")
        return {
            "status": "success",
            "asymmetric_edges": len(findings),
            "repaired": repaired
        }

    except Exception as e:
        logger.error(f"Relationship audit job {job_id} failed: {e}")
        db.rollback()
        if job is not None:
            job.status = "failed"
            job.error_message = str(e)
            job.completed_at = datetime.utcnow()
            db.commit()
        return {"status": "error", "message": str(e)}

    finally:
        db.close()
