"""Jobs endpoint for monitoring background audits"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.models import ProcessingJob
from app.schemas.base import CamelModel
from datetime import datetime
from typing import Optional, Dict, Any

router = APIRouter()


class JobStatusResponse(CamelModel):
    id: int
    job_type: str
    status: str
    records_processed: int
    total_records: int
    result_data: Optional[Dict[str, Any]]
    error_message: Optional[str]
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    created_at: Optional[datetime]


@router.get("/jobs/{job_id}", response_model=JobStatusResponse)
def get_job_status(job_id: int, db: Session = Depends(get_db)):
    """Get the status and findings of a relationship audit job"""
    job = db.query(ProcessingJob).filter(ProcessingJob.id == job_id).first()

    if not job:
        raise HTTPException(status_code=404, detail={"message": f"Job {job_id} not found"})

    return JobStatusResponse.model_validate(job)
