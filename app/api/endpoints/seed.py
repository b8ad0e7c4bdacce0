"""Seed endpoint for loading the sample family"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.services.errors import FamilyTreeError
from app.services.seed import seed_sample_family
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/seed")
def seed_data(db: Session = Depends(get_db)):
    """Clear the archive and load a three-generation sample family"""
    try:
        stats = seed_sample_family(db)
    except FamilyTreeError as e:
        logger.error(f"Error seeding data: {e.message}")
        raise HTTPException(status_code=e.status_code, detail={"success": False, "message": "Error seeding data"})

    return {"success": True, "message": "Sample data seeded successfully", "stats": stats}
