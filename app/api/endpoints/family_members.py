"""Family member endpoints: CRUD with relationship lists and timeline events"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas import (
    MemberCreate,
    MemberResponse,
    MemberUpdate,
    TimelineEventCreate,
    TimelineEventResponse,
)
from app.services.errors import FamilyTreeError
from app.services.family_service import FamilyService
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def raise_http_error(error: FamilyTreeError):
    logger.warning(f"Request rejected ({error.status_code}): {error.message}")
    raise HTTPException(status_code=error.status_code, detail=error.detail)


@router.get("/family-members", response_model=List[MemberResponse])
def list_family_members(db: Session = Depends(get_db)):
    """
    Get all family members
    Each member carries its relationships, timeline events and documents
    """
    return FamilyService(db).list_members()


@router.get("/family-members/{member_id}", response_model=MemberResponse)
def get_family_member(member_id: int, db: Session = Depends(get_db)):
    """Get one family member with its relationships"""
    try:
        return FamilyService(db).get_member_with_relationships(member_id)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.post("/family-members", response_model=MemberResponse)
def create_family_member(request: MemberCreate, db: Session = Depends(get_db)):
    """
    Create a family member
    Declared relationships are stored together with their reciprocals
    """
    try:
        return FamilyService(db).create_member(request)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.put("/family-members/{member_id}", response_model=MemberResponse)
def update_family_member(member_id: int, request: MemberUpdate, db: Session = Depends(get_db)):
    """
    Update a family member
    The relationship list fully replaces the member's existing relationships
    """
    try:
        return FamilyService(db).update_member(member_id, request)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.delete("/family-members/{member_id}")
def delete_family_member(member_id: int, db: Session = Depends(get_db)):
    """Delete a family member with all its relationships, events and documents"""
    try:
        deleted = FamilyService(db).delete_member(member_id)
    except FamilyTreeError as e:
        raise_http_error(e)

    return {"success": True, "deleted": deleted}


@router.get("/family-members/{member_id}/timeline-events", response_model=List[TimelineEventResponse])
def list_timeline_events(member_id: int, db: Session = Depends(get_db)):
    """Get a member's timeline in date order"""
    try:
        return FamilyService(db).list_timeline_events(member_id)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.post("/family-members/{member_id}/timeline-events", response_model=TimelineEventResponse)
def add_timeline_event(member_id: int, request: TimelineEventCreate, db: Session = Depends(get_db)):
    """Add a life event to a member's timeline"""
    try:
        return FamilyService(db).add_timeline_event(member_id, request)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.delete("/timeline-events/{event_id}")
def delete_timeline_event(event_id: int, db: Session = Depends(get_db)):
    """Delete a timeline event"""
    try:
        FamilyService(db).delete_timeline_event(event_id)
    except FamilyTreeError as e:
        raise_http_error(e)

    return {"success": True}
