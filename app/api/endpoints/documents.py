"""Document endpoints: file references attached to family members"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.api.endpoints.family_members import raise_http_error
from app.schemas import DocumentCreate, DocumentResponse, DocumentUploadResponse
from app.services.errors import FamilyTreeError
from app.services.family_service import FamilyService
from typing import List

router = APIRouter()


@router.post("/documents", response_model=DocumentUploadResponse)
def add_document(request: DocumentCreate, db: Session = Depends(get_db)):
    """Attach a document reference to a family member"""
    try:
        document = FamilyService(db).add_document(request)
    except FamilyTreeError as e:
        raise_http_error(e)

    return DocumentUploadResponse(
        success=True,
        message="Document uploaded successfully",
        document=document
    )


@router.get("/family-members/{member_id}/documents", response_model=List[DocumentResponse])
def list_documents(member_id: int, db: Session = Depends(get_db)):
    """Get the documents attached to a family member"""
    try:
        return FamilyService(db).list_documents(member_id)
    except FamilyTreeError as e:
        raise_http_error(e)


@router.delete("/documents/{document_id}")
def delete_document(document_id: int, db: Session = Depends(get_db)):
    """Delete a document reference"""
    try:
        FamilyService(db).delete_document(document_id)
    except FamilyTreeError as e:
        raise_http_error(e)

    return {"success": True}
