from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from app.schemas.base import CamelModel


class DocumentCreate(CamelModel):
    family_member_id: int
    title: str = Field(min_length=1)
    document_type: Literal["photo", "certificate", "record"]
    file_url: str = Field(min_length=1)
    description: Optional[str] = None


class DocumentResponse(CamelModel):
    id: int
    family_member_id: int
    title: str
    document_type: str
    file_url: str
    description: Optional[str]
    upload_date: Optional[datetime]


class DocumentUploadResponse(CamelModel):
    success: bool
    message: str
    document: DocumentResponse
