from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    family_member_id = Column(Integer, ForeignKey("family_members.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    document_type = Column(String(20), nullable=False)  # photo, certificate, record
    file_url = Column(String(500), nullable=False)
    description = Column(Text)
    upload_date = Column(DateTime, default=datetime.utcnow)

    member = relationship("FamilyMember", back_populates="documents")

    def __repr__(self):
        return f"<Document(id={self.id}, member={self.family_member_id}, title='{self.title}')>"
