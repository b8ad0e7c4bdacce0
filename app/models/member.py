from sqlalchemy import Column, Integer, String, Date, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base


class FamilyMember(Base):
    __tablename__ = "family_members"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False, index=True)
    last_name = Column(String(100), nullable=False, index=True)
    gender = Column(String(20), nullable=False)  # male, female, other
    birth_date = Column(Date)
    death_date = Column(Date)
    birth_place = Column(String(200))
    current_location = Column(String(200))
    bio = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    outgoing_relationships = relationship(
        "Relationship",
        foreign_keys="Relationship.from_member_id",
        back_populates="from_member",
        order_by="Relationship.id",
        cascade="all",
        passive_deletes=True
    )
    incoming_relationships = relationship(
        "Relationship",
        foreign_keys="Relationship.to_member_id",
        back_populates="to_member",
        cascade="all",
        passive_deletes=True
    )
    timeline_events = relationship(
        "TimelineEvent",
        back_populates="member",
        order_by="TimelineEvent.event_date",
        cascade="all",
        passive_deletes=True
    )
    documents = relationship(
        "Document",
        back_populates="member",
        order_by="Document.id",
        cascade="all",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<FamilyMember(id={self.id}, name='{self.first_name} {self.last_name}')>"
