from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base


class Relationship(Base):
    """Directed edge: to_member is from_member's <relation_type>"""
    __tablename__ = "relationships"
    __table_args__ = (
        UniqueConstraint("from_member_id", "to_member_id", "relation_type", name="unique_relation_idx"),
        CheckConstraint("from_member_id <> to_member_id", name="no_self_relation"),
        CheckConstraint("relation_type IN ('parent', 'child', 'spouse')", name="valid_relation_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    from_member_id = Column(Integer, ForeignKey("family_members.id", ondelete="CASCADE"), nullable=False, index=True)
    to_member_id = Column(Integer, ForeignKey("family_members.id", ondelete="CASCADE"), nullable=False, index=True)
    relation_type = Column(String(20), nullable=False)  # parent, child, spouse
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    from_member = relationship("FamilyMember", foreign_keys=[from_member_id], back_populates="outgoing_relationships")
    to_member = relationship("FamilyMember", foreign_keys=[to_member_id], back_populates="incoming_relationships")

    def __repr__(self):
        return f"<Relationship(from={self.from_member_id}, to={self.to_member_id}, type='{self.relation_type}')>"
