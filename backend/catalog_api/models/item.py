"""Item table"""

from sqlalchemy import Column, String, Text, JSON
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class ItemRecord(Base, TimestampMixin):
    """Relational shape of a catalog item (not written by the in-memory store)"""

    __tablename__ = "items"

    id = Column(String(36), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(Text)
    tags = Column(JSON, default=list)
    ai_insights = Column(JSON)

    # Relationships
    analytics = relationship("AIAnalytics", back_populates="item", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<ItemRecord(id={self.id}, name='{self.name}')>"
