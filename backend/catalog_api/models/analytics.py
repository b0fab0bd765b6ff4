"""AI analytics table"""

from sqlalchemy import Column, Integer, String, Text, JSON, Float, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class AIAnalytics(Base):
    """Log row for one AI interaction against an item"""

    __tablename__ = "ai_analytics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(String(36), ForeignKey("items.id"), index=True)
    action_type = Column(Text, nullable=False)
    ai_response = Column(JSON)
    confidence_score = Column(Float)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    item = relationship("ItemRecord", back_populates="analytics")

    def __repr__(self):
        return f"<AIAnalytics(id={self.id}, item_id={self.item_id}, action='{self.action_type}')>"
