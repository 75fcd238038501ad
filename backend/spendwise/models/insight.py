from sqlalchemy import Column, String, Text, Integer, Float, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import TimestampedModel


class InsightDB(TimestampedModel):
    __tablename__ = "insights"

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    position = Column(Integer, nullable=False)  # Display order, preserved as given
    category = Column(String(20), nullable=False, default="info")
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    action_label = Column(String(255), nullable=True)
    confidence = Column(Float, nullable=True)

    user = relationship("UserDB", back_populates="insights")

    __table_args__ = (
        Index("idx_insights_user_position", "user_id", "position"),
    )
