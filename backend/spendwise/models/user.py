from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from .base import TimestampedModel


class UserDB(TimestampedModel):
    __tablename__ = "users"

    # Subject of the identity-provider token
    external_user_id = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    image_url = Column(Text, nullable=True)
    email = Column(String(255), nullable=True, index=True)

    insights = relationship(
        "InsightDB",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="InsightDB.position",
    )
