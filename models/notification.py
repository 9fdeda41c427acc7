from enum import Enum

from sqlalchemy import Boolean, Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class NotificationType(str, Enum):
    LIKE = "like"
    JOIN = "join"


class Notification(BaseModel, Base):
    __tablename__ = "notifications"

    recipient_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # events live in another service; keep the id opaque
    event_id = Column(String(64), nullable=False)
    type = Column(
        SAEnum(NotificationType, name="notification_type", native_enum=False,
               values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_read = Column(Boolean, nullable=False, default=False)

    recipient = relationship("User", foreign_keys=[recipient_id], back_populates="notifications")
    sender = relationship("User", foreign_keys=[sender_id])

    __table_args__ = (
        Index("ix_notifications_recipient_read", "recipient_id", "is_read"),
    )
