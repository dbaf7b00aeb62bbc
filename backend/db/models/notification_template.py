"""Notification template model."""

from sqlalchemy.orm import Mapped, mapped_column

from db.base import BaseModel


class NotificationTemplateModel(BaseModel):
    """Subject and body used by notification steps, with {field} placeholders."""

    __tablename__ = "notification_templates"

    name: Mapped[str] = mapped_column(nullable=False, default="")
    subject: Mapped[str] = mapped_column(nullable=False, default="")
    content: Mapped[str] = mapped_column(nullable=False, default="")
