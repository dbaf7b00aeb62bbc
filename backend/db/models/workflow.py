"""Stored workflow definitions."""

from typing import Optional

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from db.base import BaseModel


class AutomationWorkflow(BaseModel):
    """A workflow definition row.

    Attributes:
        id: Workflow id referenced by run requests
        name: Human-readable name
        description: Free-form description
        steps: JSON list of step definitions
        is_active: Inactive workflows are treated as not found
    """

    __tablename__ = "automation_workflows"

    name: Mapped[str] = mapped_column(nullable=False, default="", index=True)
    description: Mapped[str] = mapped_column(nullable=False, default="")
    steps: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True, index=True)
