"""Task model definitions."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from taskist.database import Base


class Priority(str, Enum):
    PT = "pt"
    STRENGTH = "strength"
    CARDIO = "cardio"
    GROUP = "group"


class TaskStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"
    NO_SHOW = "no_show"


class Task(Base):
    """Represents a scheduled training session owned by a single user."""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(String, nullable=False, default=Priority.PT.value)
    status = Column(String, nullable=False, default=TaskStatus.SCHEDULED.value)
    due_date = Column(String)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    owner = relationship("User", back_populates="tasks")
