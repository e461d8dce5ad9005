from sqlalchemy import Column, DateTime, Integer, String, Text

from .db import Base


class TaskRecord(Base):
    __tablename__ = "tasks"

    id = Column(String(64), primary_key=True, index=True)
    # Insertion counter; the list order is seq descending (newest first)
    seq = Column(Integer, nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(32), nullable=False, default="pending")
    priority = Column(String(16), nullable=False, default="medium")
    due_date = Column(String(32), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
